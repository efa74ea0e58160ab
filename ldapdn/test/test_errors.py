"""
Test cases for ldapdn.errors module.
"""

from twisted.trial import unittest

from ldapdn import errors


class TestErrors(unittest.TestCase):
    def testMalformed(self):
        e = errors.MalformedDNError('foo', 'missing "=" after \'foo\'')
        self.assertEqual(str(e),
                         'Malformed distinguished name \'foo\': missing "=" after \'foo\'.')
        self.assertEqual(str(errors.MalformedDNError('foo')),
                         "Malformed distinguished name 'foo'.")

    def testInvalidRdnSpec(self):
        self.assertEqual(str(errors.InvalidRdnSpecError(42)),
                         "Invalid relative distinguished name specification 42.")
        self.assertEqual(str(errors.InvalidRdnSpecError({}, 'empty')),
                         "Invalid relative distinguished name specification {}: empty.")

    def testNotASuffix(self):
        self.assertEqual(str(errors.NotASuffixError('CN=a,DC=org', 'DC=com')),
                         "'CN=a,DC=org' does not end with 'DC=com'.")

    def testInvalidOption(self):
        self.assertEqual(str(errors.InvalidOptionError('casefold', 'sideways')),
                         "Invalid value 'sideways' for option casefold.")

    def testHierarchy(self):
        """
        Every error is a DistinguishedNameError and also the builtin
        exception matching its nature.
        """
        for cls, builtin in ((errors.MalformedDNError, ValueError),
                             (errors.InvalidRdnSpecError, TypeError),
                             (errors.NotASuffixError, ValueError),
                             (errors.InvalidOptionError, ValueError)):
            self.assertTrue(issubclass(cls, errors.DistinguishedNameError))
            self.assertTrue(issubclass(cls, builtin))
