"""
Test cases for ldapdn.insensitive module.
"""

from twisted.trial import unittest

from ldapdn.insensitive import InsensitiveString


class TestInsensitiveString(unittest.TestCase):
    def testEquality(self):
        s = InsensitiveString("objectClass")
        self.assertTrue(s == "OBJECTCLASS")
        self.assertTrue("objectclass" == s)
        self.assertFalse(s != "objectclass")
        self.assertTrue(s != "cn")

    def testOrdering(self):
        self.assertTrue(InsensitiveString("B") > "a")
        self.assertTrue(InsensitiveString("a") < "B")
        self.assertTrue(InsensitiveString("a") <= "A")
        self.assertTrue(InsensitiveString("a") >= "A")

    def testHash(self):
        self.assertEqual(hash(InsensitiveString("CN")), hash("cn"))
        self.assertEqual({InsensitiveString("CN"): 1}["cn"], 1)

    def testContains(self):
        self.assertIn("CLASS", InsensitiveString("objectClass"))

    def testSlicing(self):
        part = InsensitiveString("objectClass")[6:]
        self.assertIsInstance(part, InsensitiveString)
        self.assertEqual(part, "CLASS")

    def testKeepsOriginalCase(self):
        s = str(InsensitiveString("objectClass"))
        self.assertIs(type(s), str)
        self.assertEqual(s, "objectClass")
