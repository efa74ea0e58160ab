"""
Exceptions raised while building or manipulating distinguished names.
"""


class DistinguishedNameError(Exception):
    """Base class for all ldapdn errors."""


class MalformedDNError(DistinguishedNameError, ValueError):
    """
    A distinguished name could not be decomposed into a valid sequence of
    relative distinguished names.
    """

    def __init__(self, dn, reason=None):
        DistinguishedNameError.__init__(self)
        self.dn = dn
        self.reason = reason

    def __str__(self):
        if self.reason:
            return "Malformed distinguished name %r: %s." % (self.dn, self.reason)
        return "Malformed distinguished name %r." % (self.dn,)


class InvalidRdnSpecError(DistinguishedNameError, TypeError):
    """
    A value given as an RDN or as a sequence of RDNs has none of the
    accepted shapes.
    """

    def __init__(self, spec, reason=None):
        DistinguishedNameError.__init__(self)
        self.spec = spec
        self.reason = reason

    def __str__(self):
        r = "Invalid relative distinguished name specification %r" % (self.spec,)
        if self.reason:
            r += ": %s" % self.reason
        return r + "."


class NotASuffixError(DistinguishedNameError, ValueError):
    """Strip was asked to remove a base the DN does not end with."""

    def __init__(self, dn, suffix):
        DistinguishedNameError.__init__(self)
        self.dn = dn
        self.suffix = suffix

    def __str__(self):
        return "%r does not end with %r." % (self.dn, self.suffix)


class InvalidOptionError(DistinguishedNameError, ValueError):
    """Unknown option name or unsupported option value."""

    def __init__(self, name, value):
        DistinguishedNameError.__init__(self)
        self.name = name
        self.value = value

    def __str__(self):
        return "Invalid value %r for option %s." % (self.value, self.name)
