from zope.interface import Attribute, Interface


class IDistinguishedName(Interface):
    """
    An LDAP distinguished name held as a sequence of relative
    distinguished names, leaf first.

    Every method returns a new object, except L{rename} and L{move} which
    change the DN in place.

    >>> d = DistinguishedName('uid=foo,ou=people,dc=example,dc=org')
    >>> d.parent().asString()
    'OU=people,DC=example,DC=org'
    """

    options = Attribute("DNOptions governing rendering and comparison.")

    rdnSequence = Attribute(
        "List of dicts, one per RDN, mapping attribute type to value. "
        "Assigning to it replaces the whole sequence.")

    def split():
        """Tuple of RelativeDistinguishedName, leaf first."""

    def clone(newSource=None, options=None):
        """
        Independent copy of this DN, optionally with another RDN
        sequence or other options.
        """

    def asString():
        """Render the DN according to its options."""

    def rdn(includeAttribute=False):
        """
        Values of the leaf RDN joined with "+", each prefixed with its
        attribute type when includeAttribute is true.

        >>> DistinguishedName('uid=foo,dc=org').rdn(True)
        'UID=foo'
        """

    def attr():
        """Attribute type(s) of the leaf RDN joined with "+"."""

    def attributes():
        """All attribute types, leaf first."""

    def values():
        """All attribute values, leaf first, parallel to attributes()."""

    def parent():
        """The DN without its leaf RDN. The parent of the root is the root."""

    def isSubordinate(other):
        """Whether this DN is strictly below other."""

    def compare(other):
        """
        -1 when this DN is below other, 1 when other is below this DN,
        0 otherwise.

        Note that 0 covers both equal and unrelated DNs: this is not a
        total order and must not be used for sorting or equality.
        """

    def compareLexical(other):
        """Total order on the rendered form, suitable for sorting."""

    def equal(other):
        """Structural equality under this DN's options."""

    def contains(other):
        """Whether other equals this DN or lies below it."""

    def commonBase(other):
        """Longest run of RDNs shared at the root side of both DNs."""

    def append(other):
        """New DN with the RDNs of other added below the root of this one."""

    def strip(other):
        """
        New DN with the trailing RDNs of other removed.

        @raise NotASuffixError: if this DN does not end with other.
        """

    def rename(newRdn, value=None):
        """Replace the leaf RDN in place. Returns self."""

    def move(base):
        """Replace everything but the leaf RDN in place. Returns self."""

    def pretty(separator='/', transform=None):
        """
        Join the RDN values root first.

        >>> DistinguishedName('cn=a,ou=b,dc=c').pretty()
        'c/b/a'
        """
