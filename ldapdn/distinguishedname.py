from collections.abc import Mapping

from twisted.python import log
from zope.interface import implementer

from ldapdn import interfaces, rfc4514
from ldapdn._encoder import to_unicode, is_text
from ldapdn.config import DNOptions
from ldapdn.errors import MalformedDNError, InvalidRdnSpecError, NotASuffixError
from ldapdn.insensitive import InsensitiveString


class LDAPAttributeTypeAndValue(object):
    attributeType = None
    value = None

    def __init__(self, stringValue=None, attributeType=None, value=None):
        if stringValue is None:
            if not is_text(attributeType) or not is_text(value):
                raise InvalidRdnSpecError((attributeType, value),
                                          'attribute type and value must be strings')
            attributeType = rfc4514.decodeText(attributeType).strip()
            value = rfc4514.decodeText(value)
            if not attributeType:
                raise MalformedDNError('%s=%s' % (attributeType, value),
                                       'empty attribute type')
            if not rfc4514.isAttributeType(attributeType):
                raise MalformedDNError('%s=%s' % (attributeType, value),
                                       'invalid attribute type %r' % attributeType)
            self.attributeType = InsensitiveString(attributeType)
            self.value = value
        else:
            assert attributeType is None
            assert value is None

            rdns = rfc4514.explode(stringValue)
            if len(rdns) != 1 or len(rdns[0]) != 1:
                raise MalformedDNError(to_unicode(stringValue),
                                       'expected exactly one attribute=value pair')
            (attributeType, value), = rdns[0]
            self.attributeType = InsensitiveString(attributeType)
            self.value = value

    def getText(self, casefold=rfc4514.CASEFOLD_ASIS, escapeNonAscii=False):
        return rfc4514.implode([[(self.attributeType, self.value)]],
                               casefold=casefold,
                               escapeNonAscii=escapeNonAscii)

    def matchKey(self, caseInsensitive=True):
        """
        Value identifying this pair for matching purposes.
        """
        if caseInsensitive:
            return (self.attributeType.lower(), self.value.lower())
        return (self.attributeType.lower(), self.value)

    def __repr__(self):
        return (self.__class__.__name__
                + '(attributeType='
                + repr(str(self.attributeType))
                + ', value='
                + repr(self.value)
                + ')')

    def __hash__(self):
        return hash(self.matchKey())

    def __eq__(self, other):
        if not isinstance(other, LDAPAttributeTypeAndValue):
            return NotImplemented
        return self.matchKey() == other.matchKey()


class RelativeDistinguishedName(object):
    """
    LDAP Relative Distinguished Name.

    The pairs keep the order they were given in for display, but two
    RDNs match when they hold the same set of pairs in any order.
    """

    attributeTypesAndValues = None

    def __init__(self, magic=None, stringValue=None, attributeTypesAndValues=None):
        if magic is not None:
            assert stringValue is None
            assert attributeTypesAndValues is None
            if isinstance(magic, RelativeDistinguishedName):
                attributeTypesAndValues = magic.split()
            elif is_text(magic):
                stringValue = magic
            elif isinstance(magic, Mapping):
                attributeTypesAndValues = list(magic.items())
            else:
                attributeTypesAndValues = magic

        if stringValue is None:
            if (attributeTypesAndValues is None
                    or is_text(attributeTypesAndValues)
                    or not hasattr(attributeTypesAndValues, '__iter__')):
                raise InvalidRdnSpecError(attributeTypesAndValues)
            self.attributeTypesAndValues = tuple(
                [_toAttributeTypeAndValue(x) for x in attributeTypesAndValues])
        else:
            rdns = rfc4514.explode(stringValue)
            if len(rdns) != 1:
                raise InvalidRdnSpecError(to_unicode(stringValue),
                                          'expected exactly one RDN, got %d' % len(rdns))
            self.attributeTypesAndValues = tuple(
                [LDAPAttributeTypeAndValue(attributeType=a, value=v)
                 for a, v in rdns[0]])

        if not self.attributeTypesAndValues:
            raise InvalidRdnSpecError(magic if magic is not None else attributeTypesAndValues,
                                      'an RDN needs at least one attribute')

    def split(self):
        return self.attributeTypesAndValues

    def pairs(self):
        return [(x.attributeType, x.value) for x in self.attributeTypesAndValues]

    def attributeTypes(self):
        return [x.attributeType for x in self.attributeTypesAndValues]

    def values(self):
        return [x.value for x in self.attributeTypesAndValues]

    def asDict(self):
        return dict([(str(a), v) for a, v in self.pairs()])

    def getText(self, casefold=rfc4514.CASEFOLD_ASIS, escapeNonAscii=False):
        return rfc4514.implode([self.pairs()],
                               casefold=casefold,
                               escapeNonAscii=escapeNonAscii)

    def matchKey(self, caseInsensitive=True):
        return frozenset([x.matchKey(caseInsensitive)
                          for x in self.attributeTypesAndValues])

    def __repr__(self):
        return (self.__class__.__name__
                + '(attributeTypesAndValues='
                + repr(self.attributeTypesAndValues)
                + ')')

    def __hash__(self):
        return hash(self.matchKey())

    def __eq__(self, other):
        if not isinstance(other, RelativeDistinguishedName):
            return NotImplemented
        return self.matchKey() == other.matchKey()

    def count(self):
        return len(self.attributeTypesAndValues)


def _toAttributeTypeAndValue(spec):
    if isinstance(spec, LDAPAttributeTypeAndValue):
        return spec
    if isinstance(spec, (list, tuple)) and len(spec) == 2:
        return LDAPAttributeTypeAndValue(attributeType=spec[0], value=spec[1])
    raise InvalidRdnSpecError(spec, 'expected an (attributeType, value) pair')


def toRDN(spec):
    """
    Normalize one RDN given as a RelativeDistinguishedName, a mapping of
    attribute types to values, a string such as C{"uid=foo"} or a list
    of C{(attributeType, value)} pairs.
    """
    if isinstance(spec, RelativeDistinguishedName):
        return spec
    if is_text(spec) or isinstance(spec, Mapping):
        return RelativeDistinguishedName(spec)
    if isinstance(spec, (list, tuple)):
        # a bare ('cn', 'foo') pair
        if len(spec) == 2 and is_text(spec[0]) and is_text(spec[1]):
            spec = [spec]
        return RelativeDistinguishedName(attributeTypesAndValues=spec)
    raise InvalidRdnSpecError(spec)


def toRDNs(spec):
    """
    Normalize anything accepted where a DN is expected into a tuple of
    RelativeDistinguishedName, leaf first.

    Accepted are another DistinguishedName, a DN string, a single RDN
    (RelativeDistinguishedName or mapping) and a list of RDNs in any of
    the forms understood by L{toRDN}.

    @raise MalformedDNError: when a DN string does not parse.
    @raise InvalidRdnSpecError: when spec has none of these shapes.
    """
    if isinstance(spec, DistinguishedName):
        return spec.split()
    if isinstance(spec, (RelativeDistinguishedName, Mapping)):
        return (toRDN(spec),)
    if is_text(spec):
        try:
            rdns = rfc4514.explode(spec)
        except MalformedDNError as e:
            log.msg('Rejected DN %r: %s' % (e.dn, e.reason), debug=True)
            raise
        return tuple([RelativeDistinguishedName(attributeTypesAndValues=rdn)
                      for rdn in rdns])
    if isinstance(spec, (list, tuple)):
        return tuple([toRDN(x) for x in spec])
    raise InvalidRdnSpecError(spec)


@implementer(interfaces.IDistinguishedName)
class DistinguishedName(object):
    """
    LDAP Distinguished Name.

    A DN is a sequence of RDNs, leaf first. The empty DN is the root.

    Only L{rename} and L{move} modify a DN; everything else returns a new
    instance carrying the same options.

    Operators map onto the named methods: C{==} is L{equal} between
    DNs, C{<} is L{isSubordinate}, C{&} is L{commonBase}, C{-} is
    L{strip} and C{+} is L{append}. These comparisons are a partial order, so sort DNs
    with C{key=DistinguishedName.lexicalKey} or
    C{key=functools.cmp_to_key(DistinguishedName.compareLexical)}.
    """

    listOfRDNs = ()
    options = None

    def __init__(self, source=None, options=None, **optionOverrides):
        if options is None:
            if isinstance(source, DistinguishedName):
                options = source.options
            else:
                options = DNOptions()
        if optionOverrides:
            options = options.copy(**optionOverrides)
        self.options = options
        if source is not None:
            self.listOfRDNs = toRDNs(source)

    def _derive(self, listOfRDNs):
        r = self.__class__(options=self.options)
        r.listOfRDNs = tuple(listOfRDNs)
        return r

    def clone(self, newSource=None, options=None):
        if options is None:
            options = self.options
        if newSource is None:
            r = self.__class__(options=options)
            r.listOfRDNs = self.listOfRDNs
            return r
        return self.__class__(newSource, options=options)

    __copy__ = clone

    def __deepcopy__(self, memo):
        return self.clone()

    def split(self):
        return self.listOfRDNs

    @property
    def rdnSequence(self):
        return [rdn.asDict() for rdn in self.listOfRDNs]

    @rdnSequence.setter
    def rdnSequence(self, value):
        self.listOfRDNs = toRDNs(value)

    def asString(self):
        return rfc4514.implode([rdn.pairs() for rdn in self.listOfRDNs],
                               casefold=self.options.casefold,
                               escapeNonAscii=self.options.escapeNonAscii)

    __str__ = asString

    def _fold(self, attributeType):
        return rfc4514.foldCase(attributeType, self.options.casefold)

    def rdn(self, includeAttribute=False):
        if not self.listOfRDNs:
            return ''
        leaf = self.listOfRDNs[0]
        if includeAttribute:
            return leaf.getText(casefold=self.options.casefold,
                                escapeNonAscii=self.options.escapeNonAscii)
        return '+'.join(leaf.values())

    def attr(self):
        if not self.listOfRDNs:
            return ''
        return '+'.join([self._fold(a) for a in self.listOfRDNs[0].attributeTypes()])

    def attributes(self):
        return [self._fold(a)
                for rdn in self.listOfRDNs
                for a in rdn.attributeTypes()]

    def values(self):
        return [v for rdn in self.listOfRDNs for v in rdn.values()]

    def getDomainName(self):
        domainParts = []
        for rdn in reversed(self.listOfRDNs):
            if rdn.count() != 1:
                break
            attributeTypeAndValue = rdn.split()[0]
            if attributeTypeAndValue.attributeType != 'DC':
                break
            domainParts.insert(0, attributeTypeAndValue.value)
        if domainParts:
            return '.'.join(domainParts)
        else:
            return None

    def _sameRDN(self, mine, its):
        caseInsensitive = self.options.caseInsensitive
        return mine.matchKey(caseInsensitive) == its.matchKey(caseInsensitive)

    def _sameRDNs(self, mine, its):
        if len(mine) != len(its):
            return False
        for m, i in zip(mine, its):
            if not self._sameRDN(m, i):
                return False
        return True

    def _endsWith(self, its):
        mine = self.listOfRDNs
        if len(its) > len(mine):
            return False
        return self._sameRDNs(mine[len(mine) - len(its):], its)

    def parent(self):
        return self._derive(self.listOfRDNs[1:])

    def isSubordinate(self, other):
        its = toRDNs(other)
        if not its or len(self.listOfRDNs) <= len(its):
            return False
        return self._endsWith(its)

    def compare(self, other):
        """
        Compare the position of two DNs in the tree.

        Returns -1 if this DN is subordinate to other, 1 if other is
        subordinate to this DN, and 0 otherwise. Beware that 0 means
        either equal or unrelated; this is not a total order. Use
        L{equal} to test equality and L{compareLexical} to sort.
        """
        if not isinstance(other, DistinguishedName):
            other = self.clone(other)
        if self.isSubordinate(other):
            return -1
        if other.isSubordinate(self):
            return 1
        return 0

    def equal(self, other):
        return self._sameRDNs(self.listOfRDNs, toRDNs(other))

    def contains(self, other):
        """Does the tree rooted at DN contain or equal the other DN."""
        its = toRDNs(other)
        if len(its) < len(self.listOfRDNs):
            return False
        mine = self.listOfRDNs
        return self._sameRDNs(its[len(its) - len(mine):], mine)

    def commonBase(self, other):
        its = toRDNs(other)
        mine = self.listOfRDNs
        common = 0
        while (common < len(mine) and common < len(its)
               and self._sameRDN(mine[-1 - common], its[-1 - common])):
            common += 1
        return self._derive(mine[len(mine) - common:])

    def append(self, other):
        return self._derive(self.listOfRDNs + toRDNs(other))

    def strip(self, other):
        its = toRDNs(other)
        if not self._endsWith(its):
            raise NotASuffixError(self.asString(), self._derive(its).asString())
        return self._derive(self.listOfRDNs[:len(self.listOfRDNs) - len(its)])

    def rename(self, newRdn, value=None):
        """
        Replace the leaf RDN, in place.

        @param newRdn: a mapping such as C{{'uid': 'foo'}}, an RDN string
        such as C{'uid=foo'}, a RelativeDistinguishedName, or an attribute
        type when value is given.

        @return: self
        """
        if value is not None:
            newRdn = [(newRdn, value)]
        rdn = toRDN(newRdn)
        old = self.asString()
        self.listOfRDNs = (rdn,) + self.listOfRDNs[1:]
        log.msg('Renamed %r to %r' % (old, self.asString()), debug=True)
        return self

    def move(self, base):
        """
        Put the leaf RDN below base, in place.

        @return: self
        """
        its = toRDNs(base)
        old = self.asString()
        self.listOfRDNs = self.listOfRDNs[:1] + its
        log.msg('Moved %r to %r' % (old, self.asString()), debug=True)
        return self

    def pretty(self, separator='/', transform=None):
        parts = ['+'.join(rdn.values()) for rdn in reversed(self.listOfRDNs)]
        if transform is not None:
            parts = [transform(x) for x in parts]
        return separator.join(parts)

    def lexicalKey(self):
        """
        Rendered form with attribute types lowercased, values lowercased
        when matching is case-insensitive, and the pairs of each RDN
        sorted.
        """
        caseInsensitive = self.options.caseInsensitive
        return ','.join([
            '+'.join(sorted(set(['%s=%s' % (a.lower(),
                                            rfc4514.escape(v.lower() if caseInsensitive else v))
                                 for a, v in rdn.pairs()])))
            for rdn in self.listOfRDNs])

    def compareLexical(self, other):
        if not isinstance(other, DistinguishedName) or other.options != self.options:
            other = self.clone(other)
        mine = self.lexicalKey()
        its = other.lexicalKey()
        return (mine > its) - (mine < its)

    def __repr__(self):
        return (self.__class__.__name__
                + '('
                + repr(self.asString())
                + ')')

    def __len__(self):
        return len(self.listOfRDNs)

    def __hash__(self):
        return hash(tuple([rdn.matchKey() for rdn in self.listOfRDNs]))

    def _operand(self, other):
        if isinstance(other, DistinguishedName):
            return other
        if is_text(other):
            return self.clone(other)
        return None

    def __eq__(self, other):
        # Strings go through equal(); they cannot hash like a DN.
        if not isinstance(other, DistinguishedName):
            return NotImplemented
        return self.equal(other)

    def __ne__(self, other):
        r = self.__eq__(other)
        if r is NotImplemented:
            return r
        return not r

    def __lt__(self, other):
        other = self._operand(other)
        if other is None:
            return NotImplemented
        return self.isSubordinate(other)

    def __gt__(self, other):
        other = self._operand(other)
        if other is None:
            return NotImplemented
        return other.isSubordinate(self)

    def __le__(self, other):
        other = self._operand(other)
        if other is None:
            return NotImplemented
        return self.isSubordinate(other) or self.equal(other)

    def __ge__(self, other):
        other = self._operand(other)
        if other is None:
            return NotImplemented
        return other.isSubordinate(self) or self.equal(other)

    def __and__(self, other):
        return self.commonBase(other)

    def __sub__(self, other):
        return self.strip(other)

    def __add__(self, other):
        return self.append(other)
