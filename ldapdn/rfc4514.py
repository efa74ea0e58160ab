"""RFC 4514: String Representation of Distinguished Names

https://tools.ietf.org/html/rfc4514

The parser also accepts the RFC 2253 leftovers still found in the wild:
``;`` as an RDN separator, double-quoted values and ``OID.`` prefixed
attribute types. Rendering always produces the RFC 4514 form.
"""

import re

from ldapdn._encoder import to_unicode
from ldapdn.errors import MalformedDNError

# Note that RFC 4514 does not require "=" to be escaped in values, but
# slapd refuses to accept unescaped "=" in RDN values, so we always
# escape it on output and accept it either way on input.
escapedChars = ',+"\\<>;='
escapedChars_leading = ' #'
escapedChars_trailing = ' '

# Characters allowed after a backslash, besides a pair of hex digits.
specialChars = escapedChars + ' #'
hexDigits = '0123456789abcdefABCDEF'

rdnSeparators = ',;'
valueSeparators = rdnSeparators + '+'

CASEFOLD_ASIS = 'asis'
CASEFOLD_UPPER = 'upper'
CASEFOLD_LOWER = 'lower'
CASEFOLD_POLICIES = (CASEFOLD_ASIS, CASEFOLD_UPPER, CASEFOLD_LOWER)

_attributeType = re.compile(r'(?:[A-Za-z][A-Za-z0-9-]*|[0-9]+(?:\.[0-9]+)*)\Z')
_oidPrefix = re.compile(r'\Aoid\.(?=[0-9])', re.IGNORECASE)


def decodeText(s):
    """
    Text form of s, decoding UTF-8 bytes.

    @raise MalformedDNError: when s is bytes that are not valid UTF-8.
    """
    try:
        return to_unicode(s)
    except UnicodeDecodeError:
        raise MalformedDNError(s, 'not valid UTF-8')


def isAttributeType(s):
    """Whether s is a valid descr or numericoid."""
    return _attributeType.match(s) is not None


def foldCase(s, casefold):
    if casefold == CASEFOLD_UPPER:
        return s.upper()
    if casefold == CASEFOLD_LOWER:
        return s.lower()
    return str(s)


def escape(s, escapeNonAscii=False):
    r = ''
    r_trailer = ''

    if s and s[0] in escapedChars_leading:
        r = '\\' + s[0]
        s = s[1:]

    if s and s[-1] in escapedChars_trailing:
        r_trailer = '\\' + s[-1]
        s = s[:-1]

    for c in s:
        if c in escapedChars:
            r = r + '\\' + c
        elif ord(c) <= 31 or ord(c) == 127:
            r = r + '\\%02X' % ord(c)
        elif escapeNonAscii and ord(c) > 127:
            r = r + ''.join(['\\%02X' % b for b in c.encode('utf-8')])
        else:
            r = r + c

    return r + r_trailer


def unescape(s):
    """
    Decode a single escaped attribute value.

    @raise MalformedDNError: when the value contains an invalid escape
    sequence or unescaped separators.
    """
    s = decodeText(s)
    parser = _Parser(s)
    value = parser.parseValue(separators='')
    if not parser.atEnd():
        parser.fail('unexpected %r in attribute value' % parser.peek())
    return value


def explode(s):
    """
    Split a DN string into its relative distinguished names.

    @param s: the DN, as text or UTF-8 encoded bytes.

    @return: list of RDNs, leaf first, each RDN a list of
    C{(attributeType, value)} tuples with the value unescaped.

    @raise MalformedDNError: when s is not a valid DN.
    """
    s = decodeText(s)
    if not s.strip():
        return []
    return _Parser(s).parseDN()


def implode(rdns, casefold=CASEFOLD_ASIS, escapeNonAscii=False):
    """
    Inverse of L{explode}: render RDNs given as lists of
    C{(attributeType, value)} tuples.
    """
    return ','.join([
        '+'.join(['%s=%s' % (foldCase(attributeType, casefold),
                             escape(value, escapeNonAscii))
                  for attributeType, value in rdn])
        for rdn in rdns])


class _Parser(object):
    def __init__(self, text):
        self.text = text
        self.pos = 0

    def fail(self, reason):
        raise MalformedDNError(self.text, reason)

    def atEnd(self):
        return self.pos >= len(self.text)

    def peek(self):
        return self.text[self.pos:self.pos + 1]

    def skipSpaces(self):
        while self.peek() == ' ':
            self.pos += 1

    def parseDN(self):
        rdns = [self.parseRDN()]
        while not self.atEnd():
            # parseRDN only returns at the end or on an RDN separator
            self.pos += 1
            rdns.append(self.parseRDN())
        return rdns

    def parseRDN(self):
        pairs = [self.parseAttributeTypeAndValue()]
        while self.peek() == '+':
            self.pos += 1
            pairs.append(self.parseAttributeTypeAndValue())
        if not self.atEnd() and self.peek() not in rdnSeparators:
            self.fail('unexpected %r after attribute value' % self.peek())
        return pairs

    def parseAttributeTypeAndValue(self):
        self.skipSpaces()
        start = self.pos
        while not self.atEnd() and self.peek() not in '=' + valueSeparators:
            self.pos += 1
        attributeType = self.text[start:self.pos].strip()

        if self.peek() != '=':
            if not attributeType:
                self.fail('empty relative distinguished name at offset %d' % start)
            self.fail('missing "=" after %r' % attributeType)
        if not attributeType:
            self.fail('empty attribute type at offset %d' % start)

        attributeType = _oidPrefix.sub('', attributeType, count=1)
        if not isAttributeType(attributeType):
            self.fail('invalid attribute type %r' % attributeType)

        self.pos += 1
        return attributeType, self.parseValue()

    def parseValue(self, separators=valueSeparators):
        self.skipSpaces()
        if self.peek() == '"':
            value = self.parseQuotedValue()
        elif self.peek() == '#':
            value = self.parseHexString()
        else:
            return self.parseStringValue(separators)

        self.skipSpaces()
        if not self.atEnd() and self.peek() not in separators:
            self.fail('unexpected %r after attribute value' % self.peek())
        return value

    def parseStringValue(self, separators):
        # (char, escaped) pairs, so that only unescaped trailing spaces
        # get dropped
        chars = []
        pending = bytearray()

        while not self.atEnd():
            c = self.peek()
            if c in separators:
                break
            if c == '\\':
                self.parseEscape(pending, chars)
                continue
            self.flushHex(pending, chars)
            if c in '"<>\x00':
                self.fail('unescaped %r in attribute value' % c)
            chars.append((c, False))
            self.pos += 1
        self.flushHex(pending, chars)

        while chars and chars[-1] == (' ', False):
            chars.pop()
        return ''.join([c for c, escaped in chars])

    def parseQuotedValue(self):
        chars = []
        pending = bytearray()
        start = self.pos
        self.pos += 1

        while True:
            if self.atEnd():
                self.fail('unbalanced quote at offset %d' % start)
            c = self.peek()
            if c == '"':
                self.pos += 1
                break
            if c == '\\':
                self.parseEscape(pending, chars)
            else:
                self.flushHex(pending, chars)
                chars.append((c, False))
                self.pos += 1
        self.flushHex(pending, chars)
        return ''.join([c for c, escaped in chars])

    def parseHexString(self):
        start = self.pos
        self.pos += 1
        while not self.atEnd() and self.peek() in hexDigits:
            self.pos += 1
        value = self.text[start:self.pos]
        if len(value) < 3 or len(value) % 2 != 1:
            self.fail('invalid hex string %r' % value)
        return value

    def parseEscape(self, pending, chars):
        """
        Consume one backslash escape. Hex pairs accumulate in pending,
        so that multi-byte UTF-8 sequences decode as a whole.
        """
        nxt = self.text[self.pos + 1:self.pos + 3]
        if len(nxt) == 2 and nxt[0] in hexDigits and nxt[1] in hexDigits:
            pending.append(int(nxt, 16))
            self.pos += 3
            return

        self.flushHex(pending, chars)
        if not nxt:
            self.fail('dangling escape at end of value')
        if nxt[0] not in specialChars:
            self.fail('invalid escape sequence "\\%s"' % nxt[0])
        chars.append((nxt[0], True))
        self.pos += 2

    def flushHex(self, pending, chars):
        if not pending:
            return
        try:
            decoded = bytes(pending).decode('utf-8')
        except UnicodeDecodeError:
            self.fail('hex escapes are not valid UTF-8')
        del pending[:]
        chars.extend([(c, True) for c in decoded])
