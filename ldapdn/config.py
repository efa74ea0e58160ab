import configparser
import os.path

from twisted.python import log

from ldapdn import rfc4514
from ldapdn.errors import InvalidOptionError
from ldapdn.insensitive import InsensitiveString


class DNOptions(object):
    """
    Options controlling how a DistinguishedName renders and compares.

    DNOptions are immutable; use L{copy} to get a modified instance.

    @ivar casefold: casing applied to attribute types on output, one of
    C{'asis'}, C{'upper'} (the default) or C{'lower'}. Attribute types
    always match case-insensitively whatever this is set to.

    @ivar caseInsensitive: whether attribute values match without regard
    to case. Defaults to True.

    @ivar escapeNonAscii: whether non-ASCII characters in values are
    rendered as hex escapes. Defaults to False.
    """

    _names = ('casefold', 'caseInsensitive', 'escapeNonAscii')

    def __init__(self,
                 casefold=rfc4514.CASEFOLD_UPPER,
                 caseInsensitive=True,
                 escapeNonAscii=False):
        self._casefold = _casefoldPolicy(casefold)
        self._caseInsensitive = _flag('caseInsensitive', caseInsensitive)
        self._escapeNonAscii = _flag('escapeNonAscii', escapeNonAscii)

    @property
    def casefold(self):
        return self._casefold

    @property
    def caseInsensitive(self):
        return self._caseInsensitive

    @property
    def escapeNonAscii(self):
        return self._escapeNonAscii

    def copy(self, **kw):
        for name, value in kw.items():
            if name not in self._names:
                raise InvalidOptionError(name, value)
        for name in self._names:
            if name not in kw:
                kw[name] = getattr(self, name)
        return self.__class__(**kw)

    @classmethod
    def fromConfig(cls, cfg=None, section='dn'):
        """
        Build options from the given section of a loaded configuration,
        falling back to the defaults for anything not set there.
        """
        if cfg is None:
            cfg = loadConfig()
        kw = {}
        if cfg.has_section(section):
            if cfg.has_option(section, 'casefold'):
                kw['casefold'] = cfg.get(section, 'casefold')
            for option, name in (('case-insensitive', 'caseInsensitive'),
                                 ('escape-non-ascii', 'escapeNonAscii')):
                if cfg.has_option(section, option):
                    try:
                        kw[name] = cfg.getboolean(section, option)
                    except ValueError:
                        raise InvalidOptionError(option, cfg.get(section, option))
        return cls(**kw)

    def __eq__(self, other):
        if not isinstance(other, DNOptions):
            return NotImplemented
        return (self.casefold == other.casefold
                and self.caseInsensitive == other.caseInsensitive
                and self.escapeNonAscii == other.escapeNonAscii)

    def __hash__(self):
        return hash((self.casefold, self.caseInsensitive, self.escapeNonAscii))

    def __repr__(self):
        return (self.__class__.__name__
                + '(casefold=' + repr(self.casefold)
                + ', caseInsensitive=' + repr(self.caseInsensitive)
                + ', escapeNonAscii=' + repr(self.escapeNonAscii)
                + ')')


def _casefoldPolicy(value):
    if value is None:
        return rfc4514.CASEFOLD_UPPER
    if isinstance(value, str):
        policy = value.strip().lower()
        # "none" is what Net::LDAP calls it
        if policy == 'none':
            policy = rfc4514.CASEFOLD_ASIS
        if policy in rfc4514.CASEFOLD_POLICIES:
            return policy
    raise InvalidOptionError('casefold', value)


def _flag(name, value):
    if not isinstance(value, bool):
        raise InvalidOptionError(name, value)
    return value


DEFAULTS = {
    'dn': {'casefold': rfc4514.CASEFOLD_UPPER,
           'case-insensitive': 'yes',
           'escape-non-ascii': 'no',
           },
    }

CONFIG_FILES = [
    '/etc/ldapdn/ldapdn.cfg',
    os.path.expanduser('~/.ldapdn/ldapdn.cfg'),
    ]


def loadConfig(configFiles=None):
    """
    Load configuration files.

    Each call returns a freshly read parser; nothing is cached at module
    level.
    """
    x = configparser.ConfigParser()
    x.optionxform = InsensitiveString

    for section, options in DEFAULTS.items():
        x.add_section(section)
        for option, value in options.items():
            x.set(section, option, value)

    if configFiles is None:
        configFiles = CONFIG_FILES
    read = x.read(configFiles)
    if read:
        log.msg('Loaded DN configuration from %s' % ', '.join(read), debug=True)
    return x
