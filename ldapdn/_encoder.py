"""
    Encoding / decoding utilities
"""


def to_unicode(value):
    """
    Converts string to unicode:

    * Decodes value from utf-8 if it is a byte string
    * Otherwise just returns the same value
    """
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value


def is_text(value):
    """
    Whether value is a byte or unicode string.
    """
    return isinstance(value, (str, bytes))
