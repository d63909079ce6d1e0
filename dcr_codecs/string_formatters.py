r"""
The :py:mod:`dcr_codecs.string_formatters` module contains the 'string
formatters' used when printing records: callables which take a field value and
return a string representation of it.

For example, the :py:class:`Hex` class is used for the profile compatibility
flags of an HEVC record::

    >>> from dcr_codecs.string_formatters import Hex
    >>> compatibility_formatter = Hex(8)
    >>> compatibility_formatter(0x60000000)
    '0x60000000'

.. autofunction:: indent

.. autoclass:: Hex

.. autoclass:: Bool

.. autoclass:: Bytes

.. autoclass:: MultilineList
"""

__all__ = [
    "indent",
    "Hex",
    "Bool",
    "Bytes",
    "MultilineList",
]


def indent(text, prefix="  "):
    """
    Indent every line of 'text' (including blank lines) with 'prefix'.
    """
    return "\n".join(prefix + line for line in text.split("\n"))


class Hex(object):
    """
    Prints integers in upper-case hexadecimal, zero padded to at least
    'num_digits' digits.

    Parameters
    ==========
    num_digits : int
    prefix : str
        Defaults to "0x"
    """

    def __init__(self, num_digits=0, prefix="0x"):
        self.num_digits = num_digits
        self.prefix = prefix

    def __call__(self, number):
        return "{}{}{:0{}X}".format(
            "-" if number < 0 else "",
            self.prefix,
            abs(number),
            self.num_digits,
        )


class Bool(object):
    """
    Formats flags such as ``array_completeness``. Values other than 0/1 (or
    False/True) are shown with their truthiness followed by the actual value::

        >>> Bool()(1)
        'True'
        >>> Bool()(123)
        'True (123)'
    """

    def __call__(self, flag):
        if flag in (0, 1) and isinstance(flag, int):
            return str(bool(flag))
        return "{} ({!s})".format(bool(flag), flag)


class Bytes(object):
    """
    A formatter for :py:class:`bytes` strings such as NAL units. Shows the
    value as '0x42_01_01', truncating to the first 'max_bytes' bytes and
    appending the length for long values::

        >>> Bytes()(b"\x42\x01" + b"\xAA" * 18)
        '0x42_01_AA_AA_AA_AA_AA_AA... (20 bytes)'

    Parameters
    ==========
    prefix : str
    separator : str
        Placed between each byte.
    max_bytes : int or None
        The number of bytes to show before truncating. If None, the value is
        never truncated.
    show_length : int or bool
        If an integer, show the length of the value in brackets when it is at
        least this many bytes long. If a bool, force display (or hiding) of
        the length.
    """

    def __init__(self, prefix="0x", separator="_", max_bytes=8, show_length=8):
        self.prefix = prefix
        self.separator = separator
        self.max_bytes = max_bytes
        self.show_length = show_length

    def __call__(self, b):
        b = bytearray(b)

        shown = b if self.max_bytes is None else b[: self.max_bytes]
        string = self.separator.join("{:02X}".format(n) for n in shown)
        if len(shown) < len(b):
            string += "..."

        if self.show_length is True or (
            self.show_length is not False and len(b) >= self.show_length
        ):
            string += " ({} byte{})".format(len(b), "s" if len(b) != 1 else "")

        return "{}{}".format(self.prefix, string)


class MultilineList(object):
    """
    Formats a list (e.g. the NAL units of an array) as numbered lines, each
    entry passed through 'formatter'. If 'heading' is given, the entries are
    indented beneath it::

        >>> print(MultilineList("NAL units", Bytes())([b"\x40\x01", b"\x42\x01"]))
        NAL units
          0: 0x40_01
          1: 0x42_01

    An empty list prints as ``[]``.
    """

    def __init__(self, heading=None, formatter=str):
        self.heading = heading
        self.formatter = formatter

    def __call__(self, values):
        if not values:
            return "[]"

        body = "\n".join(
            "{}: {}".format(index, self.formatter(value))
            for index, value in enumerate(values)
        )
        if self.heading is None:
            return body
        return self.heading + "\n" + indent(body)
