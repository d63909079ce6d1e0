"""
:py:mod:`dcr_codecs.parameter_sets.exp_golomb`: Exp-Golomb codes
=================================================================

H.264 and H.265 parameter sets code most of their fields as ``ue(v)`` values:
a run of N zero bits, a one bit, then an N-bit suffix.
"""

from dcr_codecs.exceptions import MalformedParameterSet, FieldOverflow

__all__ = [
    "read_ue",
    "write_ue",
]

MAX_LEADING_ZERO_BITS = 32
"""
The longest run of leading zeros in a valid ``ue(v)`` code (coding values up to
2**32 - 2).
"""


def read_ue(reader):
    """
    (ITU-T H.265: 9.2) Read an unsigned Exp-Golomb code (``ue(v)``) from a
    :py:class:`~dcr_codecs.bitstream.BitstreamReader` and return an integer.
    """
    leading_zero_bits = 0
    while not reader.read_bit():
        leading_zero_bits += 1
        if leading_zero_bits > MAX_LEADING_ZERO_BITS:
            raise MalformedParameterSet(
                "ue(v) code with more than {} leading zeros".format(
                    MAX_LEADING_ZERO_BITS
                )
            )

    return (1 << leading_zero_bits) - 1 + reader.read_nbits(leading_zero_bits)


def write_ue(writer, value):
    """
    Write an unsigned Exp-Golomb code to a
    :py:class:`~dcr_codecs.bitstream.BitstreamWriter`. The complement of
    :py:func:`read_ue`.
    """
    if value < 0:
        raise FieldOverflow("{} is negative, expected an unsigned value".format(value))

    value += 1
    leading_zero_bits = value.bit_length() - 1

    writer.write_nbits(leading_zero_bits, 0)
    writer.write_nbits(leading_zero_bits + 1, value)
