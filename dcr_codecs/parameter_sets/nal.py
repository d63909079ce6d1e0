"""
HEVC NAL unit framing helpers (ITU-T H.265, 7.3.1).
"""

from io import BytesIO

from dcr_codecs.fixeddict import fixeddict, Entry

from dcr_codecs.string_formatters import Hex

from dcr_codecs.exceptions import Truncated, MalformedParameterSet

from dcr_codecs.bitstream import BitstreamReader

from dcr_codecs.parameter_sets.constants import HEVCNALUnitTypes

__all__ = [
    "HEVCNALUnitHeader",
    "read_nal_unit_header",
    "parse_hevc_nal_unit_header",
    "remove_emulation_prevention_bytes",
]


HEVCNALUnitHeader = fixeddict(
    "HEVCNALUnitHeader",
    Entry("forbidden_zero_bit", help_type="int"),
    Entry(
        "nal_unit_type",
        enum=HEVCNALUnitTypes,
        formatter=Hex(2),
        help_type="int",
    ),
    Entry("nuh_layer_id", help_type="int"),
    Entry("nuh_temporal_id_plus1", help_type="int"),
    help="""
        (7.3.1.2) The two byte header at the start of every HEVC NAL unit.
    """,
)


def read_nal_unit_header(reader):
    """
    (7.3.1.2) Read a NAL unit header from a
    :py:class:`~dcr_codecs.bitstream.BitstreamReader`.
    """
    return HEVCNALUnitHeader(
        forbidden_zero_bit=reader.read_bit(),
        nal_unit_type=reader.read_nbits(6),
        nuh_layer_id=reader.read_nbits(6),
        nuh_temporal_id_plus1=reader.read_nbits(3),
    )


def parse_hevc_nal_unit_header(nal_unit):
    """
    Parse the header of the NAL unit in the :py:class:`bytes` 'nal_unit',
    returning a :py:class:`HEVCNALUnitHeader`.

    Raises :py:exc:`~dcr_codecs.exceptions.MalformedParameterSet` if the NAL
    unit is shorter than two bytes.
    """
    try:
        return read_nal_unit_header(BitstreamReader(BytesIO(nal_unit)))
    except Truncated as e:
        raise MalformedParameterSet("incomplete NAL unit header ({})".format(e))


def remove_emulation_prevention_bytes(nal_unit):
    """
    (7.4.2) Remove every ``emulation_prevention_three_byte`` (a 0x03 byte
    following two 0x00 bytes) from a NAL unit.

    Example::

        >>> remove_emulation_prevention_bytes(b"\\x00\\x00\\x03\\x01")
        b'\\x00\\x00\\x01'
    """
    out = bytearray()
    zeros = 0
    for byte in bytearray(nal_unit):
        if zeros >= 2 and byte == 0x03:
            zeros = 0
            continue

        if byte == 0x00:
            zeros += 1
        else:
            zeros = 0

        out.append(byte)

    return bytes(out)
