import pytest

from io import BytesIO, RawIOBase

from dcr_codecs.bitstream import BitstreamWriter

from dcr_codecs.parameter_sets import write_ue


def add_emulation_prevention_bytes(rbsp):
    """
    Insert an emulation_prevention_three_byte wherever two zero bytes are
    followed by a byte of 0x03 or less.
    """
    out = bytearray()
    zeros = 0
    for byte in bytearray(rbsp):
        if zeros >= 2 and byte <= 0x03:
            out.append(0x03)
            zeros = 0
        out.append(byte)
        zeros = zeros + 1 if byte == 0x00 else 0
    return bytes(out)


def make_hevc_sps(
    general_profile_space=0,
    general_tier_flag=False,
    general_profile_idc=1,
    general_profile_compatibility_flags=0x60000000,
    general_constraint_indicator_flags=0xB00000000000,
    general_level_idc=93,
    sps_max_sub_layers_minus1=0,
    chroma_format_idc=1,
    pic_width_in_luma_samples=1920,
    pic_height_in_luma_samples=1080,
    conformance_window=None,
    bit_depth_luma_minus8=0,
    bit_depth_chroma_minus8=0,
    nal_unit_type=33,
):
    """
    Produce an HEVC SPS NAL unit with the specified field values. The SPS is
    cut short after the bit depth fields (followed by RBSP trailing bits).
    """
    f = BytesIO()
    w = BitstreamWriter(f)

    # nal_unit_header
    w.write_nbits(1, 0)
    w.write_nbits(6, nal_unit_type)
    w.write_nbits(6, 0)
    w.write_nbits(3, 1)

    w.write_nbits(4, 0)  # sps_video_parameter_set_id
    w.write_nbits(3, sps_max_sub_layers_minus1)
    w.write_bit(1)  # sps_temporal_id_nesting_flag

    # profile_tier_level
    w.write_nbits(2, general_profile_space)
    w.write_bit(general_tier_flag)
    w.write_nbits(5, general_profile_idc)
    w.write_nbits(32, general_profile_compatibility_flags)
    w.write_nbits(48, general_constraint_indicator_flags)
    w.write_nbits(8, general_level_idc)
    for _ in range(sps_max_sub_layers_minus1):
        w.write_bit(1)  # sub_layer_profile_present_flag
        w.write_bit(1)  # sub_layer_level_present_flag
    if sps_max_sub_layers_minus1 > 0:
        for _ in range(sps_max_sub_layers_minus1, 8):
            w.write_nbits(2, 0)
    for _ in range(sps_max_sub_layers_minus1):
        w.write_nbits(88, (1 << 88) - 1)
        w.write_nbits(8, 0xFF)

    write_ue(w, 0)  # sps_seq_parameter_set_id
    write_ue(w, chroma_format_idc)
    if chroma_format_idc == 3:
        w.write_bit(0)  # separate_colour_plane_flag
    write_ue(w, pic_width_in_luma_samples)
    write_ue(w, pic_height_in_luma_samples)
    if conformance_window is None:
        w.write_bit(0)
    else:
        w.write_bit(1)
        for offset in conformance_window:
            write_ue(w, offset)
    write_ue(w, bit_depth_luma_minus8)
    write_ue(w, bit_depth_chroma_minus8)

    # rbsp_trailing_bits
    w.write_bit(1)
    while w.tell()[1] != 7:
        w.write_bit(0)

    return add_emulation_prevention_bytes(f.getvalue())


@pytest.fixture
def sps_factory():
    return make_hevc_sps


# Minimal (not decodable) VPS and PPS NAL units with correct headers
VPS = b"\x40\x01\x0C\x01\xFF"
PPS = b"\x44\x01\xC1\x73\xD1\x89"


@pytest.fixture
def vps():
    return VPS


@pytest.fixture
def pps():
    return PPS


class TricklingFile(RawIOBase):
    """
    An unbuffered, unseekable binary file which returns at most 'chunk_size'
    bytes per read, as a pipe or socket may.
    """

    def __init__(self, data, chunk_size=4):
        self._data = bytes(data)
        self._position = 0
        self._chunk_size = chunk_size

    def readable(self):
        return True

    def readinto(self, buffer):
        n = min(len(buffer), self._chunk_size, len(self._data) - self._position)
        buffer[:n] = self._data[self._position : self._position + n]
        self._position += n
        return n


@pytest.fixture
def trickling_file():
    return TricklingFile
