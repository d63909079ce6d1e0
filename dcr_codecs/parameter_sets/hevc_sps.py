"""
A partial parser for HEVC sequence parameter sets (ITU-T H.265, 7.3.2.2).

Only the fields up to and including ``bit_depth_chroma_minus8`` are parsed:
these include everything needed to fill in an HEVC decoder configuration
record (see :py:func:`dcr_codecs.records.autofill.autofill_hevc_record`).

.. autofunction:: parse_hevc_sps

.. autoclass:: HEVCSequenceParameterSet
"""

import logging

from io import BytesIO

from dcr_codecs.fixeddict import fixeddict, Entry

from dcr_codecs.string_formatters import Hex, Bool

from dcr_codecs.exceptions import Truncated, MalformedParameterSet

from dcr_codecs.bitstream import BitstreamReader

from dcr_codecs.parameter_sets.constants import HEVCNALUnitTypes, HEVCProfiles

from dcr_codecs.parameter_sets.nal import (
    read_nal_unit_header,
    remove_emulation_prevention_bytes,
)

from dcr_codecs.parameter_sets.exp_golomb import read_ue

__all__ = [
    "HEVCSequenceParameterSet",
    "parse_hevc_sps",
]


HEVCSequenceParameterSet = fixeddict(
    "HEVCSequenceParameterSet",
    Entry("nal_unit_header", help_type=":py:class:`HEVCNALUnitHeader`"),
    Entry("sps_video_parameter_set_id", help_type="int"),
    Entry("sps_max_sub_layers_minus1", help_type="int"),
    Entry("sps_temporal_id_nesting_flag", formatter=Bool(), help_type="bool"),
    Entry("general_profile_space", help_type="int"),
    Entry("general_tier_flag", formatter=Bool(), help_type="bool"),
    Entry("general_profile_idc", enum=HEVCProfiles, help_type="int"),
    Entry("general_profile_compatibility_flags", formatter=Hex(8), help_type="int"),
    Entry("general_constraint_indicator_flags", formatter=Hex(12), help_type="int"),
    Entry("general_level_idc", help_type="int"),
    Entry("sps_seq_parameter_set_id", help_type="int"),
    Entry("chroma_format_idc", help_type="int"),
    Entry("separate_colour_plane_flag", formatter=Bool(), help_type="bool"),
    Entry("pic_width_in_luma_samples", help_type="int"),
    Entry("pic_height_in_luma_samples", help_type="int"),
    Entry("conformance_window_flag", formatter=Bool(), help_type="bool"),
    Entry("conf_win_left_offset", help_type="int"),
    Entry("conf_win_right_offset", help_type="int"),
    Entry("conf_win_top_offset", help_type="int"),
    Entry("conf_win_bottom_offset", help_type="int"),
    Entry("bit_depth_luma_minus8", help_type="int"),
    Entry("bit_depth_chroma_minus8", help_type="int"),
    help="""
        (7.3.2.2) The leading fields of a ``seq_parameter_set_rbsp``.
    """,
)


def profile_tier_level(reader, sps, max_sub_layers_minus1):
    """
    (7.3.3) Read a ``profile_tier_level(1, sps_max_sub_layers_minus1)``
    structure. The general profile, tier and level values are stored in 'sps';
    sub-layer values are skipped.
    """
    sps["general_profile_space"] = reader.read_nbits(2)
    sps["general_tier_flag"] = bool(reader.read_bit())
    sps["general_profile_idc"] = reader.read_nbits(5)
    sps["general_profile_compatibility_flags"] = reader.read_nbits(32)
    sps["general_constraint_indicator_flags"] = reader.read_nbits(48)
    sps["general_level_idc"] = reader.read_nbits(8)

    sub_layer_flags = [
        (reader.read_bit(), reader.read_bit()) for _ in range(max_sub_layers_minus1)
    ]

    if max_sub_layers_minus1 > 0:
        for _ in range(max_sub_layers_minus1, 8):
            reader.read_nbits(2)  # reserved_zero_2bits

    for profile_present, level_present in sub_layer_flags:
        if profile_present:
            # Sub-layer profile space, tier, idc, compatibility and
            # constraint flags
            reader.read_nbits(88)
        if level_present:
            reader.read_nbits(8)  # sub_layer_level_idc


def parse_hevc_sps(nal_unit):
    """
    Parse the leading fields of an HEVC SPS NAL unit.

    Parameters
    ==========
    nal_unit : :py:class:`bytes`
        A complete SPS NAL unit (including its two byte header) as stored in
        a decoder configuration record. Emulation prevention bytes are
        removed before parsing.

    Returns
    =======
    sps : :py:class:`HEVCSequenceParameterSet`

    Raises
    ======
    :py:exc:`~dcr_codecs.exceptions.MalformedParameterSet`
        If the NAL unit is not an SPS or ends before all fields were read.
    """
    reader = BitstreamReader(BytesIO(remove_emulation_prevention_bytes(nal_unit)))
    sps = HEVCSequenceParameterSet()

    try:
        sps["nal_unit_header"] = read_nal_unit_header(reader)
        nal_unit_type = sps["nal_unit_header"]["nal_unit_type"]
        if nal_unit_type != HEVCNALUnitTypes.sps:
            raise MalformedParameterSet(
                "expected an SPS NAL unit (type {}), got type {}".format(
                    int(HEVCNALUnitTypes.sps), nal_unit_type
                )
            )

        sps["sps_video_parameter_set_id"] = reader.read_nbits(4)
        max_sub_layers_minus1 = reader.read_nbits(3)
        sps["sps_max_sub_layers_minus1"] = max_sub_layers_minus1
        sps["sps_temporal_id_nesting_flag"] = bool(reader.read_bit())

        profile_tier_level(reader, sps, max_sub_layers_minus1)

        sps["sps_seq_parameter_set_id"] = read_ue(reader)
        sps["chroma_format_idc"] = read_ue(reader)
        if sps["chroma_format_idc"] == 3:
            sps["separate_colour_plane_flag"] = bool(reader.read_bit())

        sps["pic_width_in_luma_samples"] = read_ue(reader)
        sps["pic_height_in_luma_samples"] = read_ue(reader)

        sps["conformance_window_flag"] = bool(reader.read_bit())
        if sps["conformance_window_flag"]:
            sps["conf_win_left_offset"] = read_ue(reader)
            sps["conf_win_right_offset"] = read_ue(reader)
            sps["conf_win_top_offset"] = read_ue(reader)
            sps["conf_win_bottom_offset"] = read_ue(reader)

        sps["bit_depth_luma_minus8"] = read_ue(reader)
        sps["bit_depth_chroma_minus8"] = read_ue(reader)
    except Truncated as e:
        raise MalformedParameterSet("SPS ended early ({})".format(e))

    logging.debug(
        "parse_hevc_sps: general_profile_idc = %d, general_tier_flag = %s, "
        "general_level_idc = %d",
        sps["general_profile_idc"],
        sps["general_tier_flag"],
        sps["general_level_idc"],
    )
    logging.debug(
        "parse_hevc_sps: chroma_format_idc = %d, bit_depth_luma_minus8 = %d, "
        "bit_depth_chroma_minus8 = %d",
        sps["chroma_format_idc"],
        sps["bit_depth_luma_minus8"],
        sps["bit_depth_chroma_minus8"],
    )

    return sps
