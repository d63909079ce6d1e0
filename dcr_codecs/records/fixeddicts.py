"""
The :py:mod:`dcr_codecs.records.fixeddicts` module defines
:py:mod:`~dcr_codecs.fixeddict` types used to hold the contents of decoder
configuration records (see :py:mod:`dcr_codecs.records`).

Field names follow the syntax element names used by ISO/IEC 14496-15 and the
Dolby Vision file format specification, converted to ``snake_case``. Reserved
bits are not represented.

.. autodata:: dcr_default_values
    :annotation: = {fixeddict_type: fixeddict_type(...), ...}
"""

from dcr_codecs.fixeddict import fixeddict, Entry

from dcr_codecs.string_formatters import Hex, Bool, Bytes, MultilineList

from dcr_codecs.records.constants import (
    SUPPORTED_CONFIGURATION_VERSION,
    HEVCNALUnitTypes,
    AVCProfiles,
    HEVCProfiles,
)

__all__ = [
    "dcr_default_values",
    "AVCDecoderConfigurationRecord",
    "NALArray",
    "HEVCDecoderConfigurationRecord",
    "DoviDecoderConfigurationRecord",
]


dcr_default_values = {}
"""
A lookup ``{fixeddict_type: fixeddict_type(...), ...}`` of default values for
record fields. These are used by :py:class:`~dcr_codecs.bitstream.Serialiser`
for fields missing from a record being encoded.

Fields identifying the stream (e.g. profile and level indications) have no
default and must always be given.
"""

_parameter_set_list = MultilineList(heading="", formatter=Bytes())

################################################################################
# AVC
################################################################################

AVCDecoderConfigurationRecord = fixeddict(
    "AVCDecoderConfigurationRecord",
    Entry("configuration_version", help_type="int"),
    Entry(
        "avc_profile_indication",
        enum=AVCProfiles,
        help_type="int",
        help="""
            When one of :py:data:`~dcr_codecs.records.constants.AVC_HIGH_PROFILES`,
            the chroma format, bit depth and SPS extension fields are present.
        """,
    ),
    Entry("profile_compatibility", formatter=Hex(2), help_type="int"),
    Entry("avc_level_indication", help_type="int"),
    Entry("length_size_minus_one", help_type="int"),
    Entry(
        "sequence_parameter_sets",
        formatter=_parameter_set_list,
        help_type="[bytes, ...]",
        help="Up to 31 SPS NAL units.",
    ),
    Entry(
        "picture_parameter_sets",
        formatter=_parameter_set_list,
        help_type="[bytes, ...]",
        help="Up to 255 PPS NAL units.",
    ),
    Entry("chroma_format", help_type="int"),
    Entry("bit_depth_luma_minus8", help_type="int"),
    Entry("bit_depth_chroma_minus8", help_type="int"),
    Entry(
        "sequence_parameter_set_extensions",
        formatter=_parameter_set_list,
        help_type="[bytes, ...]",
        help="Up to 255 SPS extension NAL units.",
    ),
    help="""
        The ``AVCDecoderConfigurationRecord`` carried in an ``avcC`` box.
    """,
)

dcr_default_values[AVCDecoderConfigurationRecord] = AVCDecoderConfigurationRecord(
    configuration_version=SUPPORTED_CONFIGURATION_VERSION,
    profile_compatibility=0,
    length_size_minus_one=3,
    chroma_format=1,
    bit_depth_luma_minus8=0,
    bit_depth_chroma_minus8=0,
)

################################################################################
# HEVC
################################################################################

NALArray = fixeddict(
    "NALArray",
    Entry(
        "array_completeness",
        formatter=Bool(),
        help_type="bool",
        help="""
            True when all NAL units of this type are in this array and none
            are in the stream.
        """,
    ),
    Entry(
        "nal_unit_type",
        enum=HEVCNALUnitTypes,
        formatter=Hex(2),
        help_type=":py:class:`~dcr_codecs.records.constants.HEVCNALUnitTypes`",
    ),
    Entry(
        "nal_units",
        formatter=_parameter_set_list,
        help_type="[bytes, ...]",
    ),
    help="""
        One entry in the HEVC record's array of NAL units, grouped by type.
    """,
)

dcr_default_values[NALArray] = NALArray(
    array_completeness=True,
)

HEVCDecoderConfigurationRecord = fixeddict(
    "HEVCDecoderConfigurationRecord",
    Entry("configuration_version", help_type="int"),
    Entry("general_profile_space", help_type="int"),
    Entry("general_tier_flag", formatter=Bool(), help_type="bool"),
    Entry("general_profile_idc", enum=HEVCProfiles, help_type="int"),
    Entry("general_profile_compatibility_flags", formatter=Hex(8), help_type="int"),
    Entry(
        "general_constraint_indicator_flags",
        formatter=Hex(12),
        help_type="int",
        help="A 48-bit value.",
    ),
    Entry("general_level_idc", help_type="int"),
    Entry("min_spatial_segmentation_idc", help_type="int"),
    Entry("parallelism_type", help_type="int"),
    Entry("chroma_format_idc", help_type="int"),
    Entry("bit_depth_luma_minus8", help_type="int"),
    Entry("bit_depth_chroma_minus8", help_type="int"),
    Entry(
        "avg_frame_rate",
        help_type="int",
        help="In frames per 256 seconds. Zero means unspecified.",
    ),
    Entry("constant_frame_rate", help_type="int"),
    Entry("num_temporal_layers", help_type="int"),
    Entry("temporal_id_nested", formatter=Bool(), help_type="bool"),
    Entry("length_size_minus_one", help_type="int"),
    Entry(
        "nal_arrays",
        formatter=MultilineList(heading=""),
        help_type="[:py:class:`NALArray`, ...]",
    ),
    help="""
        The ``HEVCDecoderConfigurationRecord`` carried in an ``hvcC`` box.
    """,
)

dcr_default_values[HEVCDecoderConfigurationRecord] = HEVCDecoderConfigurationRecord(
    configuration_version=SUPPORTED_CONFIGURATION_VERSION,
    general_profile_space=0,
    general_tier_flag=False,
    general_profile_compatibility_flags=0,
    general_constraint_indicator_flags=0,
    min_spatial_segmentation_idc=0,
    parallelism_type=0,
    chroma_format_idc=1,
    bit_depth_luma_minus8=0,
    bit_depth_chroma_minus8=0,
    avg_frame_rate=0,
    constant_frame_rate=0,
    num_temporal_layers=0,
    temporal_id_nested=False,
    length_size_minus_one=3,
)

################################################################################
# Dolby Vision
################################################################################

DoviDecoderConfigurationRecord = fixeddict(
    "DoviDecoderConfigurationRecord",
    Entry("dv_version_major", help_type="int"),
    Entry("dv_version_minor", help_type="int"),
    Entry("dv_profile", help_type="int"),
    Entry("dv_level", help_type="int"),
    Entry("rpu_present_flag", formatter=Bool(), help_type="bool"),
    Entry("el_present_flag", formatter=Bool(), help_type="bool"),
    Entry("bl_present_flag", formatter=Bool(), help_type="bool"),
    Entry("dv_bl_signal_compatibility_id", help_type="int"),
    help="""
        The ``DOVIDecoderConfigurationRecord`` carried in ``dvcC``, ``dvvC``
        and ``dvwC`` boxes.
    """,
)

dcr_default_values[DoviDecoderConfigurationRecord] = DoviDecoderConfigurationRecord(
    dv_version_major=1,
    dv_version_minor=0,
    rpu_present_flag=True,
    el_present_flag=False,
    bl_present_flag=True,
    dv_bl_signal_compatibility_id=0,
)
