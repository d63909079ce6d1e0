"""
Constants defined by ISO/IEC 14496-15 and the Dolby Vision streams within the
ISO base media file format specification.

Reserved bit regions are given as :py:class:`~bitarray.bitarray` values holding
the pattern which must be written. When decoding, reserved bits are read and
discarded whatever their value.
"""

from bitarray import bitarray

from dcr_codecs.parameter_sets.constants import (
    HEVCNALUnitTypes,
    AVCProfiles,
    HEVCProfiles,
)


__all__ = [
    "SUPPORTED_CONFIGURATION_VERSION",
    "AVC_HIGH_PROFILES",
    "AVC_FIXED_HEADER_BYTES",
    "HEVC_FIXED_HEADER_BYTES",
    "HEVC_NAL_ARRAY_HEADER_BYTES",
    "NAL_UNIT_LENGTH_BYTES",
    "DOVI_RECORD_BYTES",
    "AVC_RESERVED_LENGTH_SIZE",
    "AVC_RESERVED_NUM_SPS",
    "AVC_RESERVED_CHROMA_FORMAT",
    "AVC_RESERVED_BIT_DEPTH",
    "HEVC_RESERVED_MIN_SPATIAL_SEGMENTATION",
    "HEVC_RESERVED_PARALLELISM_TYPE",
    "HEVC_RESERVED_CHROMA_FORMAT",
    "HEVC_RESERVED_BIT_DEPTH",
    "HEVC_RESERVED_NAL_ARRAY",
    "HEVC_RESERVED_NUM_NALUS",
    "DOVI_RESERVED_FLAGS",
    "DOVI_RESERVED_TRAILER",
    "HEVCNALUnitTypes",
    "AVCProfiles",
    "HEVCProfiles",
]

SUPPORTED_CONFIGURATION_VERSION = 1
"""
The only ``configurationVersion`` value defined for the AVC and HEVC decoder
configuration records. Records with any other version must not be decoded
further.
"""

AVC_HIGH_PROFILES = frozenset([100, 110, 122, 144])
"""
The ``AVCProfileIndication`` values for which the AVC record carries the
chroma format, bit depth and SPS extension section.
"""

AVC_FIXED_HEADER_BYTES = 6
"""
The number of bytes in the AVC record before the first sequence parameter set
(including the byte holding the SPS count).
"""

HEVC_FIXED_HEADER_BYTES = 23
"""
The number of bytes in the HEVC record before the first NAL array (including
the ``numOfArrays`` byte).
"""

HEVC_NAL_ARRAY_HEADER_BYTES = 3
"""
The number of bytes preceding the NAL units of each HEVC NAL array (the
completeness/type byte and the 16-bit ``numNalus`` field).
"""

NAL_UNIT_LENGTH_BYTES = 2
"""
The size of the length prefix preceding each parameter set or NAL unit held
in a record.
"""

DOVI_RECORD_BYTES = 24
"""The fixed size of a Dolby Vision configuration record."""


AVC_RESERVED_LENGTH_SIZE = bitarray("111111")
"""Reserved bits preceding ``lengthSizeMinusOne`` in the AVC record."""

AVC_RESERVED_NUM_SPS = bitarray("111")
"""Reserved bits preceding ``numOfSequenceParameterSets`` in the AVC record."""

AVC_RESERVED_CHROMA_FORMAT = bitarray("111111")
"""Reserved bits preceding ``chroma_format`` in the AVC extension section."""

AVC_RESERVED_BIT_DEPTH = bitarray("11111")
"""
Reserved bits preceding each of ``bit_depth_luma_minus8`` and
``bit_depth_chroma_minus8`` in the AVC extension section.
"""

HEVC_RESERVED_MIN_SPATIAL_SEGMENTATION = bitarray("1111")
"""Reserved bits preceding ``min_spatial_segmentation_idc``."""

HEVC_RESERVED_PARALLELISM_TYPE = bitarray("111111")
"""Reserved bits preceding ``parallelismType``."""

HEVC_RESERVED_CHROMA_FORMAT = bitarray("111111")
"""Reserved bits preceding ``chroma_format_idc``."""

HEVC_RESERVED_BIT_DEPTH = bitarray("11111")
"""
Reserved bits preceding each of ``bit_depth_luma_minus8`` and
``bit_depth_chroma_minus8`` in the HEVC record.
"""

HEVC_RESERVED_NAL_ARRAY = bitarray("0")
"""Reserved bit between ``array_completeness`` and ``NAL_unit_type``."""

HEVC_RESERVED_NUM_NALUS = bitarray("0000")
"""
The top bits of the 16-bit ``numNalus`` field. Only the remaining 12 bits are
used for the NAL unit count.
"""

DOVI_RESERVED_FLAGS = bitarray("0" * 28)
"""Reserved bits following ``dv_bl_signal_compatibility_id``."""

DOVI_RESERVED_TRAILER = bitarray("0" * 128)
"""The four reserved 32-bit words which end the Dolby Vision record."""

