"""
The :py:mod:`dcr_codecs.records.hevc` module implements the
``HEVCDecoderConfigurationRecord`` (ISO/IEC 14496-15, 8.3.3.1) carried in
``hvcC`` boxes.

The record consists of a fixed 23 byte header (containing the
profile/tier/level information copied from the SPS) followed by a list of
:py:class:`~dcr_codecs.records.fixeddicts.NALArray` values, each holding the
parameter sets (or SEI messages) of a single NAL unit type.

.. autofunction:: hevc_decoder_configuration_record

.. autofunction:: nal_array

.. autofunction:: hevc_record_size

.. autofunction:: decode_hevc_record

.. autofunction:: encode_hevc_record
"""

from dcr_codecs.exceptions import UnsupportedVersion

from dcr_codecs.bitstream import context_type

from dcr_codecs.records.constants import (
    SUPPORTED_CONFIGURATION_VERSION,
    HEVC_FIXED_HEADER_BYTES,
    HEVC_NAL_ARRAY_HEADER_BYTES,
    HEVC_RESERVED_MIN_SPATIAL_SEGMENTATION,
    HEVC_RESERVED_PARALLELISM_TYPE,
    HEVC_RESERVED_CHROMA_FORMAT,
    HEVC_RESERVED_BIT_DEPTH,
    HEVC_RESERVED_NAL_ARRAY,
    HEVC_RESERVED_NUM_NALUS,
)

from dcr_codecs.records.fixeddicts import (
    dcr_default_values,
    HEVCDecoderConfigurationRecord,
    NALArray,
)

from dcr_codecs.records.common import (
    nal_unit_list,
    nal_unit_list_size,
    deserialise,
    serialise,
)

__all__ = [
    "hevc_decoder_configuration_record",
    "nal_array",
    "hevc_record_size",
    "decode_hevc_record",
    "encode_hevc_record",
]


@context_type(HEVCDecoderConfigurationRecord)
def hevc_decoder_configuration_record(serdes, check_version=False):
    """
    (ISO/IEC 14496-15: 8.3.3.1.2) The HEVC decoder configuration record syntax.

    If 'check_version' is True, an
    :py:exc:`~dcr_codecs.exceptions.UnsupportedVersion` is raised immediately
    after reading a ``configuration_version`` other than 1.
    """
    version = serdes.uint_lit("configuration_version", 1)
    if check_version and version != SUPPORTED_CONFIGURATION_VERSION:
        raise UnsupportedVersion(version)

    serdes.nbits("general_profile_space", 2)
    serdes.bool("general_tier_flag")
    serdes.nbits("general_profile_idc", 5)
    serdes.uint_lit("general_profile_compatibility_flags", 4)
    serdes.nbits("general_constraint_indicator_flags", 48)
    serdes.uint_lit("general_level_idc", 1)

    serdes.reserved(HEVC_RESERVED_MIN_SPATIAL_SEGMENTATION)
    serdes.nbits("min_spatial_segmentation_idc", 12)
    serdes.reserved(HEVC_RESERVED_PARALLELISM_TYPE)
    serdes.nbits("parallelism_type", 2)
    serdes.reserved(HEVC_RESERVED_CHROMA_FORMAT)
    serdes.nbits("chroma_format_idc", 2)
    serdes.reserved(HEVC_RESERVED_BIT_DEPTH)
    serdes.nbits("bit_depth_luma_minus8", 3)
    serdes.reserved(HEVC_RESERVED_BIT_DEPTH)
    serdes.nbits("bit_depth_chroma_minus8", 3)

    serdes.uint_lit("avg_frame_rate", 2)
    serdes.nbits("constant_frame_rate", 2)
    serdes.nbits("num_temporal_layers", 3)
    serdes.bool("temporal_id_nested")
    serdes.nbits("length_size_minus_one", 2)

    serdes.declare_list("nal_arrays")
    for _ in range(serdes.list_length("nal_arrays", 8)):
        with serdes.subcontext("nal_arrays"):
            nal_array(serdes)


@context_type(NALArray)
def nal_array(serdes):
    """
    (ISO/IEC 14496-15: 8.3.3.1.2) A single entry in the HEVC record's NAL unit
    arrays.

    Only the low 12 bits of ``numNalus`` are used for the NAL unit count, the
    remainder being treated as reserved.
    """
    serdes.bool("array_completeness")
    serdes.reserved(HEVC_RESERVED_NAL_ARRAY)
    serdes.nbits("nal_unit_type", 6)

    serdes.reserved(HEVC_RESERVED_NUM_NALUS)
    nal_unit_list(serdes, "nal_units", 12)


def hevc_record_size(record):
    """
    Return the number of bytes :py:func:`encode_hevc_record` will produce for
    the given record.
    """
    return HEVC_FIXED_HEADER_BYTES + sum(
        HEVC_NAL_ARRAY_HEADER_BYTES + nal_unit_list_size(array.get("nal_units", []))
        for array in record.get("nal_arrays", [])
    )


def decode_hevc_record(data_or_file, check_version=True):
    """
    Decode an HEVC decoder configuration record.

    Parameters
    ==========
    data_or_file : :py:class:`bytes` or file-like
        The ``hvcC`` box payload.
    check_version : bool
        If True (the default), fail with
        :py:exc:`~dcr_codecs.exceptions.UnsupportedVersion` for records
        whose ``configuration_version`` is not 1.

    Returns
    =======
    record : :py:class:`~dcr_codecs.records.fixeddicts.HEVCDecoderConfigurationRecord`

    Raises
    ======
    :py:exc:`~dcr_codecs.exceptions.Truncated`
    :py:exc:`~dcr_codecs.exceptions.UnsupportedVersion`
    """
    return deserialise(hevc_decoder_configuration_record, data_or_file, check_version)


def encode_hevc_record(record, file=None, default_values=dcr_default_values):
    """
    Encode an HEVC decoder configuration record, returning the encoded bytes.

    Reserved bits are always written with their mandated values. Fields
    missing from 'record' (or its NAL arrays) are taken from 'default_values'.

    Raises
    ======
    :py:exc:`~dcr_codecs.exceptions.FieldOverflow`
        If a value does not fit in its field, for example a NAL unit longer
        than 65535 bytes.
    """
    return serialise(hevc_decoder_configuration_record, record, file, default_values)
