"""
The :py:mod:`dcr_codecs.records.avc` module implements the
``AVCDecoderConfigurationRecord`` (ISO/IEC 14496-15, 5.3.3.1) carried in
``avcC`` boxes.

The record consists of a six byte header, the sequence and picture parameter
set arrays and, for the 'high' family of profiles (see
:py:data:`~dcr_codecs.records.constants.AVC_HIGH_PROFILES`) only, an
extension section giving the chroma format, bit depths and SPS extensions.
Both directions decide whether the extension section is present from the
``avc_profile_indication`` field alone.

.. autofunction:: avc_decoder_configuration_record

.. autofunction:: avc_record_size

.. autofunction:: decode_avc_record

.. autofunction:: encode_avc_record
"""

from dcr_codecs.exceptions import UnsupportedVersion

from dcr_codecs.bitstream import context_type

from dcr_codecs.records.constants import (
    SUPPORTED_CONFIGURATION_VERSION,
    AVC_HIGH_PROFILES,
    AVC_FIXED_HEADER_BYTES,
    AVC_RESERVED_LENGTH_SIZE,
    AVC_RESERVED_NUM_SPS,
    AVC_RESERVED_CHROMA_FORMAT,
    AVC_RESERVED_BIT_DEPTH,
)

from dcr_codecs.records.fixeddicts import (
    dcr_default_values,
    AVCDecoderConfigurationRecord,
)

from dcr_codecs.records.common import (
    nal_unit_list,
    nal_unit_list_size,
    deserialise,
    serialise,
)

__all__ = [
    "avc_decoder_configuration_record",
    "avc_record_size",
    "decode_avc_record",
    "encode_avc_record",
]


@context_type(AVCDecoderConfigurationRecord)
def avc_decoder_configuration_record(serdes, check_version=False):
    """
    (ISO/IEC 14496-15: 5.3.3.1.2) The AVC decoder configuration record syntax.

    If 'check_version' is True, an
    :py:exc:`~dcr_codecs.exceptions.UnsupportedVersion` is raised immediately
    after reading a ``configuration_version`` other than 1.
    """
    version = serdes.uint_lit("configuration_version", 1)
    if check_version and version != SUPPORTED_CONFIGURATION_VERSION:
        raise UnsupportedVersion(version)

    profile = serdes.uint_lit("avc_profile_indication", 1)
    serdes.uint_lit("profile_compatibility", 1)
    serdes.uint_lit("avc_level_indication", 1)

    serdes.reserved(AVC_RESERVED_LENGTH_SIZE)
    serdes.nbits("length_size_minus_one", 2)

    serdes.reserved(AVC_RESERVED_NUM_SPS)
    nal_unit_list(serdes, "sequence_parameter_sets", 5)
    nal_unit_list(serdes, "picture_parameter_sets", 8)

    if profile in AVC_HIGH_PROFILES:
        serdes.reserved(AVC_RESERVED_CHROMA_FORMAT)
        serdes.nbits("chroma_format", 2)
        serdes.reserved(AVC_RESERVED_BIT_DEPTH)
        serdes.nbits("bit_depth_luma_minus8", 3)
        serdes.reserved(AVC_RESERVED_BIT_DEPTH)
        serdes.nbits("bit_depth_chroma_minus8", 3)
        nal_unit_list(serdes, "sequence_parameter_set_extensions", 8)


def avc_record_size(record):
    """
    Return the number of bytes :py:func:`encode_avc_record` will produce for
    the given record.
    """
    size = AVC_FIXED_HEADER_BYTES
    size += nal_unit_list_size(record.get("sequence_parameter_sets", []))
    size += 1  # numOfPictureParameterSets
    size += nal_unit_list_size(record.get("picture_parameter_sets", []))

    if record["avc_profile_indication"] in AVC_HIGH_PROFILES:
        size += 4  # chroma_format, bit depths and numOfSequenceParameterSetExt
        size += nal_unit_list_size(record.get("sequence_parameter_set_extensions", []))

    return size


def decode_avc_record(data_or_file, check_version=True):
    """
    Decode an AVC decoder configuration record.

    Parameters
    ==========
    data_or_file : :py:class:`bytes` or file-like
        The ``avcC`` box payload.
    check_version : bool
        If True (the default), fail with
        :py:exc:`~dcr_codecs.exceptions.UnsupportedVersion` for records
        whose ``configuration_version`` is not 1.

    Returns
    =======
    record : :py:class:`~dcr_codecs.records.fixeddicts.AVCDecoderConfigurationRecord`

    Raises
    ======
    :py:exc:`~dcr_codecs.exceptions.Truncated`
    :py:exc:`~dcr_codecs.exceptions.UnsupportedVersion`
    """
    return deserialise(avc_decoder_configuration_record, data_or_file, check_version)


def encode_avc_record(record, file=None, default_values=dcr_default_values):
    """
    Encode an AVC decoder configuration record, returning the encoded bytes.

    Reserved bits are always written with their mandated (all ones) values.
    Fields missing from 'record' are taken from 'default_values'.

    Raises
    ======
    :py:exc:`~dcr_codecs.exceptions.FieldOverflow`
        If a value (or a parameter set count or length) does not fit in its
        field, for example when more than 31 SPSs are given.
    :py:exc:`~dcr_codecs.exceptions.UnusedTargetError`
        If extension section fields are given for a profile without one.
    """
    return serialise(avc_decoder_configuration_record, record, file, default_values)
