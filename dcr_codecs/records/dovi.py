"""
The :py:mod:`dcr_codecs.records.dovi` module implements the fixed-size Dolby
Vision decoder configuration record carried in ``dvcC``, ``dvvC`` and ``dvwC``
boxes.

.. autofunction:: dovi_decoder_configuration_record

.. autofunction:: dovi_record_size

.. autofunction:: decode_dovi_record

.. autofunction:: encode_dovi_record
"""

from dcr_codecs.bitstream import context_type

from dcr_codecs.records.constants import (
    DOVI_RECORD_BYTES,
    DOVI_RESERVED_FLAGS,
    DOVI_RESERVED_TRAILER,
)

from dcr_codecs.records.fixeddicts import (
    dcr_default_values,
    DoviDecoderConfigurationRecord,
)

from dcr_codecs.records.common import deserialise, serialise

__all__ = [
    "dovi_decoder_configuration_record",
    "dovi_record_size",
    "decode_dovi_record",
    "encode_dovi_record",
]


@context_type(DoviDecoderConfigurationRecord)
def dovi_decoder_configuration_record(serdes):
    """The Dolby Vision decoder configuration record syntax."""
    serdes.uint_lit("dv_version_major", 1)
    serdes.uint_lit("dv_version_minor", 1)
    serdes.nbits("dv_profile", 7)
    serdes.nbits("dv_level", 6)
    serdes.bool("rpu_present_flag")
    serdes.bool("el_present_flag")
    serdes.bool("bl_present_flag")
    serdes.nbits("dv_bl_signal_compatibility_id", 4)
    serdes.reserved(DOVI_RESERVED_FLAGS)
    serdes.reserved(DOVI_RESERVED_TRAILER)


def dovi_record_size(record):
    """Always :py:data:`~dcr_codecs.records.constants.DOVI_RECORD_BYTES`."""
    return DOVI_RECORD_BYTES


def decode_dovi_record(data_or_file):
    """
    Decode a Dolby Vision decoder configuration record. The reserved bits are
    ignored, whatever their value.

    Raises
    ======
    :py:exc:`~dcr_codecs.exceptions.Truncated`
        If fewer than 24 bytes are available.
    """
    return deserialise(dovi_decoder_configuration_record, data_or_file)


def encode_dovi_record(record, file=None, default_values=dcr_default_values):
    """
    Encode a Dolby Vision decoder configuration record, returning the 24
    encoded bytes. Reserved bits are written as zeros.
    """
    return serialise(dovi_decoder_configuration_record, record, file, default_values)
