"""
The :py:mod:`dcr_codecs.records.autofill` module provides routines for
automatically filling in the HEVC record fields which are copied from the
stream's sequence parameter set, and a builder which assembles a complete
HEVC record from raw parameter set NAL units.

In the common case, :py:func:`build_hevc_record` is used to produce a record
from the VPS, SPS and PPS NAL units of a stream::

    >>> record = build_hevc_record([vps], [sps], [pps])
    >>> data = encode_hevc_record(record)

The profile, tier, level, chroma format and bit depth fields are parsed from
the first SPS using :py:func:`~dcr_codecs.parameter_sets.parse_hevc_sps`.
The remaining fields, whose values are not known to the builder, take the
'unknown' values given in :py:data:`hevc_builder_default_values`.

.. autofunction:: build_hevc_record

.. autofunction:: autofill_hevc_record

.. autofunction:: autofill_and_encode_hevc_record

.. autodata:: AUTO
    :annotation:

.. autodata:: dcr_default_values_with_auto
    :annotation:

.. autodata:: hevc_builder_default_values
    :annotation:
"""

from copy import deepcopy

from sentinels import Sentinel

from dcr_codecs.exceptions import MissingParameterSet

from dcr_codecs.parameter_sets import parse_hevc_sps

from dcr_codecs.records.constants import (
    SUPPORTED_CONFIGURATION_VERSION,
    HEVCNALUnitTypes,
)

from dcr_codecs.records.fixeddicts import (
    dcr_default_values,
    HEVCDecoderConfigurationRecord,
    NALArray,
)

from dcr_codecs.records.hevc import encode_hevc_record

__all__ = [
    "AUTO",
    "SPS_DERIVED_FIELDS",
    "dcr_default_values_with_auto",
    "hevc_builder_default_values",
    "autofill_hevc_record",
    "autofill_and_encode_hevc_record",
    "build_hevc_record",
]


AUTO = Sentinel("AUTO")
"""
A constant which may be placed in a
:py:class:`~dcr_codecs.records.fixeddicts.HEVCDecoderConfigurationRecord`
field to indicate that :py:func:`autofill_hevc_record` should fill that field
in from the record's SPS.
"""

SPS_DERIVED_FIELDS = (
    "general_profile_space",
    "general_tier_flag",
    "general_profile_idc",
    "general_profile_compatibility_flags",
    "general_constraint_indicator_flags",
    "general_level_idc",
    "chroma_format_idc",
    "bit_depth_luma_minus8",
    "bit_depth_chroma_minus8",
)
"""
The HEVC record fields which are copied from the same-named fields of the
sequence parameter set.
"""

dcr_default_values_with_auto = deepcopy(dcr_default_values)
"""
Like :py:data:`dcr_codecs.records.fixeddicts.dcr_default_values` but with
:py:data:`AUTO` set as the default value for all fields which support it.
"""

for _field_name in SPS_DERIVED_FIELDS:
    dcr_default_values_with_auto[HEVCDecoderConfigurationRecord][_field_name] = AUTO

hevc_builder_default_values = HEVCDecoderConfigurationRecord(
    configuration_version=SUPPORTED_CONFIGURATION_VERSION,
    min_spatial_segmentation_idc=0,
    parallelism_type=0,
    avg_frame_rate=0,
    constant_frame_rate=0,
    num_temporal_layers=0,
    temporal_id_nested=False,
    length_size_minus_one=3,
)
"""
The values used by :py:func:`build_hevc_record` for fields not derived from
the SPS. Zero is the 'unspecified' value for each of the frame rate,
parallelism and temporal layer fields, and four byte NAL unit length prefixes
are always used.
"""


def get_auto(record, field_name):
    """
    For internal use. Get a value from an HEVC record, falling back on the
    :py:data:`dcr_default_values_with_auto` default value.
    """
    if field_name in record:
        return record[field_name]
    else:
        return dcr_default_values_with_auto[HEVCDecoderConfigurationRecord][field_name]


def find_first_sps(record):
    """
    For internal use. Return the first NAL unit in the first non-empty SPS
    array of an HEVC record.

    Raises :py:exc:`~dcr_codecs.exceptions.MissingParameterSet` if the record
    contains no SPS.
    """
    for nal_array in record.get("nal_arrays", []):
        if (
            nal_array.get("nal_unit_type") == HEVCNALUnitTypes.sps
            and nal_array.get("nal_units")
        ):
            return nal_array["nal_units"][0]

    raise MissingParameterSet("record contains no SPS NAL unit")


def autofill_hevc_record(record, parse_sps=parse_hevc_sps):
    """
    Given an
    :py:class:`~dcr_codecs.records.fixeddicts.HEVCDecoderConfigurationRecord`,
    find all SPS-derived fields (see :py:data:`SPS_DERIVED_FIELDS`) which are
    absent or contain the :py:data:`AUTO` sentinel and fill them from the
    first SPS in the record. The record is modified in place.

    The SPS is only parsed when at least one field needs filling.

    Parameters
    ==========
    record : dict
    parse_sps : function(nal_unit) -> :py:class:`~dcr_codecs.parameter_sets.HEVCSequenceParameterSet`
        The parameter set parser to use.

    Raises
    ======
    :py:exc:`~dcr_codecs.exceptions.MissingParameterSet`
        If fields need filling but the record has no SPS.
    :py:exc:`~dcr_codecs.exceptions.MalformedParameterSet`
        Propagated from 'parse_sps'.
    """
    to_fill = [
        field_name
        for field_name in SPS_DERIVED_FIELDS
        if get_auto(record, field_name) is AUTO
    ]
    if not to_fill:
        return

    sps = parse_sps(find_first_sps(record))
    for field_name in to_fill:
        record[field_name] = sps[field_name]


def autofill_and_encode_hevc_record(record, file=None, parse_sps=parse_hevc_sps):
    """
    Encode an HEVC record, auto-filling any SPS-derived fields which are
    absent or :py:data:`AUTO` (see :py:func:`autofill_hevc_record`). Other
    missing fields take their values from
    :py:data:`dcr_default_values_with_auto`.

    The record passed in is not modified. Returns the encoded bytes.
    """
    record = deepcopy(record)
    autofill_hevc_record(record, parse_sps)
    return encode_hevc_record(record, file, dcr_default_values_with_auto)


def build_hevc_record(
    vps,
    sps,
    pps,
    vps_complete=True,
    sps_complete=True,
    pps_complete=True,
    defaults=None,
    parse_sps=parse_hevc_sps,
):
    """
    Build a new HEVC decoder configuration record from a stream's parameter
    sets.

    Parameters
    ==========
    vps, sps, pps : iterables of bytes
        The VPS, SPS and PPS NAL units to include, in order. At least one SPS
        must be given. The first SPS is always parsed.
    vps_complete, sps_complete, pps_complete : bool
        The ``array_completeness`` flag for each NAL array.
    defaults : dict or None
        Values overriding :py:data:`hevc_builder_default_values` (or the
        values derived from the SPS).
    parse_sps : function(nal_unit) -> :py:class:`~dcr_codecs.parameter_sets.HEVCSequenceParameterSet`
        The parameter set parser to use.

    Returns
    =======
    record : :py:class:`~dcr_codecs.records.fixeddicts.HEVCDecoderConfigurationRecord`
        A record with three NAL arrays, holding the VPS, SPS and PPS NAL
        units in that order.

    Raises
    ======
    :py:exc:`~dcr_codecs.exceptions.MissingParameterSet`
        If 'sps' is empty.
    :py:exc:`~dcr_codecs.exceptions.MalformedParameterSet`
        If the first SPS cannot be parsed.
    """
    vps, sps, pps = list(vps), list(sps), list(pps)
    if not sps:
        raise MissingParameterSet("at least one SPS is required")

    # Parsed even when 'defaults' gives every SPS-derived field
    parsed_sps = parse_sps(sps[0])

    record = deepcopy(hevc_builder_default_values)
    if defaults is not None:
        record.update(defaults)
    for field_name in SPS_DERIVED_FIELDS:
        if record.get(field_name, AUTO) is AUTO:
            record[field_name] = parsed_sps[field_name]

    record["nal_arrays"] = [
        NALArray(
            array_completeness=bool(complete),
            nal_unit_type=nal_unit_type,
            nal_units=nal_units,
        )
        for nal_unit_type, nal_units, complete in [
            (HEVCNALUnitTypes.vps, vps, vps_complete),
            (HEVCNALUnitTypes.sps, sps, sps_complete),
            (HEVCNALUnitTypes.pps, pps, pps_complete),
        ]
    ]

    return record
