"""
Constants defined by ITU-T H.264 and ITU-T H.265.
"""

from enum import IntEnum


__all__ = [
    "HEVCNALUnitTypes",
    "AVCProfiles",
    "HEVCProfiles",
]


class HEVCNALUnitTypes(IntEnum):
    """
    Non-VCL NAL unit types from ITU-T H.265 (Table 7-1) which may appear in an
    HEVC decoder configuration record. Names are not normative.
    """

    vps = 32
    sps = 33
    pps = 34
    aud = 35
    eos = 36
    eob = 37
    fd = 38
    prefix_sei = 39
    suffix_sei = 40


class AVCProfiles(IntEnum):
    """
    Common ``AVCProfileIndication`` (``profile_idc``) values from ITU-T H.264
    (Annex A). Names are not normative.
    """

    baseline = 66
    main = 77
    extended = 88
    high = 100
    high_10 = 110
    high_422 = 122
    high_444 = 144


class HEVCProfiles(IntEnum):
    """
    ``general_profile_idc`` values from ITU-T H.265 (Annex A). Names are not
    normative.
    """

    main = 1
    main_10 = 2
    main_still_picture = 3
    format_range_extensions = 4
    high_throughput = 5
