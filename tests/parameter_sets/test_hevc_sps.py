import pytest

import logging

from dcr_codecs.exceptions import MalformedParameterSet

from dcr_codecs.parameter_sets import (
    HEVCProfiles,
    parse_hevc_sps,
    remove_emulation_prevention_bytes,
)


def test_main_profile_1080p(sps_factory):
    sps = parse_hevc_sps(sps_factory())

    assert sps["nal_unit_header"]["nal_unit_type"] == 33
    assert sps["sps_video_parameter_set_id"] == 0
    assert sps["sps_max_sub_layers_minus1"] == 0
    assert sps["sps_temporal_id_nesting_flag"] is True

    assert sps["general_profile_space"] == 0
    assert sps["general_tier_flag"] is False
    assert sps["general_profile_idc"] == HEVCProfiles.main
    assert sps["general_profile_compatibility_flags"] == 0x60000000
    assert sps["general_constraint_indicator_flags"] == 0xB00000000000
    assert sps["general_level_idc"] == 93

    assert sps["sps_seq_parameter_set_id"] == 0
    assert sps["chroma_format_idc"] == 1
    assert "separate_colour_plane_flag" not in sps
    assert sps["pic_width_in_luma_samples"] == 1920
    assert sps["pic_height_in_luma_samples"] == 1080
    assert sps["conformance_window_flag"] is False
    assert "conf_win_left_offset" not in sps
    assert sps["bit_depth_luma_minus8"] == 0
    assert sps["bit_depth_chroma_minus8"] == 0


def test_emulation_prevention_bytes_removed(sps_factory):
    nal_unit = sps_factory(general_profile_compatibility_flags=0x60000000)
    # The compatibility flags are followed by zeros and so must have been
    # escaped
    assert len(remove_emulation_prevention_bytes(nal_unit)) < len(nal_unit)

    sps = parse_hevc_sps(nal_unit)
    assert sps["general_profile_compatibility_flags"] == 0x60000000
    assert sps["general_constraint_indicator_flags"] == 0xB00000000000


def test_main_10_high_tier(sps_factory):
    sps = parse_hevc_sps(
        sps_factory(
            general_profile_space=1,
            general_tier_flag=True,
            general_profile_idc=HEVCProfiles.main_10,
            general_profile_compatibility_flags=0x20000000,
            general_constraint_indicator_flags=0x000000000001,
            general_level_idc=153,
            bit_depth_luma_minus8=2,
            bit_depth_chroma_minus8=2,
        )
    )
    assert sps["general_profile_space"] == 1
    assert sps["general_tier_flag"] is True
    assert sps["general_profile_idc"] == 2
    assert sps["general_profile_compatibility_flags"] == 0x20000000
    assert sps["general_constraint_indicator_flags"] == 0x000000000001
    assert sps["general_level_idc"] == 153
    assert sps["bit_depth_luma_minus8"] == 2
    assert sps["bit_depth_chroma_minus8"] == 2


@pytest.mark.parametrize("sps_max_sub_layers_minus1", [1, 2, 6])
def test_sub_layers_skipped(sps_max_sub_layers_minus1, sps_factory):
    sps = parse_hevc_sps(
        sps_factory(
            sps_max_sub_layers_minus1=sps_max_sub_layers_minus1,
            general_level_idc=120,
            pic_width_in_luma_samples=3840,
        )
    )
    assert sps["sps_max_sub_layers_minus1"] == sps_max_sub_layers_minus1
    assert sps["general_level_idc"] == 120
    assert sps["pic_width_in_luma_samples"] == 3840
    assert sps["bit_depth_luma_minus8"] == 0


def test_chroma_444(sps_factory):
    sps = parse_hevc_sps(
        sps_factory(
            general_profile_idc=HEVCProfiles.format_range_extensions,
            chroma_format_idc=3,
            bit_depth_luma_minus8=4,
            bit_depth_chroma_minus8=4,
        )
    )
    assert sps["chroma_format_idc"] == 3
    assert sps["separate_colour_plane_flag"] is False
    assert sps["bit_depth_luma_minus8"] == 4
    assert sps["bit_depth_chroma_minus8"] == 4


def test_conformance_window(sps_factory):
    sps = parse_hevc_sps(
        sps_factory(pic_height_in_luma_samples=1088, conformance_window=(0, 0, 0, 4))
    )
    assert sps["pic_height_in_luma_samples"] == 1088
    assert sps["conformance_window_flag"] is True
    assert sps["conf_win_left_offset"] == 0
    assert sps["conf_win_right_offset"] == 0
    assert sps["conf_win_top_offset"] == 0
    assert sps["conf_win_bottom_offset"] == 4
    assert sps["bit_depth_luma_minus8"] == 0


@pytest.mark.parametrize("length", [0, 1, 2, 5, 14])
def test_truncated(length, sps_factory):
    nal_unit = sps_factory()
    with pytest.raises(MalformedParameterSet, match="ended early"):
        parse_hevc_sps(nal_unit[:length])


@pytest.mark.parametrize("nal_unit_type", [32, 34, 39])
def test_wrong_nal_unit_type(nal_unit_type, sps_factory):
    with pytest.raises(
        MalformedParameterSet,
        match=r"expected an SPS NAL unit \(type 33\), got type {}".format(
            nal_unit_type
        ),
    ):
        parse_hevc_sps(sps_factory(nal_unit_type=nal_unit_type))


def test_logging(caplog, sps_factory):
    caplog.set_level(logging.DEBUG)
    parse_hevc_sps(sps_factory(general_level_idc=123))
    assert "general_level_idc = 123" in caplog.text
    assert "chroma_format_idc = 1" in caplog.text
