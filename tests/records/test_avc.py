import pytest

from dcr_codecs.exceptions import (
    Truncated,
    FieldOverflow,
    UnsupportedVersion,
    UnusedTargetError,
)

from dcr_codecs.records import (
    AVCDecoderConfigurationRecord,
    AVCProfiles,
    avc_record_size,
    decode_avc_record,
    encode_avc_record,
)


SPS = b"\x67\x42\xC0\x1E"
PPS = b"\x68\xCE"


@pytest.fixture
def baseline_record():
    return AVCDecoderConfigurationRecord(
        configuration_version=1,
        avc_profile_indication=AVCProfiles.baseline,
        profile_compatibility=0xC0,
        avc_level_indication=30,
        length_size_minus_one=3,
        sequence_parameter_sets=[SPS],
        picture_parameter_sets=[PPS],
    )


@pytest.fixture
def high_record():
    return AVCDecoderConfigurationRecord(
        configuration_version=1,
        avc_profile_indication=AVCProfiles.high,
        profile_compatibility=0x00,
        avc_level_indication=40,
        length_size_minus_one=3,
        sequence_parameter_sets=[SPS],
        picture_parameter_sets=[PPS],
        chroma_format=1,
        bit_depth_luma_minus8=0,
        bit_depth_chroma_minus8=0,
        sequence_parameter_set_extensions=[],
    )


BASELINE_BYTES = (
    b"\x01\x42\xC0\x1E"
    b"\xFF"  # reserved + length_size_minus_one
    b"\xE1"  # reserved + numOfSequenceParameterSets
    b"\x00\x04" + SPS + b"\x01"  # numOfPictureParameterSets
    b"\x00\x02" + PPS
)


class TestBaseline(object):
    def test_encode(self, baseline_record):
        assert encode_avc_record(baseline_record) == BASELINE_BYTES

    def test_size(self, baseline_record):
        assert avc_record_size(baseline_record) == len(BASELINE_BYTES) == 17

    def test_decode(self, baseline_record):
        record = decode_avc_record(BASELINE_BYTES)
        assert record == baseline_record
        assert "chroma_format" not in record
        assert "sequence_parameter_set_extensions" not in record

    def test_extension_fields_rejected(self, baseline_record):
        baseline_record["chroma_format"] = 1
        with pytest.raises(UnusedTargetError, match="chroma_format"):
            encode_avc_record(baseline_record)

    def test_length_size_minus_one(self, baseline_record):
        baseline_record["length_size_minus_one"] = 1
        data = encode_avc_record(baseline_record)
        assert data[4:5] == b"\xFD"
        assert decode_avc_record(data) == baseline_record


class TestHighProfiles(object):
    def test_encode(self, high_record):
        data = encode_avc_record(high_record)
        assert data[1:2] == b"\x64"
        assert data[len(BASELINE_BYTES) :] == b"\xFD\xF8\xF8\x00"
        assert avc_record_size(high_record) == len(data) == len(BASELINE_BYTES) + 4

    def test_extension_fields(self, high_record):
        high_record["avc_profile_indication"] = AVCProfiles.high_444
        high_record["chroma_format"] = 3
        high_record["bit_depth_luma_minus8"] = 2
        high_record["bit_depth_chroma_minus8"] = 4
        high_record["sequence_parameter_set_extensions"] = [b"\x6D\x00", b"\x6D"]

        data = encode_avc_record(high_record)
        assert data[len(BASELINE_BYTES) :] == (
            b"\xFF\xFA\xFC\x02" b"\x00\x02\x6D\x00" b"\x00\x01\x6D"
        )
        assert avc_record_size(high_record) == len(data)
        assert decode_avc_record(data) == high_record

    @pytest.mark.parametrize(
        "profile,has_extension",
        [
            (AVCProfiles.baseline, False),
            (AVCProfiles.main, False),
            (AVCProfiles.extended, False),
            (AVCProfiles.high, True),
            (AVCProfiles.high_10, True),
            (AVCProfiles.high_422, True),
            (AVCProfiles.high_444, True),
            # Profiles outside the 'high' list never have the extension, even
            # those which a later edition might add
            (118, False),
            (244, False),
        ],
    )
    def test_extension_presence(self, baseline_record, profile, has_extension):
        baseline_record["avc_profile_indication"] = profile
        data = encode_avc_record(baseline_record)

        if has_extension:
            assert len(data) == len(BASELINE_BYTES) + 4
        else:
            assert len(data) == len(BASELINE_BYTES)
        assert avc_record_size(baseline_record) == len(data)

        record = decode_avc_record(data)
        assert ("chroma_format" in record) is has_extension

    def test_defaults(self, baseline_record):
        baseline_record["avc_profile_indication"] = AVCProfiles.high_10
        data = encode_avc_record(baseline_record)
        assert data[len(BASELINE_BYTES) :] == b"\xFD\xF8\xF8\x00"


class TestParameterSetLimits(object):
    def test_max_sps(self, baseline_record):
        baseline_record["sequence_parameter_sets"] = [SPS] * 31
        data = encode_avc_record(baseline_record)
        assert data[5:6] == b"\xFF"
        assert decode_avc_record(data) == baseline_record

    def test_too_many_sps(self, baseline_record):
        baseline_record["sequence_parameter_sets"] = [SPS] * 32
        with pytest.raises(FieldOverflow, match="sequence_parameter_sets"):
            encode_avc_record(baseline_record)

    def test_too_many_pps(self, baseline_record):
        baseline_record["picture_parameter_sets"] = [PPS] * 256
        with pytest.raises(FieldOverflow, match="picture_parameter_sets"):
            encode_avc_record(baseline_record)

    def test_no_parameter_sets(self, baseline_record):
        baseline_record["sequence_parameter_sets"] = []
        baseline_record["picture_parameter_sets"] = []
        data = encode_avc_record(baseline_record)
        assert data == b"\x01\x42\xC0\x1E\xFF\xE0\x00"
        assert avc_record_size(baseline_record) == 7
        assert decode_avc_record(data) == baseline_record

    def test_parameter_set_too_long(self, baseline_record):
        baseline_record["picture_parameter_sets"] = [b"\x00" * 65536]
        with pytest.raises(FieldOverflow):
            encode_avc_record(baseline_record)


class TestDecode(object):
    def test_reserved_bits_ignored(self, baseline_record, high_record):
        data = bytearray(BASELINE_BYTES)
        data[4] = 0x03
        data[5] = 0x01
        assert decode_avc_record(bytes(data)) == baseline_record
        assert encode_avc_record(decode_avc_record(bytes(data))) == BASELINE_BYTES

        data = bytearray(encode_avc_record(high_record))
        data[-4] = 0x01
        data[-3] = 0x00
        data[-2] = 0x00
        assert decode_avc_record(bytes(data)) == high_record

    @pytest.mark.parametrize("length", [0, 5, 6, 9, 10, 14])
    def test_truncated(self, length):
        with pytest.raises(Truncated):
            decode_avc_record(BASELINE_BYTES[:length])

    def test_truncated_extension(self, high_record):
        data = encode_avc_record(high_record)
        with pytest.raises(Truncated):
            decode_avc_record(data[:-1])

    @pytest.mark.parametrize("version", [0, 2, 255])
    def test_unsupported_version(self, baseline_record, version):
        data = bytes(bytearray([version])) + BASELINE_BYTES[1:]
        with pytest.raises(UnsupportedVersion) as exc_info:
            decode_avc_record(data)
        assert exc_info.value.configuration_version == version

        baseline_record["configuration_version"] = version
        assert decode_avc_record(data, check_version=False) == baseline_record

    def test_encode_does_not_check_version(self, baseline_record):
        baseline_record["configuration_version"] = 2
        assert encode_avc_record(baseline_record)[0:1] == b"\x02"


def test_str(baseline_record):
    string = str(baseline_record)
    assert "avc_profile_indication: baseline (66)" in string
    assert "profile_compatibility: 0xC0" in string
