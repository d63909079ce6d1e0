import pytest

import logging

from dcr_codecs.records import (
    HEVCDecoderConfigurationRecord,
    NALArray,
    HEVCNALUnitTypes,
    encode_hevc_record,
    encode_avc_record,
    encode_dovi_record,
)

from dcr_codecs.scripts.dcr_record_viewer import (
    RecordViewer,
    parse_args,
    main,
)


@pytest.fixture
def filename(tmpdir):
    return str(tmpdir.join("record.bin"))


@pytest.fixture
def hevc_data():
    return encode_hevc_record(
        HEVCDecoderConfigurationRecord(
            general_profile_idc=1,
            general_level_idc=93,
            nal_arrays=[
                NALArray(
                    nal_unit_type=HEVCNALUnitTypes.vps,
                    nal_units=[b"\x40\x01\x0C\x01\xFF"],
                ),
            ],
        )
    )


@pytest.fixture
def dovi_data():
    return encode_dovi_record({"dv_profile": 5, "dv_level": 3})


def write(filename, data):
    with open(filename, "wb") as f:
        f.write(data)


class TestRecordViewer(object):
    def test_hevc(self, filename, hevc_data, capsys):
        write(filename, hevc_data)
        assert RecordViewer(filename, "hevc").run() == 0

        stdout, stderr = capsys.readouterr()
        assert stderr == ""
        assert stdout.startswith("HEVCDecoderConfigurationRecord:\n")
        assert "general_level_idc: 93" in stdout
        assert "nal_unit_type: vps (0x20)" in stdout

    def test_avc(self, filename, capsys):
        write(
            filename,
            encode_avc_record(
                {
                    "avc_profile_indication": 100,
                    "avc_level_indication": 40,
                    "sequence_parameter_sets": [b"\x67\x64"],
                    "picture_parameter_sets": [b"\x68\xEE"],
                }
            ),
        )
        assert RecordViewer(filename, "avc").run() == 0

        stdout, stderr = capsys.readouterr()
        assert stdout.startswith("AVCDecoderConfigurationRecord:\n")
        assert "avc_profile_indication: high (100)" in stdout
        assert "chroma_format: 1" in stdout

    def test_dovi(self, filename, dovi_data, capsys):
        write(filename, dovi_data)
        assert RecordViewer(filename, "dovi").run() == 0

        stdout, stderr = capsys.readouterr()
        assert stdout.startswith("DoviDecoderConfigurationRecord:\n")
        assert "dv_profile: 5" in stdout

    def test_offset(self, filename, dovi_data, capsys):
        write(filename, b"\xFF" * 10 + dovi_data)
        assert RecordViewer(filename, "dovi", offset=10).run() == 0

        stdout, stderr = capsys.readouterr()
        assert "dv_profile: 5" in stdout

    def test_io_error(self, filename, capsys):
        # File does not exist
        assert RecordViewer(filename, "hevc").run() == 1

        stdout, stderr = capsys.readouterr()
        assert stdout == ""
        assert "No such file or directory" in stderr

    def test_truncated(self, filename, hevc_data, capsys):
        write(filename, hevc_data[:-1])
        assert RecordViewer(filename, "hevc").run() == 2

        stdout, stderr = capsys.readouterr()
        assert stdout == ""
        assert "error: record is truncated" in stderr
        assert "Traceback" not in stderr

    def test_unsupported_version(self, filename, hevc_data, capsys):
        write(filename, b"\x02" + hevc_data[1:])
        assert RecordViewer(filename, "hevc").run() == 2

        stdout, stderr = capsys.readouterr()
        assert stdout == ""
        assert stderr.endswith("error: configuration_version 2 is not supported\n")

        assert RecordViewer(filename, "hevc", check_version=False).run() == 0
        stdout, stderr = capsys.readouterr()
        assert "configuration_version: 2" in stdout

    @pytest.mark.parametrize("verbose", [0, 1])
    def test_traceback(self, filename, capsys, verbose):
        write(filename, b"\x01")
        assert RecordViewer(filename, "avc", verbose=verbose).run() == 2

        stdout, stderr = capsys.readouterr()
        if verbose == 0:
            assert "Traceback" not in stderr
        else:
            assert "Traceback" in stderr
            assert "Truncated" in stderr

    def test_field_logging(self, filename, dovi_data, caplog):
        caplog.set_level(logging.DEBUG)
        write(filename, b"\x00" * 4 + dovi_data)
        assert RecordViewer(filename, "dovi", offset=4).run() == 0

        assert (
            "DoviDecoderConfigurationRecord['dv_profile'] = 5 (next bit offset 55)"
            in caplog.text
        )
        assert "decoded a 24 byte record" in caplog.text


def test_main(filename, dovi_data, capsys):
    write(filename, b"\x00" + dovi_data)
    assert main([filename, "--type", "dovi", "--offset", "1"]) == 0

    stdout, stderr = capsys.readouterr()
    assert "bl_present_flag: True" in stdout


def test_main_no_version_check(filename, hevc_data, capsys):
    write(filename, b"\x00" + hevc_data[1:])
    assert main([filename, "-t", "hevc"]) == 2
    assert main([filename, "-t", "hevc", "--no-version-check"]) == 0


class TestParseArgs(object):
    def test_defaults(self):
        args = parse_args(["foo.bin", "-t", "avc"])
        assert args.filename == "foo.bin"
        assert args.type == "avc"
        assert args.offset == 0
        assert args.no_version_check is False
        assert args.verbose == 0

    def test_verbose(self):
        assert parse_args(["foo.bin", "-t", "avc", "-vv"]).verbose == 2

    @pytest.mark.parametrize(
        "arg_string",
        [
            # Missing type
            ["foo.bin"],
            # Unknown type
            ["foo.bin", "-t", "vvc"],
            # Negative offset
            ["foo.bin", "-t", "avc", "--offset", "-1"],
            # Non-integer offset
            ["foo.bin", "-t", "avc", "--offset", "abc"],
        ],
    )
    def test_invalid(self, arg_string):
        with pytest.raises(SystemExit):
            parse_args(arg_string)
