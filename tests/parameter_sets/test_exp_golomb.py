import pytest

from io import BytesIO

from dcr_codecs.exceptions import FieldOverflow, MalformedParameterSet, Truncated

from dcr_codecs.bitstream import BitstreamReader, BitstreamWriter

from dcr_codecs.parameter_sets import read_ue, write_ue


@pytest.mark.parametrize(
    "data,value",
    [
        (b"\x80", 0),
        (b"\x40", 1),
        (b"\x60", 2),
        (b"\x20", 3),
        (b"\x38", 6),
        (b"\x10", 7),
        (b"\x00\x80\x00", 255),
    ],
)
def test_read_ue(data, value):
    reader = BitstreamReader(BytesIO(data))
    assert read_ue(reader) == value


def test_read_ue_sequence():
    # 1 010 011 00100
    reader = BitstreamReader(BytesIO(b"\xA6\x40"))
    assert [read_ue(reader) for _ in range(4)] == [0, 1, 2, 3]
    assert reader.tell() == (1, 3)


def test_read_ue_too_many_zeros():
    reader = BitstreamReader(BytesIO(b"\x00" * 5 + b"\xFF"))
    with pytest.raises(MalformedParameterSet):
        read_ue(reader)


def test_read_ue_truncated():
    reader = BitstreamReader(BytesIO(b"\x00"))
    with pytest.raises(Truncated):
        read_ue(reader)


@pytest.mark.parametrize("value", [0, 1, 2, 3, 100, 1919, 1080, (1 << 32) - 2])
def test_write_ue(value):
    f = BytesIO()
    writer = BitstreamWriter(f)
    write_ue(writer, value)
    length = writer.tell()[0] * 8 + (7 - writer.tell()[1])
    assert length == 2 * (value + 1).bit_length() - 1
    writer.write_bit(1)
    writer.flush()

    reader = BitstreamReader(BytesIO(f.getvalue()))
    assert read_ue(reader) == value


def test_write_ue_negative():
    writer = BitstreamWriter(BytesIO())
    with pytest.raises(FieldOverflow):
        write_ue(writer, -1)
