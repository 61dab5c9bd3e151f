import pytest

from pyhlscue.parsers.reader import ByteReader, TruncatedReadError, read_duration, read_pts


def test_read_pts():
    assert read_pts(bytes([0x01, 0x02, 0x03, 0x04, 0x05])) == 8421890
    assert read_pts(bytes(5)) == 0


def test_read_pts_ignores_masked_bits():
    # Bit 0 of bytes 0, 2 and 4 and the top nibble of byte 0 are not part of the value
    assert read_pts(bytes([0xF1, 0x00, 0x01, 0x00, 0x01])) == 0


def test_read_pts_short():
    assert read_pts(bytes([0x01, 0x02, 0x03, 0x04])) is None


def test_read_duration():
    data = ((0b11 << 38) | (2700000 << 5) | 0x1F).to_bytes(5, "big")
    assert read_duration(data) == (True, 2700000)

    data = ((0b01 << 38) | (90000 << 5)).to_bytes(5, "big")
    assert read_duration(data) == (False, 90000)


def test_read_duration_short():
    assert read_duration(bytes(4)) is None


def test_byte_reader_reads_in_order():
    reader = ByteReader(bytes([0xFC, 0x30, 0x11, 0xAA]))
    assert reader.read_uint(1, "table_id") == 0xFC
    assert reader.read_bits(2, "bool, bool, uint:2, uint:12", "section_length") == [
        False,
        False,
        3,
        0x011,
    ]
    assert reader.peek(4) == bytes([0xAA])
    assert reader.remaining == 1
    assert reader.read_rest() == bytes([0xAA])
    assert reader.remaining == 0


def test_byte_reader_truncation_names_field():
    reader = ByteReader(bytes([0x01, 0x02]))
    reader.read(1, "first")

    with pytest.raises(TruncatedReadError) as excinfo:
        reader.read_uint(4, "splice_event_id")

    assert excinfo.value.field_name == "splice_event_id"
    assert excinfo.value.needed == 4
    assert excinfo.value.available == 1
    # A failed read does not move the cursor
    assert reader.position == 1

    error = excinfo.value.to_error()
    assert error.field_name == "splice_event_id"


def test_byte_reader_seek_is_clamped():
    reader = ByteReader(bytes(4))
    reader.seek(10)
    assert reader.position == 4
    reader.seek(-1)
    assert reader.position == 0
