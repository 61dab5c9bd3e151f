from pyhlscue.conftest import (
    CRC,
    SEGMENTATION_DESCRIPTOR_BODY,
    SPLICE_TIME,
    SPLICE_TIME_PTS,
    build_section,
)
from pyhlscue.models import (
    FormatError,
    ParseWarning,
    RawSpliceCommand,
    SegmentationDescriptor,
    SpliceInsert,
    TimeSignal,
    TruncationError,
    UnknownTypeNotice,
)
from pyhlscue.parsers.section import parse_splice_info_section


def test_parse_splice_insert_section(splice_insert_section):
    message = parse_splice_info_section(splice_insert_section)

    assert message.error is None
    assert message.is_valid
    assert message.table_id == 0xFC
    assert message.section_syntax_indicator is False
    assert message.private_indicator is False
    assert message.section_length == len(splice_insert_section) - 3
    assert message.protocol_version == 0
    assert message.encrypted_packet is False
    assert message.pts_adjustment == 0
    assert message.cw_index == 0xFF
    assert message.tier == 0xFFF
    assert message.splice_command_type == 0x05
    assert message.splice_command_type_name == "splice_insert"
    assert isinstance(message.splice_command, SpliceInsert)
    assert message.splice_command.splice_time.pts_time == SPLICE_TIME_PTS
    assert message.descriptor_loop_length == 0
    assert message.descriptors == ()
    assert message.crc_32 == CRC
    assert message.notices == ()


def test_parse_time_signal_section(time_signal_section):
    message = parse_splice_info_section(time_signal_section)

    assert message.error is None
    assert message.splice_command_type_name == "splice_time_signal"
    assert isinstance(message.splice_command, TimeSignal)
    assert len(message.descriptors) == 1
    assert message.descriptors[0].tag == 0x02
    assert isinstance(message.descriptors[0].info, SegmentationDescriptor)
    assert message.segmentation_descriptors[0].event_id == 7
    assert message.crc_32 == CRC


def test_every_prefix_is_truncated(splice_insert_section, time_signal_section):
    for section in (splice_insert_section, time_signal_section):
        for length in range(len(section)):
            message = parse_splice_info_section(section[:length])
            assert isinstance(message.error, TruncationError), length
            assert not message.is_valid


def test_truncation_names_the_field(splice_insert_section):
    assert parse_splice_info_section(b"").error.field_name == "table_id"
    assert parse_splice_info_section(b"\xfc").error.field_name == "section_length"

    message = parse_splice_info_section(splice_insert_section[:6])
    assert message.error.field_name == "pts_adjustment"
    assert message.table_id == 0xFC
    assert message.protocol_version == 0
    assert message.pts_adjustment is None

    message = parse_splice_info_section(splice_insert_section[:-2])
    assert message.error.field_name == "crc_32"
    assert isinstance(message.splice_command, SpliceInsert)


def test_truncated_command_keeps_partial_command(splice_insert_section):
    # Cut inside the break_duration
    message = parse_splice_info_section(splice_insert_section[:30])

    assert message.error.field_name == "splice_insert.break_duration"
    assert message.splice_command.splice_event_id == 42
    assert message.splice_command.break_duration is None


def test_invalid_table_id():
    message = parse_splice_info_section(b"\x00\x01\x02")

    assert isinstance(message.error, FormatError)
    assert message.error.table_id == 0x00
    assert message.table_id == 0x00
    assert message.section_length is None
    assert str(message.error) == "Not a standard SCTE-35 message (invalid table ID: 0x00)"


def test_zero_length_command():
    after_length = bytes([0x00]) + bytes(5) + bytes([0xFF, 0xFF, 0xFF, 0x00, 0x00, 0x00]) + CRC
    section = bytes([0xFC, 0x30, len(after_length)]) + after_length
    message = parse_splice_info_section(section)

    assert message.error is None
    assert message.splice_command_length == 0
    assert message.splice_command is None
    assert message.splice_command_type is None
    assert message.crc_32 == CRC


def test_unknown_command_type():
    message = parse_splice_info_section(build_section(0x42, b"\x01\x02"))

    assert message.error is None
    assert message.splice_command_type_name == "unknown"
    assert message.splice_command == RawSpliceCommand(command_type=0x42, raw=b"\x01\x02")
    assert message.notices == (UnknownTypeNotice(kind="splice_command", type_value=0x42),)
    assert message.crc_32 == CRC


def test_unknown_descriptor_tag():
    loop = (
        bytes([0x09, 0x03, 0xAA, 0xBB, 0xCC])
        + bytes([0x02, len(SEGMENTATION_DESCRIPTOR_BODY)])
        + SEGMENTATION_DESCRIPTOR_BODY
    )
    message = parse_splice_info_section(build_section(0x07, SPLICE_TIME, loop))

    assert message.error is None
    assert [d.tag_name for d in message.descriptors] == [
        "Unknown (0x09)",
        "segmentation_descriptor",
    ]
    assert message.descriptors[0].info.raw == b"\xaa\xbb\xcc"
    # Parsing carries on past the unknown tag
    assert message.descriptors[1].info.event_id == 7
    assert message.segmentation_descriptors[0].type_id == 0x22
    assert message.notices == (UnknownTypeNotice(kind="descriptor", type_value=0x09),)
    assert message.crc_32 == CRC


def test_descriptor_longer_than_loop():
    # Declares 4 body bytes, but the loop holds only the tag and length
    message = parse_splice_info_section(
        build_section(0x07, SPLICE_TIME, bytes([0x09, 0x04]))
    )

    assert isinstance(message.error, TruncationError)
    assert message.error.field_name == "descriptor.Unknown (0x09)"
    assert message.error.needed == 4
    assert message.error.available == 0
    assert message.descriptors[0].info.raw == b""
    assert message.crc_32 is None


def test_section_length_inside_descriptor_loop(time_signal_section):
    section = bytearray(time_signal_section)
    section[1:3] = (0x3000 | 20).to_bytes(2, "big")
    message = parse_splice_info_section(bytes(section))

    assert message.error is None
    assert message.crc_32 == CRC
    warning = message.notices[0]
    assert warning.field_name == "section_length"
    assert "section ends at byte 23" in warning.message
    assert f"descriptor loop end ({len(time_signal_section) - 4})" in warning.message


def test_short_header_is_reported_not_raised():
    message = parse_splice_info_section(bytes.fromhex("fc300000"))

    assert isinstance(message.error, TruncationError)
    assert message.error.field_name == "pts_adjustment"
    assert message.section_syntax_indicator is False
    assert message.section_length == 0
    assert message.protocol_version == 0


def test_component_splice_is_skipped():
    body = (3).to_bytes(4, "big") + bytes([0x7F, 0x8F, 0x01, 0x02, 0x03])
    message = parse_splice_info_section(build_section(0x05, body))

    assert message.error is None
    assert message.splice_command.is_component_splice
    assert any(isinstance(notice, ParseWarning) for notice in message.notices)
    assert message.crc_32 == CRC


def test_short_section_length_is_noted(splice_insert_section):
    section = bytearray(splice_insert_section)
    section[1:3] = (0x3000 | 10).to_bytes(2, "big")
    message = parse_splice_info_section(bytes(section))

    assert message.error is None
    assert message.section_length == 10
    assert message.crc_32 == CRC
    assert message.notices[0].field_name == "section_length"


def test_to_dict_encodes_bytes_as_hex(splice_insert_section):
    result = parse_splice_info_section(splice_insert_section).to_dict()

    assert result["crc_32"] == "deadbeef"
    assert result["splice_command"]["splice_event_id"] == 42
