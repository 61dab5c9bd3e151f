import base64

import pytest

# splice_time(): time_specified_flag set, then PTS bytes 01 02 03 04 05
SPLICE_TIME = bytes([0xFE, 0x01, 0x02, 0x03, 0x04, 0x05])
SPLICE_TIME_PTS = 8421890

# break_duration(): auto_return set, 30 seconds
BREAK_DURATION = ((0b11 << 38) | (2700000 << 5) | 0x1F).to_bytes(5, "big")

SPLICE_INSERT_BODY = (
    (42).to_bytes(4, "big")  # splice_event_id
    + bytes([0x7F])  # not cancelled
    + bytes([0xEF])  # out of network, program splice, duration, not immediate
    + SPLICE_TIME
    + BREAK_DURATION
    + (1).to_bytes(2, "big")  # unique_program_id
    + bytes([0x01, 0x02])  # avail_num, avails_expected
)

SEGMENTATION_DESCRIPTOR_BODY = (
    b"CUEI"
    + (7).to_bytes(4, "big")  # segmentation_event_id
    + bytes([0x7F])  # not cancelled
    + bytes([0xFF])  # program segmentation, duration, delivery not restricted
    + BREAK_DURATION
    + bytes([0x09, 0x04])  # upid type ADI, 4 bytes
    + b"ABCD"
    + bytes([0x22, 0x01, 0x02])  # Break Start, segment 1 of 2
)

CRC = bytes.fromhex("DEADBEEF")


def build_section(command_type, body, descriptor_loop=b""):
    """Assemble a splice_info_section around a command body."""
    after_length = (
        bytes([0x00])  # protocol_version, not encrypted
        + bytes(5)  # pts_adjustment
        + bytes([0xFF])  # cw_index
        + bytes([0xFF, 0xFF])  # tier
        + bytes([len(body) + 1, command_type])
        + body
        + len(descriptor_loop).to_bytes(2, "big")
        + descriptor_loop
        + CRC
    )
    return (
        bytes([0xFC]) + (0x3000 | len(after_length)).to_bytes(2, "big") + after_length
    )


@pytest.fixture
def splice_insert_section():
    return build_section(0x05, SPLICE_INSERT_BODY)


@pytest.fixture
def time_signal_section():
    descriptor = bytes([0x02, len(SEGMENTATION_DESCRIPTOR_BODY)])
    return build_section(0x07, SPLICE_TIME, descriptor + SEGMENTATION_DESCRIPTOR_BODY)


@pytest.fixture
def splice_insert_base64(splice_insert_section):
    return base64.b64encode(splice_insert_section).decode("ascii")
