from pyhlscue.conftest import SEGMENTATION_DESCRIPTOR_BODY
from pyhlscue.models import RawDescriptor, SegmentationDescriptor
from pyhlscue.parsers.descriptors import parse_descriptor, parse_segmentation_descriptor


def test_parse_segmentation_descriptor():
    descriptor = parse_segmentation_descriptor(SEGMENTATION_DESCRIPTOR_BODY)

    assert descriptor.error is None
    assert descriptor.identifier == "CUEI"
    assert descriptor.event_id == 7
    assert descriptor.cancel_indicator is False
    assert descriptor.program_segmentation_flag is True
    assert descriptor.segmentation_duration_flag is True
    assert descriptor.delivery_not_restricted is True
    # Restriction sub-flags are not reported when delivery is not restricted
    assert descriptor.web_delivery_allowed is None
    assert descriptor.segmentation_duration == 2700000
    assert descriptor.segmentation_duration_seconds == 30.0
    assert descriptor.upid_type == 0x09
    assert descriptor.upid_length == 4
    assert descriptor.upid == b"ABCD"
    assert descriptor.type_id == 0x22
    assert descriptor.type_id_name == "Break Start"
    assert descriptor.is_ad_start is True
    assert descriptor.is_ad_end is False
    assert descriptor.segment_num == 1
    assert descriptor.segments_expected == 2
    assert descriptor.unparsed == b""


def test_parse_segmentation_descriptor_restricted_delivery():
    body = (
        b"CUEI"
        + (1).to_bytes(4, "big")
        + bytes([0x7F, 0x97])  # program segmentation, restricted delivery
        + bytes([0x0C, 0x00, 0x31, 0x01, 0x01])
    )
    descriptor = parse_segmentation_descriptor(body)

    assert descriptor.error is None
    assert descriptor.delivery_not_restricted is False
    assert descriptor.web_delivery_allowed is True
    assert descriptor.no_regional_blackout is False
    assert descriptor.archive_allowed is True
    assert descriptor.device_restrictions == 3
    assert descriptor.segmentation_duration is None
    assert descriptor.upid == b""
    assert descriptor.type_id == 0x31
    assert descriptor.is_ad_end is True


def test_parse_segmentation_descriptor_cancelled():
    descriptor = parse_segmentation_descriptor(
        b"CUEI" + (5).to_bytes(4, "big") + bytes([0xFF])
    )
    assert descriptor.error is None
    assert descriptor.cancel_indicator is True
    assert descriptor.type_id is None


def test_parse_segmentation_descriptor_keeps_trailing_bytes():
    descriptor = parse_segmentation_descriptor(SEGMENTATION_DESCRIPTOR_BODY + b"\x03\x04")
    assert descriptor.error is None
    assert descriptor.unparsed == b"\x03\x04"


def test_parse_segmentation_descriptor_non_ascii_identifier():
    body = bytes([0x00, 0x01, 0x02, 0x03]) + SEGMENTATION_DESCRIPTOR_BODY[4:]
    assert parse_segmentation_descriptor(body).identifier == "00010203"


def test_parse_segmentation_descriptor_truncated():
    descriptor = parse_segmentation_descriptor(SEGMENTATION_DESCRIPTOR_BODY[:-1])
    assert descriptor.error.field_name == "segmentation_descriptor.segments_expected"
    assert descriptor.segment_num == 1
    assert descriptor.type_id_name == "Break Start"


def test_parse_descriptor():
    descriptor = parse_descriptor(0x02, len(SEGMENTATION_DESCRIPTOR_BODY), SEGMENTATION_DESCRIPTOR_BODY)
    assert descriptor.tag_name == "segmentation_descriptor"
    assert isinstance(descriptor.info, SegmentationDescriptor)

    descriptor = parse_descriptor(0x00, 4, b"CUEI")
    assert descriptor.tag_name == "avail_descriptor"
    assert descriptor.info == RawDescriptor(raw=b"CUEI")

    descriptor = parse_descriptor(0x09, 3, b"\xaa\xbb\xcc")
    assert descriptor.tag_name == "Unknown (0x09)"
    assert descriptor.info.raw == b"\xaa\xbb\xcc"
    assert descriptor.error is None
