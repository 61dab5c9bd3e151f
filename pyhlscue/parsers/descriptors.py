"""Decoders for SCTE-35 splice descriptors."""

import logging
from typing import Any, Dict

from ..models.cue_message import (
    Descriptor,
    DescriptorTag,
    RawDescriptor,
    SegmentationDescriptor,
)
from ..utils.scte35_utils import (
    DESCRIPTOR_TAG_NAMES,
    get_descriptor_tag_name,
    get_segmentation_type_name,
    is_ad_end_type,
    is_ad_start_type,
)
from .reader import ByteReader, TruncatedReadError

logger = logging.getLogger(__name__)


def _decode_identifier(raw: bytes) -> str:
    """Decode the 4-byte identifier as ASCII when printable, else as hex."""
    if all(0x20 <= b <= 0x7E for b in raw):
        return raw.decode("ascii")
    return raw.hex()


def parse_segmentation_descriptor(data: bytes) -> SegmentationDescriptor:
    """Parse a segmentation_descriptor() body (the bytes after tag and length).

    Args:
        data: Descriptor body

    Returns:
        SegmentationDescriptor, with ``error`` set if the body is too short
    """
    reader = ByteReader(data)
    fields: Dict[str, Any] = {}

    try:
        fields["identifier"] = _decode_identifier(
            reader.read(4, "segmentation_descriptor.identifier")
        )
        fields["event_id"] = reader.read_uint(4, "segmentation_descriptor.event_id")
        (fields["cancel_indicator"],) = reader.read_bits(
            1, "bool", "segmentation_descriptor.cancel_indicator"
        )
        if fields["cancel_indicator"]:
            return SegmentationDescriptor(**fields)

        (
            fields["program_segmentation_flag"],
            fields["segmentation_duration_flag"],
            fields["delivery_not_restricted"],
            web_delivery_allowed,
            no_regional_blackout,
            archive_allowed,
            device_restrictions,
        ) = reader.read_bits(
            1,
            "bool, bool, bool, bool, bool, bool, uint:2",
            "segmentation_descriptor.flags",
        )

        # The restriction sub-flags are only meaningful when delivery is restricted
        if not fields["delivery_not_restricted"]:
            fields["web_delivery_allowed"] = web_delivery_allowed
            fields["no_regional_blackout"] = no_regional_blackout
            fields["archive_allowed"] = archive_allowed
            fields["device_restrictions"] = device_restrictions

        if fields["segmentation_duration_flag"]:
            _, fields["segmentation_duration"] = reader.read_duration(
                "segmentation_descriptor.segmentation_duration"
            )

        fields["upid_type"] = reader.read_uint(1, "segmentation_descriptor.upid_type")
        fields["upid_length"] = reader.read_uint(
            1, "segmentation_descriptor.upid_length"
        )
        fields["upid"] = reader.read(
            fields["upid_length"], "segmentation_descriptor.upid"
        )

        type_id = reader.read_uint(1, "segmentation_descriptor.type_id")
        fields["type_id"] = type_id
        fields["type_id_name"] = get_segmentation_type_name(type_id)
        fields["is_ad_start"] = is_ad_start_type(type_id)
        fields["is_ad_end"] = is_ad_end_type(type_id)

        fields["segment_num"] = reader.read_uint(
            1, "segmentation_descriptor.segment_num"
        )
        fields["segments_expected"] = reader.read_uint(
            1, "segmentation_descriptor.segments_expected"
        )

    except TruncatedReadError as e:
        logger.warning(f"Truncated segmentation descriptor: {e}")
        return SegmentationDescriptor(**fields, error=e.to_error())

    # sub_segment_num / sub_segments_expected and anything after are kept raw
    fields["unparsed"] = reader.read_rest()
    if fields["unparsed"]:
        logger.warning(
            f"Segmentation descriptor has {len(fields['unparsed'])} unparsed bytes"
        )

    return SegmentationDescriptor(**fields)


def parse_descriptor(tag: int, length: int, data: bytes) -> Descriptor:
    """Decode one splice descriptor.

    Args:
        tag: splice_descriptor_tag
        length: Declared descriptor_length
        data: Descriptor body (may be shorter than ``length`` if truncated)

    Returns:
        Descriptor wrapping a SegmentationDescriptor for tag 0x02 and a
        RawDescriptor for every other tag
    """
    if tag == DescriptorTag.SEGMENTATION:
        info = parse_segmentation_descriptor(data)
    else:
        if tag not in DESCRIPTOR_TAG_NAMES:
            logger.warning(f"Unknown descriptor tag: 0x{tag:02x}")
        info = RawDescriptor(raw=bytes(data))

    return Descriptor(
        tag=tag,
        tag_name=get_descriptor_tag_name(tag),
        length=length,
        info=info,
    )
