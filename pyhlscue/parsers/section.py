"""Parser for the SCTE-35 splice_info_section."""

import logging
from typing import Any, Dict, List, Optional, Union

from ..models.cue_message import (
    SCTE35_TABLE_ID,
    CueMessage,
    Descriptor,
    SegmentationDescriptor,
    SpliceCommand,
    SpliceInsert,
)
from ..models.errors import (
    FormatError,
    ParseWarning,
    TruncationError,
    UnknownTypeNotice,
)
from ..utils.scte35_utils import COMMAND_TYPE_NAMES, DESCRIPTOR_TAG_NAMES
from .commands import parse_splice_command
from .descriptors import parse_descriptor
from .reader import ByteReader, TruncatedReadError

logger = logging.getLogger(__name__)

# table_id and the two section_length bytes precede section_length
SECTION_HEADER_SIZE = 3
CRC_SIZE = 4


def _build_message(
    fields: Dict[str, Any],
    descriptors: List[Descriptor],
    notices: list,
    error: Optional[Union[FormatError, TruncationError]] = None,
) -> CueMessage:
    return CueMessage(
        **fields,
        descriptors=tuple(descriptors),
        notices=tuple(notices),
        error=error,
    )


def _command_notices(command_type: int, command: SpliceCommand) -> list:
    notices = []
    if command_type not in COMMAND_TYPE_NAMES:
        notices.append(UnknownTypeNotice(kind="splice_command", type_value=command_type))
    if isinstance(command, SpliceInsert) and command.is_component_splice:
        notices.append(
            ParseWarning(
                field_name="splice_insert",
                message="component splice not decoded, skipped to end of command",
            )
        )
    return notices


def _descriptor_notices(descriptor: Descriptor) -> list:
    notices = []
    if descriptor.tag not in DESCRIPTOR_TAG_NAMES:
        notices.append(UnknownTypeNotice(kind="descriptor", type_value=descriptor.tag))
    if isinstance(descriptor.info, SegmentationDescriptor) and descriptor.info.unparsed:
        notices.append(
            ParseWarning(
                field_name="segmentation_descriptor",
                message=f"{len(descriptor.info.unparsed)} trailing byte(s) not interpreted",
            )
        )
    return notices


def parse_splice_info_section(data: bytes) -> CueMessage:
    """Parse a splice_info_section from raw bytes.

    Parsing stops at the first field that cannot be read. The returned
    message then carries a TruncationError naming that field, and keeps
    every field read before it. A buffer that does not start with 0xFC
    yields a FormatError and only ``table_id`` is populated.

    The CRC_32 is located and returned as raw bytes, it is not verified.

    Args:
        data: Binary data containing the section

    Returns:
        CueMessage object
    """
    reader = ByteReader(data)
    fields: Dict[str, Any] = {}
    descriptors: List[Descriptor] = []
    notices: list = []

    try:
        table_id = reader.read_uint(1, "table_id")
        fields["table_id"] = table_id
        if table_id != SCTE35_TABLE_ID:
            logger.warning(
                f"Not a standard SCTE-35 message (invalid table ID: 0x{table_id:02x})"
            )
            return CueMessage(
                table_id=table_id, error=FormatError(table_id=table_id, raw=bytes(data))
            )

        (
            fields["section_syntax_indicator"],
            fields["private_indicator"],
            _reserved,
            section_length,
        ) = reader.read_bits(2, "bool, bool, uint:2, uint:12", "section_length")
        fields["section_length"] = section_length

        if section_length > reader.remaining:
            logger.warning(
                f"Declared section length ({section_length}) exceeds remaining "
                f"data length ({reader.remaining})"
            )

        (
            fields["protocol_version"],
            fields["encrypted_packet"],
            fields["encryption_algorithm"],
        ) = reader.read_bits(1, "uint:3, bool, uint:4", "protocol_version")

        fields["pts_adjustment"] = reader.read_pts("pts_adjustment")
        fields["cw_index"] = reader.read_uint(1, "cw_index")
        fields["tier"] = reader.read_uint(2, "tier") & 0x0FFF

        command_length = reader.read_uint(1, "splice_command_length")
        fields["splice_command_length"] = command_length

        if command_length > 0:
            command_type = reader.read_uint(1, "splice_command_type")
            fields["splice_command_type"] = command_type

            # The declared length includes the type byte
            body_length = command_length - 1
            command = parse_splice_command(command_type, reader.peek(body_length))
            fields["splice_command"] = command
            notices.extend(_command_notices(command_type, command))

            command_error = getattr(command, "error", None)
            if command_error is not None:
                return _build_message(fields, descriptors, notices, command_error)

            reader.skip(body_length, "splice_command")
        else:
            logger.debug("Splice command length is 0, no command present")

        loop_length = reader.read_uint(2, "descriptor_loop_length")
        fields["descriptor_loop_length"] = loop_length
        loop_end = reader.position + loop_length

        # Descriptors are read from the loop only, never from the CRC behind it
        loop = ByteReader(reader.peek(loop_length))
        while loop.position < loop_length:
            tag = loop.read_uint(1, "descriptor.tag")
            length = loop.read_uint(1, "descriptor.length")
            descriptor = parse_descriptor(tag, length, loop.peek(length))
            descriptors.append(descriptor)
            notices.extend(_descriptor_notices(descriptor))

            if descriptor.error is not None:
                return _build_message(fields, descriptors, notices, descriptor.error)

            loop.skip(length, f"descriptor.{descriptor.tag_name}")

        reader.seek(loop_end)

        # CRC_32 is the last 4 bytes of the section
        section_end = SECTION_HEADER_SIZE + section_length
        crc_offset = section_end - CRC_SIZE
        if crc_offset < loop_end:
            notices.append(
                ParseWarning(
                    field_name="section_length",
                    message=(
                        f"section ends at byte {section_end}, leaving no room for "
                        f"CRC_32 after the descriptor loop end ({loop_end})"
                    ),
                )
            )
            crc_offset = loop_end
        reader.seek(crc_offset)
        fields["crc_32"] = reader.read(CRC_SIZE, "crc_32")

    except TruncatedReadError as e:
        logger.warning(f"Truncated SCTE-35 data: {e}")
        return _build_message(fields, descriptors, notices, e.to_error())

    return _build_message(fields, descriptors, notices)
