"""Utility functions for formatting decoded SCTE-35 cues."""

import datetime
import json
from typing import Any, List, Optional

from timecode import Timecode

from ..models.cue_message import (
    TICKS_PER_SECOND,
    CueMessage,
    RawSpliceCommand,
    SegmentationDescriptor,
    SpliceInsert,
    SpliceTime,
    TimeSignal,
)
from ..models.errors import (
    DecodeError,
    FormatError,
    ParseWarning,
    TruncationError,
    UnknownTypeNotice,
)

# Default frame rate for timecode display
FRAME_RATE = 25


def ticks_to_seconds(ticks: int) -> float:
    """Convert 90 kHz clock ticks to seconds."""
    return ticks / TICKS_PER_SECOND


def pts_to_timecode(ticks: int, framerate: float = FRAME_RATE) -> str:
    """Format a 90 kHz tick count as an HH:MM:SS:FF timecode.

    Args:
        ticks: PTS or duration in 90 kHz ticks
        framerate: Frames per second

    Returns:
        Timecode string
    """
    # Timecode counts frames from 1
    frames = int(ticks_to_seconds(ticks) * framerate) + 1
    return str(Timecode(framerate, frames=frames))


def _describe_splice_time(splice_time: SpliceTime, prefix: str) -> str:
    if splice_time.pts_time is None:
        return f"{prefix} (error parsing)"
    return (
        f"{prefix} {splice_time.pts_seconds:.3f}s "
        f"({splice_time.pts_time} ticks)"
    )


def _describe_splice_insert(command: SpliceInsert) -> str:
    if command.splice_event_cancel_indicator:
        return f": Cancel splice event ID {command.splice_event_id}"

    result = ": OUT (Ad Start)" if command.out_of_network_indicator else ": IN (Ad End)"

    if command.splice_immediate_flag:
        result += " - Immediate"
    elif command.splice_time is not None and command.splice_time.specified:
        result += _describe_splice_time(command.splice_time, " - At PTS")

    if command.break_duration is not None:
        result += (
            f" - Duration: {command.break_duration.seconds:.3f}s "
            f"({command.break_duration.duration} ticks)"
        )

    result += f" - Event ID: {command.splice_event_id}"
    if command.unique_program_id is not None:
        result += f" - Program ID: {command.unique_program_id}"
    if command.avail_num is not None:
        result += f" - Avail Num: {command.avail_num}/{command.avails_expected}"

    return result


def _describe_segmentation(index: int, descriptor: SegmentationDescriptor) -> str:
    if descriptor.cancel_indicator:
        return f"[Seg {index}: Cancel Event ID {descriptor.event_id}]"

    parts = [f"[Seg {index}: {descriptor.type_id_name} Event ID {descriptor.event_id}"]
    if descriptor.identifier:
        parts.append(f"Identifier: {descriptor.identifier}")
    if descriptor.segmentation_duration is not None:
        parts.append(f"Duration: {descriptor.segmentation_duration_seconds:.3f}s")
    if descriptor.upid:
        parts.append(
            f"UPID Type {descriptor.upid_type}: [{descriptor.upid_length} bytes]"
        )
    if descriptor.segment_num is not None:
        parts.append(
            f"Segment {descriptor.segment_num}/{descriptor.segments_expected}"
        )
    return " | ".join(parts) + "]"


def _describe_time_signal(command: TimeSignal, message: CueMessage) -> str:
    if command.splice_time is not None and command.splice_time.specified:
        result = _describe_splice_time(command.splice_time, ": Time Signal at PTS")
    else:
        result = ": Time Signal (unspecified time)"

    entries: List[str] = []
    seg_index = 0
    for descriptor in message.descriptors:
        if isinstance(descriptor.info, SegmentationDescriptor):
            entries.append(_describe_segmentation(seg_index, descriptor.info))
            seg_index += 1
        else:
            entries.append(f"[Tag: 0x{descriptor.tag:02x} ({descriptor.tag_name})]")

    if entries:
        result += " (Descriptors: " + " ".join(entries) + ")"
    return result


def summarize_cue_message(message: Optional[CueMessage]) -> str:
    """Describe a parsed cue message in one line.

    Args:
        message: Parsed CueMessage

    Returns:
        Human-readable summary. A message carrying an error is summarised as
        "Invalid SCTE-35 signal: <error>".
    """
    if message is None:
        return "Invalid SCTE-35 signal: No data"
    if message.error is not None:
        return f"Invalid SCTE-35 signal: {message.error}"

    description = f"SCTE-35: {message.splice_command_type_name}"
    if message.pts_adjustment is not None:
        description += f" (PTS Adj: {message.pts_adjustment})"

    command = message.splice_command
    if isinstance(command, SpliceInsert):
        description += _describe_splice_insert(command)
        if command.splice_event_cancel_indicator:
            return description
    elif isinstance(command, TimeSignal):
        return description + _describe_time_signal(command, message)

    if message.descriptors:
        tags = " ".join(
            f"[Tag: 0x{descriptor.tag:02x} ({descriptor.tag_name})]"
            for descriptor in message.descriptors
        )
        description += f" (Descriptors: {tags})"

    return description


def format_cue_data(message: CueMessage) -> str:
    """Format the header fields of a cue message as a readable block.

    Args:
        message: Parsed CueMessage

    Returns:
        Formatted multi-line string
    """
    result = f"SCTE-35 Section - Table ID: 0x{(message.table_id or 0):02x}\n"
    result += f"Section Length: {message.section_length}\n"
    result += f"Protocol Version: {message.protocol_version}\n"
    result += f"Encrypted: {message.encrypted_packet}\n"
    result += f"PTS Adjustment: {message.pts_adjustment}\n"
    result += f"Tier: 0x{(message.tier or 0):03x}\n"
    result += f"Command: {message.splice_command_type_name}"
    if message.splice_command_type is not None:
        result += f" (0x{message.splice_command_type:02x})"
    result += "\n"

    command = message.splice_command
    if isinstance(command, RawSpliceCommand):
        if command.kind is None:
            result += "Command Type: not defined by SCTE-35\n"
        result += f"Command Bytes: {command.raw.hex()}\n"

    result += f"Descriptors: {len(message.descriptors)}\n"
    for i, descriptor in enumerate(message.descriptors):
        result += f"  [{i}] {descriptor.tag_name} (length {descriptor.length})\n"

    if message.crc_32 is not None:
        result += f"CRC-32: {message.crc_32.hex()} (not verified)\n"
    for notice in message.notices:
        result += f"Notice: {notice}\n"
    if message.error is not None:
        result += f"Error: {message.error}\n"

    return result


class CueJSONEncoder(json.JSONEncoder):
    """JSON encoder for decoded cue structures."""

    def default(self, obj: Any) -> Any:
        """Handle custom object serialization."""
        if isinstance(obj, CueMessage):
            result = obj.to_dict()
            result["splice_command_type_name"] = obj.splice_command_type_name
            return result

        elif isinstance(
            obj,
            (DecodeError, FormatError, TruncationError, UnknownTypeNotice, ParseWarning),
        ):
            result = obj.to_dict()
            result["message"] = str(obj)
            return result

        elif hasattr(obj, "to_dict"):
            return obj.to_dict()

        elif isinstance(obj, datetime.datetime):
            return obj.isoformat()

        elif isinstance(obj, bytes):
            return obj.hex()

        # Let the base class handle anything else
        return super().default(obj)
