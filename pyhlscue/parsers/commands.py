"""Decoders for SCTE-35 splice commands."""

import logging
from typing import Any, Callable, Dict

from ..models.cue_message import (
    BreakDuration,
    RawSpliceCommand,
    SpliceCommand,
    SpliceCommandType,
    SpliceInsert,
    SpliceTime,
    TimeSignal,
)
from ..utils.scte35_utils import COMMAND_TYPE_NAMES
from .reader import ByteReader, TruncatedReadError

logger = logging.getLogger(__name__)


def _read_splice_time(reader: ByteReader, fields: Dict[str, Any], prefix: str) -> None:
    """Read a splice_time() into ``fields["splice_time"]``.

    A truncated PTS leaves ``SpliceTime(specified=True)`` with ``pts_time=None``
    behind, so callers can tell a lost time from an unspecified one.
    """
    (time_specified_flag,) = reader.read_bits(
        1, "bool", f"{prefix}.time_specified_flag"
    )
    if not time_specified_flag:
        fields["splice_time"] = SpliceTime(specified=False)
        return

    try:
        pts_time = reader.read_pts(f"{prefix}.pts_time")
    except TruncatedReadError:
        fields["splice_time"] = SpliceTime(specified=True)
        raise
    fields["splice_time"] = SpliceTime(specified=True, pts_time=pts_time)


def parse_splice_insert(data: bytes) -> SpliceInsert:
    """Parse a splice_insert() command body.

    Args:
        data: Command bytes following the splice_command_type byte

    Returns:
        SpliceInsert, with ``error`` set if the body is too short
    """
    reader = ByteReader(data)
    fields: Dict[str, Any] = {}

    try:
        fields["splice_event_id"] = reader.read_uint(4, "splice_insert.splice_event_id")
        (fields["splice_event_cancel_indicator"],) = reader.read_bits(
            1, "bool", "splice_insert.splice_event_cancel_indicator"
        )
        if fields["splice_event_cancel_indicator"]:
            return SpliceInsert(**fields)

        (
            fields["out_of_network_indicator"],
            fields["program_splice_flag"],
            fields["duration_flag"],
            fields["splice_immediate_flag"],
        ) = reader.read_bits(1, "bool, bool, bool, bool", "splice_insert.flags")

        program_splice = fields["program_splice_flag"]
        immediate = fields["splice_immediate_flag"]

        if not program_splice and not immediate:
            # Component splices are not decoded; the caller skips to the
            # declared end of the command.
            logger.warning("Component splice_insert not fully parsed")
            return SpliceInsert(**fields)

        if program_splice and not immediate:
            _read_splice_time(reader, fields, "splice_insert.splice_time")

        if fields["duration_flag"]:
            auto_return, duration = reader.read_duration("splice_insert.break_duration")
            fields["break_duration"] = BreakDuration(
                auto_return=auto_return, duration=duration
            )

        fields["unique_program_id"] = reader.read_uint(
            2, "splice_insert.unique_program_id"
        )
        fields["avail_num"] = reader.read_uint(1, "splice_insert.avail_num")
        fields["avails_expected"] = reader.read_uint(1, "splice_insert.avails_expected")

    except TruncatedReadError as e:
        logger.warning(f"Truncated splice_insert: {e}")
        return SpliceInsert(**fields, error=e.to_error())

    return SpliceInsert(**fields)


def parse_time_signal(data: bytes) -> TimeSignal:
    """Parse a time_signal() command body.

    Only the splice_time() is read; any further bytes inside the declared
    command length are skipped by the section parser.
    """
    reader = ByteReader(data)
    fields: Dict[str, Any] = {}

    try:
        _read_splice_time(reader, fields, "time_signal.splice_time")
    except TruncatedReadError as e:
        logger.warning(f"Truncated time_signal: {e}")
        return TimeSignal(**fields, error=e.to_error())

    if reader.remaining:
        logger.debug(f"time_signal has {reader.remaining} trailing byte(s)")

    return TimeSignal(**fields)


COMMAND_PARSERS: Dict[int, Callable[[bytes], SpliceCommand]] = {
    SpliceCommandType.SPLICE_INSERT: parse_splice_insert,
    SpliceCommandType.TIME_SIGNAL: parse_time_signal,
}


def parse_splice_command(command_type: int, data: bytes) -> SpliceCommand:
    """Decode a splice command body according to its type.

    Args:
        command_type: The splice_command_type byte
        data: Command bytes following the type byte

    Returns:
        SpliceInsert or TimeSignal for the decoded types, RawSpliceCommand
        holding the bytes for everything else
    """
    parser = COMMAND_PARSERS.get(command_type)
    if parser is None:
        if command_type not in COMMAND_TYPE_NAMES:
            logger.warning(f"Unknown splice command type: 0x{command_type:02x}")
        return RawSpliceCommand(command_type=command_type, raw=bytes(data))
    return parser(data)
