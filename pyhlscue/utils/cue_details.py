"""Condense a decoded cue into the details used for ad-break detection."""

import logging
import re
from typing import NamedTuple, Optional, Union

from ..models.cue_details import CueDetails
from ..models.cue_message import (
    TICKS_PER_SECOND,
    CueMessage,
    SegmentationDescriptor,
    SegmentationTypeID,
    SpliceInsert,
    TimeSignal,
)
from ..models.errors import DecodeError, FormatError
from .scte35_utils import format_upid, get_segmentation_type_name

logger = logging.getLogger(__name__)

# DURATION=30.0 or PLANNED-DURATION=30 on the manifest line itself
M3U8_DURATION_PATTERN = re.compile(r"\b(?:PLANNED-)?DURATION=([0-9]+(?:\.[0-9]+)?)\b")

NO_SEGMENTATION_UPID = "N/A (No Segmentation Descriptor)"
PARSING_ERROR = "N/A (Parsing Error)"


class SignalType(NamedTuple):
    signal_type: str
    is_ad_start: bool
    is_ad_end: bool
    type_name: str


# Segmentation type -> (signal type, is_ad_start, is_ad_end)
SIGNAL_TYPES = {
    SegmentationTypeID.CONTENT_ID: ("content_identification", False, True),
    SegmentationTypeID.PROGRAM_START: ("program_start", False, False),
    SegmentationTypeID.PROGRAM_BREAKAWAY: ("program_breakaway", False, False),
    SegmentationTypeID.PROGRAM_RESUMPTION: ("program_return", False, False),
    SegmentationTypeID.CHAPTER_START: ("chapter_start", False, False),
    # Chapter End opens ad time in the streams this tool watches
    SegmentationTypeID.CHAPTER_END: ("chapter_end", True, False),
    SegmentationTypeID.BREAK_START: ("break_start", False, False),
    SegmentationTypeID.BREAK_END: ("break_end", False, False),
    SegmentationTypeID.PROVIDER_ADVERTISEMENT_START: ("ad_start", True, False),
    SegmentationTypeID.PROVIDER_ADVERTISEMENT_END: ("ad_end", False, True),
    SegmentationTypeID.DISTRIBUTOR_ADVERTISEMENT_START: ("ad_start", True, False),
    SegmentationTypeID.DISTRIBUTOR_ADVERTISEMENT_END: ("ad_end", False, True),
    SegmentationTypeID.PROVIDER_PLACEMENT_OPPORTUNITY_START: (
        "opportunity_start",
        True,
        False,
    ),
    SegmentationTypeID.PROVIDER_PLACEMENT_OPPORTUNITY_END: (
        "opportunity_end",
        False,
        True,
    ),
    SegmentationTypeID.DISTRIBUTOR_PLACEMENT_OPPORTUNITY_START: (
        "opportunity_start",
        False,
        False,
    ),
    SegmentationTypeID.PROVIDER_PROMO_START: ("promo_start", False, False),
    SegmentationTypeID.PROVIDER_PROMO_END: ("promo_end", False, False),
}


def classify_signal(type_id: Optional[int], cancelled: bool = False) -> SignalType:
    """Classify a segmentation type for ad detection.

    Args:
        type_id: Segmentation type ID, or None when unknown
        cancelled: Whether the segmentation event was cancelled

    Returns:
        SignalType with the signal name, ad flags and display name. A
        cancelled event never sets the ad flags.
    """
    signal_type, is_ad_start, is_ad_end = SIGNAL_TYPES.get(
        type_id, ("scte_signal", False, False)
    )
    type_name = get_segmentation_type_name(type_id)

    if cancelled:
        type_name += " (Cancelled)"
        is_ad_start = is_ad_end = False
        if signal_type.endswith("_start"):
            signal_type = signal_type[: -len("_start")] + "_start_cancelled"
        elif signal_type.endswith("_end"):
            signal_type = signal_type[: -len("_end")] + "_end_cancelled"
        else:
            signal_type += "_cancelled"

    return SignalType(signal_type, is_ad_start, is_ad_end, type_name)


def _line_duration(line: Optional[str]) -> Optional[float]:
    if not line:
        return None
    match = M3U8_DURATION_PATTERN.search(line)
    if match is None:
        return None
    return float(match.group(1))


def _detail_summary(details: dict) -> str:
    """Build the one-line detail summary from the collected fields."""
    if details["error"]:
        return details["error"]

    parts = []
    name = details["segmentation_type_name"]
    if name and name != "N/A" and not name.startswith("Unknown"):
        parts.append(f"{name}.")
    if details["event_id"]:
        parts.append(f"EventID: {details['event_id']}.")
    if details["duration"] is not None:
        parts.append(
            f"Duration: {details['duration']:.3f}s ({details['duration_source']})."
        )

    upid_formatted = details["upid_formatted"]
    if upid_formatted and upid_formatted != "N/A" and not upid_formatted.startswith(
        "N/A ("
    ):
        parts.append(f"UPID: {upid_formatted}.")
    elif details["upid_hex"]:
        parts.append(f"UPID (Hex): {details['upid_hex']}.")

    segment_num = details["segment_num"]
    segments_expected = details["segments_expected"]
    if (
        segment_num is not None
        and segments_expected is not None
        and (segment_num or segments_expected)
    ):
        parts.append(f"Seg: {segment_num}/{segments_expected}.")

    return " ".join(parts) or "Parsed SCTE-35 data."


def _error_details(error: str) -> CueDetails:
    return CueDetails(
        event_id=None,
        duration=None,
        duration_source=PARSING_ERROR,
        signal_type="scte_signal_error",
        is_ad_start=False,
        is_ad_end=False,
        segmentation_type_id=None,
        segmentation_type_name=PARSING_ERROR,
        upid_hex=None,
        upid_formatted=PARSING_ERROR,
        segment_num=None,
        segments_expected=None,
        cancelled=False,
        error=error,
        summary=error,
    )


def extract_cue_details(
    message: Union[CueMessage, DecodeError, None], line: Optional[str] = None
) -> CueDetails:
    """Extract the ad-detection details of a decoded cue.

    The first segmentation descriptor is the primary source. Without one, a
    splice_insert is classified from its out_of_network_indicator as a
    provider advertisement start or end.

    The duration comes from a DURATION or PLANNED-DURATION attribute on the
    manifest line when present, then from the segmentation duration, then
    from an auto-return splice_insert break duration.

    Args:
        message: Parsed CueMessage, or the DecodeError of a failed payload
        line: The manifest line the payload was found on

    Returns:
        CueDetails
    """
    if message is None:
        return _error_details("No parsed SCTE data.")
    if isinstance(message, DecodeError):
        return _error_details(str(message))
    if isinstance(message.error, FormatError):
        return _error_details(str(message.error))

    details = {
        "event_id": None,
        "duration": None,
        "duration_source": "N/A",
        "segmentation_type_id": None,
        "upid_hex": None,
        "upid_formatted": "N/A",
        "segment_num": None,
        "segments_expected": None,
        "cancelled": False,
        "error": None,
    }
    if message.error is not None:
        details["error"] = f"Parser note: {message.error}"

    command = message.splice_command
    segmentation: Optional[SegmentationDescriptor] = None
    if message.segmentation_descriptors:
        segmentation = message.segmentation_descriptors[0]

    type_id = None
    if segmentation is not None:
        type_id = segmentation.type_id
        details["segmentation_type_id"] = type_id
        details["cancelled"] = bool(segmentation.cancel_indicator)
        if segmentation.event_id is not None:
            details["event_id"] = str(segmentation.event_id)
        if segmentation.upid:
            details["upid_hex"] = segmentation.upid.hex()
            details["upid_formatted"] = format_upid(
                segmentation.upid, segmentation.upid_type
            )
        else:
            details["upid_formatted"] = "N/A (No UPID data in SegDesc)"
        details["segment_num"] = segmentation.segment_num
        details["segments_expected"] = segmentation.segments_expected
    else:
        details["upid_formatted"] = NO_SEGMENTATION_UPID
        if isinstance(command, SpliceInsert):
            if command.splice_event_id is not None:
                details["event_id"] = str(command.splice_event_id)
            if command.out_of_network_indicator is not None:
                type_id = (
                    SegmentationTypeID.PROVIDER_ADVERTISEMENT_START
                    if command.out_of_network_indicator
                    else SegmentationTypeID.PROVIDER_ADVERTISEMENT_END
                )
                details["segmentation_type_id"] = int(type_id)
        elif isinstance(command, TimeSignal):
            splice_time = command.splice_time
            if splice_time is not None and splice_time.pts_time is not None:
                details["event_id"] = str(splice_time.pts_time)

    signal = classify_signal(type_id, details["cancelled"])
    type_name = signal.type_name
    if segmentation is None:
        if type_id is not None:
            type_name += " (from SpliceInsert OON)"
        elif isinstance(command, TimeSignal):
            type_name = "Time Signal (No Segmentation Descriptor)"
        elif message.splice_command_type is not None:
            type_name = f"Cmd 0x{message.splice_command_type:x} (No SegDesc)"
        else:
            type_name = "N/A (No SegDesc & Unknown Cmd)"
    details["segmentation_type_name"] = type_name

    is_ad_start, is_ad_end = signal.is_ad_start, signal.is_ad_end
    if details["upid_formatted"].startswith("Ad-ID:"):
        is_ad_start, is_ad_end = True, False

    duration = _line_duration(line)
    if duration is not None:
        details["duration"] = duration
        details["duration_source"] = "M3U8 Tag"
    elif segmentation is not None and segmentation.segmentation_duration is not None:
        details["duration"] = segmentation.segmentation_duration / TICKS_PER_SECOND
        details["duration_source"] = "SCTE-35 Binary"
    elif (
        isinstance(command, SpliceInsert)
        and command.break_duration is not None
        and command.break_duration.duration
        and command.break_duration.auto_return
    ):
        details["duration"] = command.break_duration.seconds
        details["duration_source"] = "SCTE-35 Binary (SpliceInsert)"
    elif line:
        details["duration_source"] = "N/A (No M3U8 DURATION attr or SCTE Binary dur)"
    else:
        details["duration_source"] = "N/A (No SCTE Binary dur, No M3U8 Line)"

    logger.debug(
        f"Cue details: {signal.signal_type} event {details['event_id']} "
        f"duration {details['duration']} ({details['duration_source']})"
    )

    return CueDetails(
        signal_type=signal.signal_type,
        is_ad_start=is_ad_start,
        is_ad_end=is_ad_end,
        summary=_detail_summary(details),
        **details,
    )
