"""
Utils package.

This package provides lookup tables and formatting helpers for decoded cues.
"""

from .cue_details import classify_signal, extract_cue_details
from .cue_utils import (
    FRAME_RATE,
    CueJSONEncoder,
    format_cue_data,
    pts_to_timecode,
    summarize_cue_message,
    ticks_to_seconds,
)
from .scte35_utils import (
    format_upid,
    get_command_type_name,
    get_descriptor_tag_name,
    get_segmentation_type_name,
    get_upid_type_name,
    is_ad_end_type,
    is_ad_start_type,
)

__all__ = [
    "FRAME_RATE",
    "CueJSONEncoder",
    "classify_signal",
    "extract_cue_details",
    "format_cue_data",
    "format_upid",
    "get_command_type_name",
    "get_descriptor_tag_name",
    "get_segmentation_type_name",
    "get_upid_type_name",
    "is_ad_end_type",
    "is_ad_start_type",
    "pts_to_timecode",
    "summarize_cue_message",
    "ticks_to_seconds",
]
