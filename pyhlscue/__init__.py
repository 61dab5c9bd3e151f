"""Decode SCTE-35 cues carried in HLS manifest tags."""

from .extractors import (
    CueTag,
    PayloadEncoding,
    decode_payload,
    extract_payload,
    parse_from_base64,
    parse_from_hex,
    parse_line,
    scan_lines,
)
from .models import CueDetails, CueMessage
from .parsers import parse_splice_info_section
from .utils import extract_cue_details, summarize_cue_message

__version__ = "0.1.0"

__all__ = [
    "CueDetails",
    "CueMessage",
    "CueTag",
    "PayloadEncoding",
    "decode_payload",
    "extract_cue_details",
    "extract_payload",
    "parse_from_base64",
    "parse_from_hex",
    "parse_line",
    "parse_splice_info_section",
    "scan_lines",
    "summarize_cue_message",
]
