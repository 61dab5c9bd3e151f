"""
Extractors package.

This package provides the HLS manifest side: finding SCTE-35 payloads in tag
lines and decoding them to bytes.
"""

from .hls import (
    CueTag,
    ExtractedPayload,
    PayloadEncoding,
    decode_payload,
    extract_payload,
    parse_from_base64,
    parse_from_hex,
    parse_line,
    parse_payload,
    scan_lines,
)

__all__ = [
    "CueTag",
    "ExtractedPayload",
    "PayloadEncoding",
    "decode_payload",
    "extract_payload",
    "parse_from_base64",
    "parse_from_hex",
    "parse_line",
    "parse_payload",
    "scan_lines",
]
