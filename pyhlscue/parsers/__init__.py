"""
Parsers package.

This package provides the binary decoders for SCTE-35 splice_info_sections.
"""

from .commands import parse_splice_command, parse_splice_insert, parse_time_signal
from .descriptors import parse_descriptor, parse_segmentation_descriptor
from .reader import ByteReader, TruncatedReadError, read_duration, read_pts
from .section import parse_splice_info_section

__all__ = [
    "ByteReader",
    "TruncatedReadError",
    "parse_descriptor",
    "parse_segmentation_descriptor",
    "parse_splice_command",
    "parse_splice_info_section",
    "parse_splice_insert",
    "parse_time_signal",
    "read_duration",
    "read_pts",
]
