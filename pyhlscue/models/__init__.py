"""
Models package.

This package provides data models for decoded SCTE-35 cue messages.
"""

from .cue_details import CueDetails
from .cue_message import (
    TICKS_PER_SECOND,
    BreakDuration,
    CueMessage,
    Descriptor,
    DescriptorTag,
    RawDescriptor,
    RawSpliceCommand,
    SegmentationDescriptor,
    SegmentationTypeID,
    SpliceCommandType,
    SpliceInsert,
    SpliceTime,
    TimeSignal,
    UPIDType,
)
from .errors import (
    DecodeError,
    FormatError,
    ParseWarning,
    TruncationError,
    UnknownTypeNotice,
)

__all__ = [
    "TICKS_PER_SECOND",
    "BreakDuration",
    "CueDetails",
    "CueMessage",
    "DecodeError",
    "Descriptor",
    "DescriptorTag",
    "FormatError",
    "ParseWarning",
    "RawDescriptor",
    "RawSpliceCommand",
    "SegmentationDescriptor",
    "SegmentationTypeID",
    "SpliceCommandType",
    "SpliceInsert",
    "SpliceTime",
    "TimeSignal",
    "TruncationError",
    "UPIDType",
    "UnknownTypeNotice",
]
