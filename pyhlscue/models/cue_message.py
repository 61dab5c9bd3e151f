"""SCTE-35 cue message data models."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional, Tuple, Union

from dataclasses_json import config, dataclass_json

from .errors import (
    FormatError,
    ParseWarning,
    TruncationError,
    UnknownTypeNotice,
)

# 90 kHz clock used by PTS and duration fields
TICKS_PER_SECOND = 90000

SCTE35_TABLE_ID = 0xFC


def _bytes_to_hex(data: Optional[bytes]) -> Optional[str]:
    if data is None:
        return None
    return data.hex()


class SpliceCommandType(IntEnum):
    """SCTE-35 splice command types."""

    SPLICE_NULL = 0x00
    SPLICE_INSERT = 0x05
    SPLICE_SCHEDULE = 0x06
    TIME_SIGNAL = 0x07
    BANDWIDTH_RESERVATION = 0xFE
    PRIVATE_COMMAND = 0xFF


class DescriptorTag(IntEnum):
    """SCTE-35 splice descriptor tags."""

    AVAIL = 0x00
    DTMF = 0x01
    SEGMENTATION = 0x02
    TIME = 0x03
    AUDIO = 0x04


class SegmentationTypeID(IntEnum):
    """SCTE-35 segmentation type IDs."""

    NOT_INDICATED = 0x00
    CONTENT_ID = 0x01
    PROGRAM_START = 0x10
    PROGRAM_END = 0x11
    PROGRAM_EARLY_TERMINATION = 0x12
    PROGRAM_BREAKAWAY = 0x13
    PROGRAM_RESUMPTION = 0x14
    PROGRAM_RUNOVER_PLANNED = 0x15
    PROGRAM_RUNOVER_UNPLANNED = 0x16
    PROGRAM_OVERLAP_START = 0x17
    PROGRAM_BLACKOUT_OVERRIDE = 0x18
    PROGRAM_JOIN = 0x19
    CHAPTER_START = 0x20
    CHAPTER_END = 0x21
    BREAK_START = 0x22
    BREAK_END = 0x23
    OPENING_CREDIT_START = 0x24
    OPENING_CREDIT_END = 0x25
    CLOSING_CREDIT_START = 0x26
    CLOSING_CREDIT_END = 0x27
    PROVIDER_ADVERTISEMENT_START = 0x30
    PROVIDER_ADVERTISEMENT_END = 0x31
    DISTRIBUTOR_ADVERTISEMENT_START = 0x32
    DISTRIBUTOR_ADVERTISEMENT_END = 0x33
    PROVIDER_PLACEMENT_OPPORTUNITY_START = 0x34
    PROVIDER_PLACEMENT_OPPORTUNITY_END = 0x35
    DISTRIBUTOR_PLACEMENT_OPPORTUNITY_START = 0x36
    DISTRIBUTOR_PLACEMENT_OPPORTUNITY_END = 0x37
    PROVIDER_OVERLAY_PLACEMENT_OPPORTUNITY_START = 0x38
    PROVIDER_OVERLAY_PLACEMENT_OPPORTUNITY_END = 0x39
    DISTRIBUTOR_OVERLAY_PLACEMENT_OPPORTUNITY_START = 0x3A
    DISTRIBUTOR_OVERLAY_PLACEMENT_OPPORTUNITY_END = 0x3B
    PROVIDER_PROMO_START = 0x3C
    PROVIDER_PROMO_END = 0x3D
    DISTRIBUTOR_PROMO_START = 0x3E
    DISTRIBUTOR_PROMO_END = 0x3F
    UNSCHEDULED_EVENT_START = 0x40
    UNSCHEDULED_EVENT_END = 0x41
    ALTERNATE_CONTENT_OPPORTUNITY_START = 0x42
    ALTERNATE_CONTENT_OPPORTUNITY_END = 0x43
    NETWORK_ADVERTISEMENT_START = 0x44
    NETWORK_ADVERTISEMENT_END = 0x45
    BROADCAST_ADVERTISEMENT_START = 0x46
    BROADCAST_ADVERTISEMENT_END = 0x47
    NETWORK_START = 0x50
    NETWORK_END = 0x51


class UPIDType(IntEnum):
    """SCTE-35 segmentation UPID types."""

    NOT_USED = 0x00
    USER_DEFINED = 0x01
    ISCI = 0x02
    AD_ID = 0x03
    UMID = 0x04
    ISAN = 0x05
    V_ISAN = 0x06
    TID = 0x07
    TI = 0x08
    ADI = 0x09
    EIDR = 0x0A
    ATSC = 0x0B
    MPU = 0x0C
    MID = 0x0D
    ADS_INFO = 0x0E
    URI = 0x0F
    UUID = 0x10
    SCR = 0x11


@dataclass_json
@dataclass(frozen=True)
class SpliceTime:
    """splice_time() structure.

    A ``pts_time`` of None while ``specified`` is True means the PTS bytes
    could not be read, which is different from an unspecified time.
    """

    specified: bool
    pts_time: Optional[int] = None

    @property
    def pts_seconds(self) -> Optional[float]:
        if self.pts_time is None:
            return None
        return self.pts_time / TICKS_PER_SECOND


@dataclass_json
@dataclass(frozen=True)
class BreakDuration:
    """break_duration() structure, duration in 90 kHz ticks."""

    auto_return: bool
    duration: int

    @property
    def seconds(self) -> float:
        return self.duration / TICKS_PER_SECOND


@dataclass_json
@dataclass(frozen=True)
class SpliceInsert:
    """
    splice_insert() command (type 0x05).

    Only ``splice_event_id`` and ``splice_event_cancel_indicator`` are read
    for a cancelled event; the remaining fields stay None. ``error`` is set
    when the command body ran out of bytes, in which case every field read
    before that point is still populated.
    """

    splice_event_id: Optional[int] = None
    splice_event_cancel_indicator: Optional[bool] = None
    out_of_network_indicator: Optional[bool] = None
    program_splice_flag: Optional[bool] = None
    duration_flag: Optional[bool] = None
    splice_immediate_flag: Optional[bool] = None
    splice_time: Optional[SpliceTime] = None
    break_duration: Optional[BreakDuration] = None
    unique_program_id: Optional[int] = None
    avail_num: Optional[int] = None
    avails_expected: Optional[int] = None
    error: Optional[TruncationError] = None

    @property
    def is_component_splice(self) -> bool:
        """Component mode: neither a program splice nor an immediate splice."""
        return (
            self.program_splice_flag is False and self.splice_immediate_flag is False
        )


@dataclass_json
@dataclass(frozen=True)
class TimeSignal:
    """time_signal() command (type 0x07)."""

    splice_time: Optional[SpliceTime] = None
    error: Optional[TruncationError] = None


@dataclass_json
@dataclass(frozen=True)
class RawSpliceCommand:
    """A splice command kept as raw bytes without further decoding."""

    command_type: int
    raw: bytes = field(default=b"", metadata=config(encoder=_bytes_to_hex))

    @property
    def kind(self) -> Optional[SpliceCommandType]:
        try:
            return SpliceCommandType(self.command_type)
        except ValueError:
            return None


SpliceCommand = Union[SpliceInsert, TimeSignal, RawSpliceCommand]


@dataclass_json
@dataclass(frozen=True)
class SegmentationDescriptor:
    """
    segmentation_descriptor() (tag 0x02).

    Attributes:
        identifier: 4-byte identifier, ASCII when printable ("CUEI") else hex
        segmentation_duration: Duration in 90 kHz ticks, when flagged
        upid: Raw UPID bytes
        type_id_name: Human name of ``type_id``
        is_ad_start: Whether ``type_id`` marks the start of an ad
        is_ad_end: Whether ``type_id`` marks the end of an ad
        unparsed: Trailing bytes (sub-segment fields) that were not interpreted
        error: Set when the descriptor body ran out of bytes
    """

    identifier: Optional[str] = None
    event_id: Optional[int] = None
    cancel_indicator: Optional[bool] = None
    program_segmentation_flag: Optional[bool] = None
    segmentation_duration_flag: Optional[bool] = None
    delivery_not_restricted: Optional[bool] = None
    web_delivery_allowed: Optional[bool] = None
    no_regional_blackout: Optional[bool] = None
    archive_allowed: Optional[bool] = None
    device_restrictions: Optional[int] = None
    segmentation_duration: Optional[int] = None
    upid_type: Optional[int] = None
    upid_length: Optional[int] = None
    upid: Optional[bytes] = field(
        default=None, metadata=config(encoder=_bytes_to_hex)
    )
    type_id: Optional[int] = None
    type_id_name: Optional[str] = None
    segment_num: Optional[int] = None
    segments_expected: Optional[int] = None
    is_ad_start: bool = False
    is_ad_end: bool = False
    unparsed: bytes = field(default=b"", metadata=config(encoder=_bytes_to_hex))
    error: Optional[TruncationError] = None

    @property
    def segmentation_duration_seconds(self) -> Optional[float]:
        if self.segmentation_duration is None:
            return None
        return self.segmentation_duration / TICKS_PER_SECOND


@dataclass_json
@dataclass(frozen=True)
class RawDescriptor:
    """A splice descriptor body kept as raw bytes."""

    raw: bytes = field(default=b"", metadata=config(encoder=_bytes_to_hex))


@dataclass_json
@dataclass(frozen=True)
class Descriptor:
    """One entry of the splice descriptor loop."""

    tag: int
    tag_name: str
    length: int
    info: Union[SegmentationDescriptor, RawDescriptor]

    @property
    def error(self) -> Optional[TruncationError]:
        return getattr(self.info, "error", None)


Notice = Union[UnknownTypeNotice, ParseWarning]


@dataclass_json
@dataclass(frozen=True)
class CueMessage:
    """
    A decoded splice_info_section.

    Every field is optional because parsing stops at the first field that
    cannot be read; ``error`` then names that field and everything read
    before it is preserved. ``crc_32`` holds the trailing 4 bytes as found,
    it is never verified.
    """

    table_id: Optional[int] = None
    section_syntax_indicator: Optional[bool] = None
    private_indicator: Optional[bool] = None
    section_length: Optional[int] = None
    protocol_version: Optional[int] = None
    encrypted_packet: Optional[bool] = None
    encryption_algorithm: Optional[int] = None
    pts_adjustment: Optional[int] = None
    cw_index: Optional[int] = None
    tier: Optional[int] = None
    splice_command_length: Optional[int] = None
    splice_command_type: Optional[int] = None
    splice_command: Optional[SpliceCommand] = None
    descriptor_loop_length: Optional[int] = None
    descriptors: Tuple[Descriptor, ...] = ()
    crc_32: Optional[bytes] = field(
        default=None, metadata=config(encoder=_bytes_to_hex)
    )
    notices: Tuple[Notice, ...] = ()
    error: Optional[Union[FormatError, TruncationError]] = None

    @property
    def is_valid(self) -> bool:
        return self.error is None

    @property
    def splice_command_type_name(self) -> str:
        # utils imports the models, so resolve the lookup lazily
        from ..utils.scte35_utils import get_command_type_name

        return get_command_type_name(self.splice_command_type)

    @property
    def pts_adjustment_seconds(self) -> Optional[float]:
        if self.pts_adjustment is None:
            return None
        return self.pts_adjustment / TICKS_PER_SECOND

    @property
    def segmentation_descriptors(self) -> List[SegmentationDescriptor]:
        return [
            descriptor.info
            for descriptor in self.descriptors
            if isinstance(descriptor.info, SegmentationDescriptor)
        ]
