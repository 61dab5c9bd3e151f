"""SCTE-35 lookup tables and utility functions."""

from typing import Optional

from ..models.cue_message import (
    DescriptorTag,
    SegmentationTypeID,
    SpliceCommandType,
    UPIDType,
)

# Mapping of splice command types to names
COMMAND_TYPE_NAMES = {
    SpliceCommandType.SPLICE_NULL: "null",
    SpliceCommandType.SPLICE_INSERT: "splice_insert",
    SpliceCommandType.SPLICE_SCHEDULE: "splice_schedule",
    SpliceCommandType.TIME_SIGNAL: "splice_time_signal",
    SpliceCommandType.BANDWIDTH_RESERVATION: "bandwidth_reservation",
    SpliceCommandType.PRIVATE_COMMAND: "private_command",
}

# Mapping of splice descriptor tags to names
DESCRIPTOR_TAG_NAMES = {
    DescriptorTag.AVAIL: "avail_descriptor",
    DescriptorTag.DTMF: "dtmf_descriptor",
    DescriptorTag.SEGMENTATION: "segmentation_descriptor",
    DescriptorTag.TIME: "time_descriptor",
    DescriptorTag.AUDIO: "audio_descriptor",
}

# Mapping of segmentation type IDs to descriptive names
SEGMENTATION_TYPE_NAMES = {
    SegmentationTypeID.NOT_INDICATED: "Not Indicated",
    SegmentationTypeID.CONTENT_ID: "Content Identification",
    # Program
    SegmentationTypeID.PROGRAM_START: "Program Start",
    SegmentationTypeID.PROGRAM_END: "Program End",
    SegmentationTypeID.PROGRAM_EARLY_TERMINATION: "Program Early Termination",
    SegmentationTypeID.PROGRAM_BREAKAWAY: "Program Breakaway",
    SegmentationTypeID.PROGRAM_RESUMPTION: "Program Resumption",
    SegmentationTypeID.PROGRAM_RUNOVER_PLANNED: "Program Runover Planned",
    SegmentationTypeID.PROGRAM_RUNOVER_UNPLANNED: "Program Runover Unplanned",
    SegmentationTypeID.PROGRAM_OVERLAP_START: "Program Overlap Start",
    SegmentationTypeID.PROGRAM_BLACKOUT_OVERRIDE: "Program Blackout Override",
    SegmentationTypeID.PROGRAM_JOIN: "Program Join",
    # Chapter
    SegmentationTypeID.CHAPTER_START: "Chapter Start",
    SegmentationTypeID.CHAPTER_END: "Chapter End",
    # Break
    SegmentationTypeID.BREAK_START: "Break Start",
    SegmentationTypeID.BREAK_END: "Break End",
    # Opening/Closing Credits
    SegmentationTypeID.OPENING_CREDIT_START: "Opening Credit Start",
    SegmentationTypeID.OPENING_CREDIT_END: "Opening Credit End",
    SegmentationTypeID.CLOSING_CREDIT_START: "Closing Credit Start",
    SegmentationTypeID.CLOSING_CREDIT_END: "Closing Credit End",
    # Advertisement
    SegmentationTypeID.PROVIDER_ADVERTISEMENT_START: "Provider Advertisement Start",
    SegmentationTypeID.PROVIDER_ADVERTISEMENT_END: "Provider Advertisement End",
    SegmentationTypeID.DISTRIBUTOR_ADVERTISEMENT_START: "Distributor Advertisement Start",
    SegmentationTypeID.DISTRIBUTOR_ADVERTISEMENT_END: "Distributor Advertisement End",
    # Placement Opportunity
    SegmentationTypeID.PROVIDER_PLACEMENT_OPPORTUNITY_START: "Provider Placement Opportunity Start",
    SegmentationTypeID.PROVIDER_PLACEMENT_OPPORTUNITY_END: "Provider Placement Opportunity End",
    SegmentationTypeID.DISTRIBUTOR_PLACEMENT_OPPORTUNITY_START: "Distributor Placement Opportunity Start",
    SegmentationTypeID.DISTRIBUTOR_PLACEMENT_OPPORTUNITY_END: "Distributor Placement Opportunity End",
    # Overlay Placement Opportunity
    SegmentationTypeID.PROVIDER_OVERLAY_PLACEMENT_OPPORTUNITY_START: "Provider Overlay Placement Opportunity Start",
    SegmentationTypeID.PROVIDER_OVERLAY_PLACEMENT_OPPORTUNITY_END: "Provider Overlay Placement Opportunity End",
    SegmentationTypeID.DISTRIBUTOR_OVERLAY_PLACEMENT_OPPORTUNITY_START: "Distributor Overlay Placement Opportunity Start",
    SegmentationTypeID.DISTRIBUTOR_OVERLAY_PLACEMENT_OPPORTUNITY_END: "Distributor Overlay Placement Opportunity End",
    # Promo
    SegmentationTypeID.PROVIDER_PROMO_START: "Provider Promo Start",
    SegmentationTypeID.PROVIDER_PROMO_END: "Provider Promo End",
    SegmentationTypeID.DISTRIBUTOR_PROMO_START: "Distributor Promo Start",
    SegmentationTypeID.DISTRIBUTOR_PROMO_END: "Distributor Promo End",
    # Unscheduled Event
    SegmentationTypeID.UNSCHEDULED_EVENT_START: "Unscheduled Event Start",
    SegmentationTypeID.UNSCHEDULED_EVENT_END: "Unscheduled Event End",
    # Alternate content / network and broadcast ads
    SegmentationTypeID.ALTERNATE_CONTENT_OPPORTUNITY_START: "Alternative Content Opportunity Start",
    SegmentationTypeID.ALTERNATE_CONTENT_OPPORTUNITY_END: "Alternative Content Opportunity End",
    SegmentationTypeID.NETWORK_ADVERTISEMENT_START: "Network Advertisement Start",
    SegmentationTypeID.NETWORK_ADVERTISEMENT_END: "Network Advertisement End",
    SegmentationTypeID.BROADCAST_ADVERTISEMENT_START: "Broadcast Advertisement Start",
    SegmentationTypeID.BROADCAST_ADVERTISEMENT_END: "Broadcast Advertisement End",
    # Network
    SegmentationTypeID.NETWORK_START: "Network Signal Start",
    SegmentationTypeID.NETWORK_END: "Network Signal End",
}

# Segmentation types that open an ad (or ad-like) period
AD_START_TYPES = frozenset(
    {
        SegmentationTypeID.BREAK_START,
        SegmentationTypeID.PROVIDER_ADVERTISEMENT_START,
        SegmentationTypeID.DISTRIBUTOR_ADVERTISEMENT_START,
        SegmentationTypeID.PROVIDER_PLACEMENT_OPPORTUNITY_START,
        SegmentationTypeID.DISTRIBUTOR_PLACEMENT_OPPORTUNITY_START,
        SegmentationTypeID.PROVIDER_OVERLAY_PLACEMENT_OPPORTUNITY_START,
        SegmentationTypeID.DISTRIBUTOR_OVERLAY_PLACEMENT_OPPORTUNITY_START,
        SegmentationTypeID.PROVIDER_PROMO_START,
        SegmentationTypeID.DISTRIBUTOR_PROMO_START,
        SegmentationTypeID.NETWORK_ADVERTISEMENT_START,
        SegmentationTypeID.BROADCAST_ADVERTISEMENT_START,
    }
)

# Segmentation types that close an ad (or ad-like) period
AD_END_TYPES = frozenset(
    {
        SegmentationTypeID.BREAK_END,
        SegmentationTypeID.PROVIDER_ADVERTISEMENT_END,
        SegmentationTypeID.DISTRIBUTOR_ADVERTISEMENT_END,
        SegmentationTypeID.PROVIDER_PLACEMENT_OPPORTUNITY_END,
        SegmentationTypeID.DISTRIBUTOR_PLACEMENT_OPPORTUNITY_END,
        SegmentationTypeID.PROVIDER_OVERLAY_PLACEMENT_OPPORTUNITY_END,
        SegmentationTypeID.DISTRIBUTOR_OVERLAY_PLACEMENT_OPPORTUNITY_END,
        SegmentationTypeID.PROVIDER_PROMO_END,
        SegmentationTypeID.DISTRIBUTOR_PROMO_END,
        SegmentationTypeID.NETWORK_ADVERTISEMENT_END,
        SegmentationTypeID.BROADCAST_ADVERTISEMENT_END,
    }
)

# Mapping of UPID types to descriptive names
UPID_TYPE_NAMES = {
    UPIDType.NOT_USED: "Not Used",
    UPIDType.USER_DEFINED: "User Defined",
    UPIDType.ISCI: "ISCI",
    UPIDType.AD_ID: "Ad-ID",
    UPIDType.UMID: "UMID",
    UPIDType.ISAN: "ISAN",
    UPIDType.V_ISAN: "V-ISAN",
    UPIDType.TID: "TID",
    UPIDType.TI: "TI",
    UPIDType.ADI: "ADI",
    UPIDType.EIDR: "EIDR",
    UPIDType.ATSC: "ATSC",
    UPIDType.MPU: "MPU",
    UPIDType.MID: "MID",
    UPIDType.ADS_INFO: "ADS Information",
    UPIDType.URI: "URI",
    UPIDType.UUID: "UUID",
    UPIDType.SCR: "SCR",
}

# Display prefixes used by format_upid
_UPID_DISPLAY_PREFIXES = {
    UPIDType.USER_DEFINED: "",
    UPIDType.ISCI: "Deprecated (0x02): ",
    UPIDType.AD_ID: "Ad-ID: ",
    UPIDType.ISAN: "ISAN/V-ISAN: ",
    UPIDType.V_ISAN: "ISAN/V-ISAN: ",
    UPIDType.TID: "TID: ",
    UPIDType.TI: "AiringID: ",
    UPIDType.ADI: "ADI/CableLabs: ",
    UPIDType.EIDR: "EIDR: ",
    UPIDType.ATSC: "ATSC CID: ",
    UPIDType.MPU: "MPU: ",
    UPIDType.MID: "MID (Raw Block): ",
    UPIDType.URI: "URI: ",
    UPIDType.UUID: "UUID: ",
}


def get_command_type_name(command_type: Optional[int]) -> str:
    """Get the name of a splice command type, "unknown" if not recognised."""
    if command_type in COMMAND_TYPE_NAMES:
        return COMMAND_TYPE_NAMES[command_type]
    return "unknown"


def get_descriptor_tag_name(tag: int) -> str:
    """Get descriptive name for a splice descriptor tag.

    Args:
        tag: Descriptor tag

    Returns:
        Descriptive name or formatted hex value for unknown tags
    """
    if tag in DESCRIPTOR_TAG_NAMES:
        return DESCRIPTOR_TAG_NAMES[tag]
    else:
        return f"Unknown (0x{tag:02x})"


def get_segmentation_type_name(type_id: Optional[int]) -> str:
    """Get descriptive name for a segmentation type ID.

    Args:
        type_id: Segmentation type ID

    Returns:
        Descriptive name or formatted hex value for unknown types
    """
    if type_id is None:
        return "Unknown (N/A)"
    if type_id in SEGMENTATION_TYPE_NAMES:
        return SEGMENTATION_TYPE_NAMES[type_id]
    else:
        return f"Unknown (0x{type_id:02x})"


def get_upid_type_name(upid_type: int) -> str:
    """Get descriptive name for a UPID type.

    Args:
        upid_type: UPID type ID

    Returns:
        Descriptive name or formatted hex value for unknown types
    """
    if upid_type in UPID_TYPE_NAMES:
        return UPID_TYPE_NAMES[upid_type]
    else:
        return f"Unknown UPID Type (0x{upid_type:02x})"


def is_ad_start_type(type_id: Optional[int]) -> bool:
    return type_id in AD_START_TYPES


def is_ad_end_type(type_id: Optional[int]) -> bool:
    return type_id in AD_END_TYPES


def format_upid(upid: Optional[bytes], upid_type: Optional[int]) -> str:
    """Format a UPID for display.

    Null bytes are dropped and anything outside printable ASCII is shown as
    ".". The text is prefixed according to the UPID type.

    Args:
        upid: Raw UPID bytes
        upid_type: UPID type ID

    Returns:
        Display string, "N/A" for an empty UPID
    """
    if not upid:
        return "N/A"

    text = bytes(b for b in upid if b != 0).decode("utf-8", errors="replace")
    text = "".join(c if " " <= c <= "~" else "." for c in text)

    if upid_type in _UPID_DISPLAY_PREFIXES:
        return f"{_UPID_DISPLAY_PREFIXES[upid_type]}{text}"

    type_label = f"0x{upid_type:02x}" if upid_type is not None else "Unknown"
    return f"Type {type_label}: {text}"
