"""Ad-detection view of a decoded cue."""

from dataclasses import dataclass
from typing import Optional

from dataclasses_json import LetterCase, Undefined, dataclass_json


@dataclass_json(letter_case=LetterCase.CAMEL, undefined=Undefined.EXCLUDE)
@dataclass(frozen=True)
class CueDetails:
    """
    Flattened details of one cue, as consumed by ad-break aggregation.

    This class condenses a parsed CueMessage (and the manifest line it came
    from) into the handful of fields needed to decide whether an ad starts or
    ends, and for how long.
    """

    event_id: Optional[str]
    duration: Optional[float]
    duration_source: str
    signal_type: str
    is_ad_start: bool
    is_ad_end: bool
    segmentation_type_id: Optional[int]
    segmentation_type_name: str
    upid_hex: Optional[str]
    upid_formatted: str
    segment_num: Optional[int]
    segments_expected: Optional[int]
    cancelled: bool
    error: Optional[str]
    summary: str
