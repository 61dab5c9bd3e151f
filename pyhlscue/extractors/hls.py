"""Extract SCTE-35 payloads from HLS manifest tag lines."""

import base64
import binascii
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, NamedTuple, Optional, Tuple, Union

from ..models.cue_details import CueDetails
from ..models.cue_message import CueMessage
from ..models.errors import DecodeError
from ..parsers.section import parse_splice_info_section
from ..utils.cue_details import extract_cue_details
from ..utils.cue_utils import summarize_cue_message

logger = logging.getLogger(__name__)

# SCTE35="<base64>" (quotes optional), e.g. in #EXT-X-DATERANGE
SCTE35_BASE64_PATTERN = re.compile(r'SCTE35="?([A-Za-z0-9+/=]+)"?')
# SCTE35-OUT=0x..., SCTE35-IN=0x..., SCTE35-CMD=0x...
SCTE35_HEX_PATTERN = re.compile(
    r'SCTE35-(?:OUT|IN|CMD)="?0x([0-9A-F]+)"?', re.IGNORECASE
)
# #EXT-X-CUE-OUT:<base64>, #EXT-X-CUE-IN:<base64>, #EXT-X-CUE:<base64>
# "=" only as trailing padding, so attribute lists like DURATION=30 do not match
CUE_BASE64_PATTERN = re.compile(
    r"#(?:EXT-X-CUE-(?:OUT|IN)|EXT-X-CUE):([A-Za-z0-9+/]+={0,2})(?![A-Za-z0-9+/=])"
)

HEX_PATTERN = re.compile(r"[0-9A-Fa-f]*")


class PayloadEncoding(str, Enum):
    """Text encodings a cue payload can be carried in."""

    BASE64 = "base64"
    HEX = "hex"


class ExtractedPayload(NamedTuple):
    encoded: str
    encoding: PayloadEncoding


# Checked in priority order
_PAYLOAD_PATTERNS = (
    (SCTE35_BASE64_PATTERN, PayloadEncoding.BASE64),
    (SCTE35_HEX_PATTERN, PayloadEncoding.HEX),
    (CUE_BASE64_PATTERN, PayloadEncoding.BASE64),
)


def extract_payload(line: str) -> Optional[ExtractedPayload]:
    """Find the encoded SCTE-35 payload in one manifest tag line.

    Args:
        line: A single manifest line

    Returns:
        ExtractedPayload, or None if the line carries no recognised payload
    """
    if not line:
        return None

    for pattern, encoding in _PAYLOAD_PATTERNS:
        match = pattern.search(line)
        if match and match.group(1):
            return ExtractedPayload(match.group(1), encoding)

    return None


def decode_payload(
    encoded: str, encoding: Union[PayloadEncoding, str]
) -> Union[bytes, DecodeError]:
    """Decode an encoded payload to bytes.

    Base64 uses the standard alphabet with optional padding. Hex is
    case-insensitive, must have an even length and may carry a 0x prefix.

    Args:
        encoded: Encoded payload text
        encoding: "base64" or "hex"

    Returns:
        The decoded bytes, or a DecodeError describing the failure
    """
    try:
        encoding = PayloadEncoding(encoding)
    except ValueError:
        return DecodeError(
            encoded=encoded,
            encoding=str(encoding),
            reason=f"Unsupported encoding type: {encoding}",
        )

    text = (encoded or "").strip()

    if encoding is PayloadEncoding.BASE64:
        try:
            data = base64.b64decode(text + "=" * (-len(text) % 4), validate=True)
        except (binascii.Error, ValueError) as e:
            logger.warning(f"Invalid base64 SCTE-35 payload {text!r}: {e}")
            return DecodeError(encoded=encoded, encoding=encoding.value, reason=str(e))
    else:
        if text[:2].lower() == "0x":
            text = text[2:]
        if not HEX_PATTERN.fullmatch(text):
            return DecodeError(
                encoded=encoded,
                encoding=encoding.value,
                reason="Non-hexadecimal character in payload",
            )
        if len(text) % 2:
            return DecodeError(
                encoded=encoded,
                encoding=encoding.value,
                reason=f"Odd-length hex payload ({len(text)} characters)",
            )
        data = bytes.fromhex(text)

    if not data:
        return DecodeError(
            encoded=encoded, encoding=encoding.value, reason="Decoded data is empty"
        )

    return data


@dataclass(frozen=True)
class CueTag:
    """
    A manifest line carrying an SCTE-35 payload, and what it decoded to.

    Exactly one of ``message`` and ``decode_error`` is set.
    """

    line: str
    encoded: str
    encoding: PayloadEncoding
    message: Optional[CueMessage] = None
    decode_error: Optional[DecodeError] = None

    @property
    def error(self) -> Optional[str]:
        if self.decode_error is not None:
            return str(self.decode_error)
        if self.message is not None and self.message.error is not None:
            return str(self.message.error)
        return None

    @property
    def summary(self) -> str:
        if self.decode_error is not None:
            return f"Invalid SCTE-35 signal: {self.decode_error}"
        return summarize_cue_message(self.message)

    @property
    def details(self) -> CueDetails:
        return extract_cue_details(self.decode_error or self.message, self.line)


def parse_payload(
    encoded: str, encoding: Union[PayloadEncoding, str]
) -> Union[CueMessage, DecodeError]:
    """Decode an encoded payload and parse it as a splice_info_section."""
    data = decode_payload(encoded, encoding)
    if isinstance(data, DecodeError):
        return data
    return parse_splice_info_section(data)


def parse_from_base64(encoded: str) -> Union[CueMessage, DecodeError]:
    return parse_payload(encoded, PayloadEncoding.BASE64)


def parse_from_hex(encoded: str) -> Union[CueMessage, DecodeError]:
    return parse_payload(encoded, PayloadEncoding.HEX)


def parse_line(line: str) -> Optional[CueTag]:
    """Extract, decode and parse the SCTE-35 payload of a manifest line.

    Args:
        line: A single manifest line

    Returns:
        CueTag, or None if the line carries no recognised payload
    """
    payload = extract_payload(line)
    if payload is None:
        return None

    result = parse_payload(payload.encoded, payload.encoding)
    if isinstance(result, DecodeError):
        return CueTag(
            line=line,
            encoded=payload.encoded,
            encoding=payload.encoding,
            decode_error=result,
        )

    return CueTag(
        line=line, encoded=payload.encoded, encoding=payload.encoding, message=result
    )


def scan_lines(lines: Iterable[str]) -> Iterator[Tuple[int, CueTag]]:
    """Run parse_line over every line of a manifest.

    Args:
        lines: Manifest lines

    Yields:
        Tuples of (1-based line number, CueTag) for lines carrying a payload
    """
    for line_number, raw_line in enumerate(lines, start=1):
        line = raw_line.strip()
        if not line.startswith("#"):
            continue

        cue_tag = parse_line(line)
        if cue_tag is not None:
            logger.debug(f"SCTE-35 payload found on line {line_number}")
            yield line_number, cue_tag
