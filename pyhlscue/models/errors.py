"""Error and notice values produced while decoding SCTE-35 cues.

Decoding never raises past the public entry points. Instead, every stage
returns its result annotated with one of the values defined here.
"""

from dataclasses import dataclass, field

from dataclasses_json import config, dataclass_json


def _bytes_to_hex(data: bytes) -> str:
    return data.hex()


@dataclass_json
@dataclass(frozen=True)
class DecodeError:
    """Text payload could not be turned into bytes.

    Attributes:
        encoded: The original encoded text
        encoding: Encoding the text was declared as ("base64" or "hex")
        reason: What went wrong
    """

    encoded: str
    encoding: str
    reason: str

    def __str__(self) -> str:
        return f"Decoding error ({self.encoding}): {self.reason}"


@dataclass_json
@dataclass(frozen=True)
class FormatError:
    """The buffer does not start with the SCTE-35 table_id (0xFC)."""

    table_id: int
    raw: bytes = field(default=b"", metadata=config(encoder=_bytes_to_hex))

    def __str__(self) -> str:
        return (
            "Not a standard SCTE-35 message "
            f"(invalid table ID: 0x{self.table_id:02x})"
        )


@dataclass_json
@dataclass(frozen=True)
class TruncationError:
    """Not enough bytes were left to read a named field.

    Attributes:
        field_name: Dotted name of the field that could not be read
        needed: Number of bytes the field requires
        available: Number of bytes that were left
    """

    field_name: str
    needed: int
    available: int

    def __str__(self) -> str:
        return (
            f"Truncated SCTE-35 data ({self.field_name}): "
            f"needed {self.needed} byte(s), {self.available} available"
        )


@dataclass_json
@dataclass(frozen=True)
class UnknownTypeNotice:
    """A command type or descriptor tag that was kept as raw bytes."""

    kind: str
    type_value: int

    def __str__(self) -> str:
        return f"Unknown {self.kind} type 0x{self.type_value:02x} kept as raw bytes"


@dataclass_json
@dataclass(frozen=True)
class ParseWarning:
    """Non-fatal oddity found while parsing (skipped or inconsistent data)."""

    field_name: str
    message: str

    def __str__(self) -> str:
        return f"{self.field_name}: {self.message}"
