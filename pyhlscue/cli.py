#!/usr/bin/env python
"""Command-line interface for pyhlscue.

This module decodes single SCTE-35 payloads and scans HLS playlists for
cue tags, printing the results as Rich tables or JSON.
"""

import argparse
import json
import logging
import re
import sys
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from .extractors.hls import (
    CueTag,
    PayloadEncoding,
    extract_payload,
    parse_payload,
    scan_lines,
)
from .models.cue_message import CueMessage, SpliceInsert, SpliceTime, TimeSignal
from .models.errors import DecodeError
from .utils.cue_details import extract_cue_details
from .utils.cue_utils import (
    FRAME_RATE,
    CueJSONEncoder,
    format_cue_data,
    pts_to_timecode,
    summarize_cue_message,
)

# Initialize Rich console
console = Console()

# A hex section always starts with the 0xFC table id
HEX_SECTION_PATTERN = re.compile(r"(?:0x)?fc(?:[0-9a-f]{2})*", re.IGNORECASE)


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Set up logging configuration with Rich formatting.

    Args:
        verbose: Whether to enable verbose logging
        debug: Whether to enable debug logging
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, markup=True)],
    )

    # Decoders warn on every malformed cue, keep them quiet unless debugging
    if not debug:
        logging.getLogger("pyhlscue.parsers").setLevel(logging.ERROR)
        logging.getLogger("pyhlscue.extractors").setLevel(logging.ERROR)


def guess_encoding(payload: str) -> PayloadEncoding:
    """Guess whether a bare payload is hex or base64."""
    if HEX_SECTION_PATTERN.fullmatch(payload.strip()):
        return PayloadEncoding.HEX
    return PayloadEncoding.BASE64


def command_splice_time(message: Optional[CueMessage]) -> Optional[SpliceTime]:
    """Return the splice_time() of a message's command, if it carries one."""
    if message is None:
        return None
    command = message.splice_command
    if isinstance(command, (SpliceInsert, TimeSignal)) and command.splice_time:
        return command.splice_time
    return None


def get_signal_color(signal_type: str) -> str:
    """Get color for a signal based on its classification.

    Args:
        signal_type: Signal type from the cue details

    Returns:
        Color name for Rich formatting
    """
    if signal_type.endswith("_cancelled") or signal_type.endswith("_error"):
        return "bright_red"
    elif signal_type.endswith("_start"):
        return "bright_green"
    elif signal_type.endswith("_end"):
        return "bright_yellow"
    else:
        return "bright_white"


def _write_or_print(json_output: str, output_file: Optional[str]) -> None:
    if output_file:
        with open(output_file, "w") as f:
            f.write(json_output)
        console.print(f"[green]Cue data written to {output_file}[/]")
    else:
        syntax = Syntax(json_output, "json", theme="monokai", line_numbers=True)
        console.print(syntax)


def decode_command(args: argparse.Namespace) -> int:
    """Execute the decode command.

    Args:
        args: Command line arguments

    Returns:
        Exit code, 1 when the payload could not be decoded
    """
    payload = args.payload
    line = None

    if args.encoding == "auto":
        extracted = extract_payload(payload)
        if extracted is not None:
            line = payload
            payload, encoding = extracted.encoded, extracted.encoding
        else:
            encoding = guess_encoding(payload)
    else:
        encoding = PayloadEncoding(args.encoding)

    logging.info(f"Decoding {encoding.value} payload: {payload}")
    result = parse_payload(payload, encoding)
    message = None if isinstance(result, DecodeError) else result

    if isinstance(result, DecodeError):
        summary = f"Invalid SCTE-35 signal: {result}"
    else:
        summary = summarize_cue_message(result)
    details = extract_cue_details(result, line)

    if args.format == "json":
        record = {
            "encoded": payload,
            "encoding": encoding.value,
            "summary": summary,
            "details": details,
            "message": message,
            "error": result if isinstance(result, DecodeError) else None,
        }
        _write_or_print(json.dumps(record, cls=CueJSONEncoder, indent=2), args.output)
    else:
        border = "red" if isinstance(result, DecodeError) or result.error else "blue"
        console.print(Panel(escape(summary), title="SCTE-35", border_style=border))

        if message is not None:
            console.print(escape(format_cue_data(message)))

        details_table = Table(
            box=box.MINIMAL, show_header=False, padding=(0, 1), show_edge=False
        )
        details_table.add_column(style="dim italic", justify="right")
        details_table.add_column()
        color = get_signal_color(details.signal_type)
        details_table.add_row("Signal:", f"[{color}]{details.signal_type}[/]")
        details_table.add_row("Type:", escape(details.segmentation_type_name))
        details_table.add_row("Event ID:", details.event_id or "N/A")
        if details.duration is not None:
            details_table.add_row(
                "Duration:", f"{details.duration:.3f}s ({details.duration_source})"
            )
        details_table.add_row("UPID:", escape(details.upid_formatted))
        details_table.add_row(
            "Ad Start / End:", f"{details.is_ad_start} / {details.is_ad_end}"
        )
        console.print(details_table)

    return 1 if isinstance(result, DecodeError) else 0


def _read_lines(input_file: str) -> Iterable[str]:
    if input_file == "-":
        return sys.stdin.read().splitlines()
    with open(input_file, "r", encoding="utf-8", errors="replace") as f:
        return f.read().splitlines()


def collect_cues(
    lines: Iterable[str], framerate: float = FRAME_RATE
) -> List[Dict[str, Any]]:
    """Scan manifest lines and collect one record per cue tag.

    Args:
        lines: Manifest lines
        framerate: Frame rate used for PTS timecodes

    Returns:
        List of cue dictionaries
    """
    cues = []
    for line_number, cue_tag in scan_lines(lines):
        splice_time = command_splice_time(cue_tag.message)
        pts = splice_time.pts_time if splice_time is not None else None
        cues.append(
            {
                "line_number": line_number,
                "line": cue_tag.line,
                "encoding": cue_tag.encoding.value,
                "command": (
                    cue_tag.message.splice_command_type_name
                    if cue_tag.message is not None
                    else None
                ),
                "pts_time": pts,
                "pts_seconds": (
                    splice_time.pts_seconds if splice_time is not None else None
                ),
                "timecode": (
                    pts_to_timecode(pts, framerate) if pts is not None else None
                ),
                "summary": cue_tag.summary,
                "details": cue_tag.details,
                "error": cue_tag.error,
                "cue": cue_tag,
            }
        )
    return cues


def _cue_to_json(cue: Dict[str, Any]) -> Dict[str, Any]:
    record = dict(cue)
    cue_tag: CueTag = record.pop("cue")
    record["message"] = cue_tag.message
    return record


def scan_command(args: argparse.Namespace) -> int:
    """Execute the scan command with Rich formatting.

    Args:
        args: Command line arguments

    Returns:
        Exit code
    """
    input_file = args.input_file

    if input_file != "-" and not Path(input_file).exists():
        console.print(f"[bold red]Error:[/] Input file '{input_file}' does not exist")
        return 1

    cues = collect_cues(_read_lines(input_file), args.framerate)

    if args.format == "json":
        json_output = json.dumps(
            [_cue_to_json(cue) for cue in cues], cls=CueJSONEncoder, indent=2
        )
        _write_or_print(json_output, args.output)
        return 0

    if not cues:
        console.print("[yellow]No SCTE-35 cue tags found in the playlist[/]")
        return 0

    console.print()
    console.print(
        Panel(
            f"[bold]Found {len(cues)} SCTE-35 cue tags in [cyan]{input_file}[/]",
            border_style="blue",
        )
    )

    table = Table(
        title="SCTE-35 CUES SUMMARY",
        box=box.ROUNDED,
        header_style="bold white on blue",
        border_style="blue",
        min_width=100,
    )
    table.add_column("LINE", justify="right", style="bright_white")
    table.add_column("COMMAND", style="bright_cyan", no_wrap=True)
    table.add_column("PTS (s)", justify="right", no_wrap=True)
    table.add_column("TIMECODE", style="bright_cyan", no_wrap=True)
    table.add_column("SIGNAL", no_wrap=True)
    table.add_column("SUMMARY", style="bright_white")

    for cue in cues:
        signal_type = cue["details"].signal_type
        color = get_signal_color(signal_type)
        table.add_row(
            str(cue["line_number"]),
            cue["command"] or "N/A",
            f"{cue['pts_seconds']:.3f}" if cue["pts_seconds"] is not None else "N/A",
            cue["timecode"] or "N/A",
            f"[{color}]{signal_type}[/]",
            escape(cue["summary"]),
        )

    console.print(table)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for pyhlscue."""
    parser = argparse.ArgumentParser(
        description="Decode SCTE-35 cues carried in HLS manifest tags"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "-d", "--debug", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Decode command
    decode_parser = subparsers.add_parser(
        "decode", help="Decode a single SCTE-35 payload or manifest tag line"
    )
    decode_parser.add_argument(
        "payload", help="Base64 or hex payload, or a full manifest tag line"
    )
    decode_parser.add_argument(
        "-e",
        "--encoding",
        choices=["auto", "base64", "hex"],
        default="auto",
        help="Payload encoding (default: auto)",
    )
    decode_parser.add_argument("-o", "--output", help="Output file (default: stdout)")
    decode_parser.add_argument(
        "--format",
        choices=["table", "json"],
        default="table",
        help="Output format (default: table)",
    )
    decode_parser.set_defaults(func=decode_command)

    # Scan command
    scan_parser = subparsers.add_parser(
        "scan", help="Scan an HLS playlist for SCTE-35 cue tags"
    )
    scan_parser.add_argument("input_file", help="Playlist file, or - for stdin")
    scan_parser.add_argument("-o", "--output", help="Output file (default: stdout)")
    scan_parser.add_argument(
        "-f",
        "--framerate",
        type=float,
        default=float(FRAME_RATE),
        help="Frame rate used for PTS timecodes (default: 25.0)",
    )
    scan_parser.add_argument(
        "--format",
        choices=["table", "json"],
        default="table",
        help="Output format (default: table)",
    )
    scan_parser.set_defaults(func=scan_command)

    args = parser.parse_args(argv)

    setup_logging(args.verbose, args.debug)

    if hasattr(args, "func"):
        return args.func(args)

    console.print(
        Panel.fit(
            "[bold blue]pyhlscue - SCTE-35 Cue Decoder for HLS[/]",
            subtitle="[italic]Decode SCTE-35 cues from manifest tags[/]",
        )
    )
    console.print()
    parser.print_help()
    console.print()
    console.print(
        Panel(
            "[bold]Example usage:[/]\n"
            "  [cyan]pyhlscue decode <base64 or hex payload>[/]\n"
            '  [cyan]pyhlscue decode \'#EXT-X-DATERANGE:ID="1",SCTE35-OUT=0xFC30...\'[/]\n'
            "  [cyan]pyhlscue scan playlist.m3u8 --format json -o cues.json[/]",
            border_style="dim",
        )
    )
    return 1


if __name__ == "__main__":
    sys.exit(main())
