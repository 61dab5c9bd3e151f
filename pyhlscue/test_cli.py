import base64
import json

from pyhlscue.cli import collect_cues, guess_encoding, main
from pyhlscue.conftest import build_section
from pyhlscue.extractors.hls import PayloadEncoding


def test_guess_encoding():
    assert guess_encoding("FC3011") == PayloadEncoding.HEX
    assert guess_encoding("0xfc3011") == PayloadEncoding.HEX
    assert guess_encoding("/DARAAA") == PayloadEncoding.BASE64
    # Valid hex that is not a section is treated as base64
    assert guess_encoding("AAAA") == PayloadEncoding.BASE64


def test_decode_json(tmp_path, splice_insert_base64):
    output = tmp_path / "cue.json"

    assert main(["decode", splice_insert_base64, "--format", "json", "-o", str(output)]) == 0

    result = json.loads(output.read_text())
    assert result["encoding"] == "base64"
    assert result["summary"].startswith("SCTE-35: splice_insert")
    assert result["message"]["splice_command"]["splice_event_id"] == 42
    assert result["details"]["signalType"] == "ad_start"
    assert result["error"] is None


def test_decode_tag_line_json(tmp_path, splice_insert_section):
    output = tmp_path / "cue.json"
    line = f'#EXT-X-DATERANGE:ID="1",DURATION=12,SCTE35-OUT=0x{splice_insert_section.hex()}'

    assert main(["decode", line, "--format", "json", "-o", str(output)]) == 0

    result = json.loads(output.read_text())
    assert result["encoding"] == "hex"
    assert result["details"]["duration"] == 12.0
    assert result["details"]["durationSource"] == "M3U8 Tag"


def test_decode_invalid_payload(tmp_path):
    output = tmp_path / "cue.json"

    assert main(["decode", "FC3", "-e", "hex", "--format", "json", "-o", str(output)]) == 1

    result = json.loads(output.read_text())
    assert result["message"] is None
    assert result["error"]["encoding"] == "hex"


def test_decode_table(splice_insert_base64):
    assert main(["decode", splice_insert_base64]) == 0


def test_scan_json(tmp_path, splice_insert_base64):
    playlist = tmp_path / "playlist.m3u8"
    playlist.write_text(
        "\n".join(
            [
                "#EXTM3U",
                f"#EXT-X-CUE-OUT:{splice_insert_base64}",
                "#EXTINF:6.006,",
                "segment_001.ts",
                "#EXT-X-DATERANGE:SCTE35-IN=0x000102",
            ]
        )
    )
    output = tmp_path / "cues.json"

    assert main(["scan", str(playlist), "--format", "json", "-o", str(output)]) == 0

    result = json.loads(output.read_text())
    assert [cue["line_number"] for cue in result] == [2, 5]
    assert result[0]["command"] == "splice_insert"
    assert result[0]["pts_time"] == 8421890
    assert result[0]["timecode"] == "00:01:33:14"
    assert result[1]["error"].startswith("Not a standard SCTE-35 message")


def test_scan_table(tmp_path, splice_insert_base64):
    playlist = tmp_path / "playlist.m3u8"
    playlist.write_text(f"#EXTM3U\n#EXT-X-CUE-OUT:{splice_insert_base64}\n")

    assert main(["scan", str(playlist)]) == 0


def test_scan_missing_file(tmp_path):
    assert main(["scan", str(tmp_path / "missing.m3u8")]) == 1


def test_collect_cues_framerate(splice_insert_base64):
    cues = collect_cues([f"#EXT-X-CUE-OUT:{splice_insert_base64}"], framerate=30)
    assert cues[0]["timecode"] == "00:01:33:17"
    assert cues[0]["pts_time"] == 8421890
    assert round(cues[0]["pts_seconds"], 3) == 93.577


def test_collect_cues_without_splice_time():
    section = build_section(0x07, bytes([0x7F]))
    cues = collect_cues([f"#EXT-X-CUE-IN:{base64.b64encode(section).decode()}"])

    assert cues[0]["command"] == "splice_time_signal"
    assert cues[0]["pts_time"] is None
    assert cues[0]["pts_seconds"] is None
    assert cues[0]["timecode"] is None
