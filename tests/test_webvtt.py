from previewkit.media_time import MediaTime
from previewkit.models import Cue, Rect
from previewkit.webvtt import format_cue_reference, format_timestamp, format_vtt_from_cues, write_vtt_file


def test_format_timestamp_hours_only_when_needed():
    assert format_timestamp(MediaTime.from_millis(5)) == "00:00.005"
    assert format_timestamp(MediaTime.from_millis(59999)) == "00:59.999"
    assert format_timestamp(MediaTime.from_millis(3600000 + 61001)) == "01:01:01.001"


def test_format_cue_reference():
    assert format_cue_reference("sheet_0001.webp", Rect(320, 90, 160, 90)) == "sheet_0001.webp#xywh=320,90,160,90"


def test_format_vtt_from_cues():
    cues = [
        Cue(MediaTime(0), MediaTime(2000), 0, Rect(0, 0, 160, 90)),
        Cue(MediaTime(2000), MediaTime(3723500), 1, Rect(160, 0, 160, 90)),
    ]
    content = format_vtt_from_cues(cues, ["a.jpg", "b.jpg"])
    assert content == (
        "WEBVTT\n\n"
        "1\n00:00.000 --> 00:02.000\na.jpg#xywh=0,0,160,90\n\n"
        "2\n00:02.000 --> 01:02:03.500\nb.jpg#xywh=160,0,160,90\n\n"
    )


def test_empty_cue_list_is_header_only():
    assert format_vtt_from_cues([], []) == "WEBVTT\n\n"


def test_write_vtt_file_uses_unix_newlines(tmp_path):
    path = tmp_path / "index.vtt"
    write_vtt_file(str(path), "WEBVTT\n\n")
    assert path.read_bytes() == b"WEBVTT\n\n"
