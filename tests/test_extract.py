import os

import cv2
import numpy as np
import pytest
from PIL import Image

from previewkit.decoder import VideoDecoder, parse_scaler
from previewkit.exceptions import DecodeError
from previewkit.extract import extract_from_config, extract_previews
from previewkit.media_time import MediaTime
from previewkit.models import ExtractConfig, TileSize


FPS = 10
FRAMES = 40
SIZE = (64, 48)


@pytest.fixture
def clip(tmp_path):
    """Four-second MJPG clip, one solid color per second."""
    path = str(tmp_path / "clip.avi")
    writer = cv2.VideoWriter(path, cv2.VideoWriter_fourcc(*"MJPG"), FPS, SIZE)
    if not writer.isOpened():
        pytest.skip("OpenCV build cannot write MJPG")
    for i in range(FRAMES):
        frame = np.zeros((SIZE[1], SIZE[0], 3), dtype=np.uint8)
        frame[:, :] = (0, 0, 60 * (i // FPS))  # BGR: red increases each second
        writer.write(frame)
    writer.release()
    return path


def test_decoder_reports_stream_properties(clip):
    with VideoDecoder(clip) as decoder:
        assert (decoder.width, decoder.height) == SIZE
        frames = list(decoder.frames())
        assert len(frames) == FRAMES
        assert frames[0].timestamp == MediaTime(0)
        timestamps = [f.timestamp for f in frames]
        assert timestamps == sorted(timestamps)
        assert decoder.duration() == MediaTime.from_seconds(4)


def test_decoded_frame_is_scaled_rgb(clip):
    with VideoDecoder(clip, scaler="area") as decoder:
        frame = next(iter(decoder.frames()))
        image = frame.scaled(TileSize(32, 24))
    assert image.size == (32, 24)
    assert image.mode == "RGB"
    r, g, b = image.getpixel((16, 12))
    assert r < 20 and g < 20 and b < 20


def test_missing_input_raises_decode_error(tmp_path):
    with pytest.raises(DecodeError):
        VideoDecoder(str(tmp_path / "missing.avi")).open()


def test_unknown_scaler():
    with pytest.raises(ValueError):
        parse_scaler("gauss")


def test_extract_previews_end_to_end(clip, tmp_path):
    progress = []
    output_dir = tmp_path / "out"
    result = extract_previews(
        clip,
        str(output_dir),
        max_size=32,
        num_horizontal=2,
        num_vertical=1,
        frame_interval=MediaTime.from_seconds(1),
        image_format="png",
        progress_callback=lambda t, d: progress.append((t, d)),
    )

    assert result.tile_size == TileSize(32, 24)
    assert len(progress) == result.cues_count
    assert 3 <= result.cues_count <= 4
    assert len(result.sheet_paths) == 2
    assert all(os.path.exists(p) for p in result.sheet_paths)

    with Image.open(result.sheet_paths[0]) as sheet:
        assert sheet.size == (64, 24)
        red_first, _, _ = sheet.convert("RGB").getpixel((16, 12))
        red_second, _, _ = sheet.convert("RGB").getpixel((48, 12))
        assert red_second > red_first

    lines = open(result.index_path, encoding="utf-8").read().splitlines()
    assert lines[0] == "WEBVTT"
    assert lines[4] == "spritesheet_0000.png#xywh=0,0,32,24"
    timing_lines = [line for line in lines if "-->" in line]
    assert timing_lines[0].startswith("00:00.000 --> ")
    assert timing_lines[-1].endswith(" --> 00:04.000")


def test_extract_from_config_local_file(clip, tmp_path):
    config = ExtractConfig(input=clip, output_dir=str(tmp_path / "cfg"), max_size=16,
                           frame_interval_seconds=2, image_format="jpg", name_prefix="thumbs")
    result = extract_from_config(config)
    assert os.path.basename(result.index_path) == "thumbs.vtt"
    assert [os.path.basename(p) for p in result.sheet_paths] == ["thumbs_0000.jpg"]


def test_stale_frame_cannot_be_retrieved(clip):
    with VideoDecoder(clip) as decoder:
        frames = decoder.frames()
        first = next(frames)
        for _ in range(15):
            current = next(frames)

        with pytest.raises(DecodeError):
            first.scaled(TileSize(32, 24))
        red, _, _ = current.scaled(TileSize(32, 24)).getpixel((16, 12))
        assert red > 40

        list(frames)
        with pytest.raises(DecodeError):
            current.scaled(TileSize(32, 24))
