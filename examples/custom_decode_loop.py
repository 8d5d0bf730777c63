"""
Custom decode loop example.

Drives SpriteSheetManager directly from an OpenCV capture, checking the
sampling interval before paying for frame retrieval and scaling.
"""

import cv2
from PIL import Image

from previewkit import ManagerState, MediaTime, SpriteSheetManager

def main():
    capture = cv2.VideoCapture("/tmp/video/movie.mp4")
    manager = SpriteSheetManager(
        max_size=120,
        num_horizontal=8,
        num_vertical=8,
        frame_interval=MediaTime.from_seconds(10),
        image_format="png",
    )

    timestamp = MediaTime(0)
    while capture.grab():
        timestamp = MediaTime.from_rational(round(capture.get(cv2.CAP_PROP_POS_MSEC)), (1, 1000))
        if not manager.fulfils_frame_interval(timestamp):
            continue

        ok, frame = capture.retrieve()
        if not ok:
            break
        if manager.state is ManagerState.UNINITIALIZED:
            manager.initialize(frame.shape[1], frame.shape[0])

        tile = cv2.resize(frame, tuple(manager.tile_size), interpolation=cv2.INTER_AREA)
        manager.add_image(timestamp, Image.fromarray(cv2.cvtColor(tile, cv2.COLOR_BGR2RGB)))

    fps = capture.get(cv2.CAP_PROP_FPS)
    frame_count = capture.get(cv2.CAP_PROP_FRAME_COUNT)
    if fps > 0 and frame_count > 0:
        duration = MediaTime.from_seconds(frame_count / fps)
    else:
        # No usable container metadata; close the last cue at the last sample
        duration = timestamp
    capture.release()

    manager.end_frame(duration)
    result = manager.save("/tmp/previews/custom")
    print(f"Saved {len(result.sheet_paths)} sheets, index at {result.index_path}")

if __name__ == "__main__":
    main()
