"""
Basic PreviewKit usage example.

Extracts seek-bar preview sprite sheets and a WebVTT index from a local video.
"""

import logging

from previewkit import extract_previews, MediaTime

def main():
    logging.basicConfig(level=logging.INFO)

    def on_progress(timestamp, duration):
        print(f"  sampled {timestamp} of {duration}")

    print("Extracting previews...")
    result = extract_previews(
        input_path="/tmp/video/movie.mp4",
        output_dir="/tmp/previews",
        max_size=160,
        num_horizontal=5,
        num_vertical=5,
        frame_interval=MediaTime.from_seconds(2),
        image_format="jpg",
        progress_callback=on_progress,
    )

    print(f"Wrote {len(result.sheet_paths)} sprite sheets")
    print(f"Cue index: {result.index_path} ({result.cues_count} cues)")

if __name__ == "__main__":
    main()
