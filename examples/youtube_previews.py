"""
YouTube preview example.

Downloads a YouTube video with yt-dlp and builds WebP sprite sheets from it.
"""

from previewkit import ExtractConfig, extract_from_config

def main():
    config = ExtractConfig(
        input="https://www.youtube.com/watch?v=VIDEO_ID",
        output_dir="/tmp/previews/youtube",
        frame_interval_seconds=5,
        num_horizontal=10,
        num_vertical=10,
        image_format="webp",
        scaler="area",
    )

    print("Downloading and extracting previews...")
    result = extract_from_config(config)

    print(f"Sheets: {result.sheet_paths}")
    print(f"Index:  {result.index_path}")

if __name__ == "__main__":
    main()
