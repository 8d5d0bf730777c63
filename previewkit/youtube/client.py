"""
YouTube client for PreviewKit.

Provides YouTube-specific functionality using yt-dlp to fetch a video
file that the decoder can read locally.
"""

import logging
import os
import re
from typing import Dict, Optional
from pathlib import Path

import yt_dlp

from ..exceptions import DownloadError

logger = logging.getLogger(__name__)

YOUTUBE_REGEX = r'^(https?://)?(www\.|m\.)?(youtube\.com/watch\?v=|youtu\.be/|youtube\.com/shorts/)([^\s&?/]+)'


def is_youtube_url(url: str) -> bool:
    """
    Check if the provided URL is a valid YouTube URL.

    Example:
        >>> is_youtube_url("https://www.youtube.com/watch?v=dQw4w9WgXcQ")
        True
        >>> is_youtube_url("https://example.com/video.mp4")
        False
    """
    return bool(re.match(YOUTUBE_REGEX, url))


def extract_youtube_id(url: str) -> Optional[str]:
    """
    Extract YouTube video ID from a URL.

    Example:
        >>> extract_youtube_id("https://youtu.be/dQw4w9WgXcQ")
        'dQw4w9WgXcQ'
    """
    match = re.match(YOUTUBE_REGEX, url)
    return match.group(4) if match else None


class YouTubeClient:
    """
    Client for fetching YouTube videos with yt-dlp.
    """

    def __init__(self, cookies_path: Optional[str] = None):
        """
        Initialize YouTube client.

        Args:
            cookies_path: Optional path to cookies file for authentication
        """
        self.cookies_path = cookies_path

    def _get_ydl_opts(self, **overrides) -> Dict:
        """
        Get default yt-dlp options with optional overrides.
        """
        opts = {
            'quiet': True,
            'no_warnings': True,
            'noplaylist': True,
        }

        if self.cookies_path:
            opts['cookiefile'] = self.cookies_path

        opts.update(overrides)
        return opts

    def download_video(self, url: str, output_dir: str, max_height: int = 720) -> str:
        """
        Download a YouTube video as a single file.

        Fetches the best single-file format no taller than max_height.

        Args:
            url: YouTube video URL
            output_dir: Directory to save the video
            max_height: Upper bound on the downloaded resolution

        Returns:
            Path to the downloaded video file

        Raises:
            ValueError: If URL is not a valid YouTube URL
            DownloadError: If download fails or produces no file
        """
        if not is_youtube_url(url):
            raise ValueError(f"Invalid YouTube URL: {url}")

        video_id = extract_youtube_id(url)
        os.makedirs(output_dir, exist_ok=True)
        logger.info(f"Downloading YouTube video: {video_id}")

        ydl_opts = self._get_ydl_opts(
            format=f'best[height<={max_height}][vcodec!=none]/best',
            outtmpl=os.path.join(output_dir, f'{video_id}.%(ext)s'),
        )

        try:
            with yt_dlp.YoutubeDL(ydl_opts) as ydl:
                info = ydl.extract_info(url, download=True)
                video_path = ydl.prepare_filename(info)
        except yt_dlp.utils.DownloadError as e:
            logger.error(f"Failed to download YouTube video {video_id}: {str(e)}")
            raise DownloadError(f"YouTube video download failed: {str(e)}") from e

        if not os.path.exists(video_path):
            # Fall back to whatever extension yt-dlp settled on
            candidates = sorted(Path(output_dir).glob(f"{video_id}.*"))
            if not candidates:
                raise DownloadError(f"yt-dlp produced no file for {video_id}")
            video_path = str(candidates[0])

        logger.info(f"Downloaded YouTube video to: {video_path}")
        return video_path
