"""
Video input resolution for PreviewKit.

Turns the user-supplied input into a local file the decoder can open:
local paths are used as-is, YouTube URLs are fetched with yt-dlp and any
other HTTP(S) URL is streamed to disk with requests.
"""

import logging
import os
from typing import Optional
from pathlib import Path
from urllib.parse import urlparse

import requests

from .exceptions import DownloadError
from .youtube import YouTubeClient, is_youtube_url, extract_youtube_id

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


def is_http_url(source: str) -> bool:
    """
    Check if source is an HTTP or HTTPS URL.

    Example:
        >>> is_http_url("https://example.com/clip.mp4")
        True
        >>> is_http_url("/videos/clip.mp4")
        False
    """
    return urlparse(source).scheme in ("http", "https")


def download_video_file(url: str, output_dir: str, timeout: int = 30, verify_ssl: bool = True) -> str:
    """
    Stream a video from a direct HTTP(S) URL to output_dir.

    Args:
        url: URL of the video file
        output_dir: Directory to save the file
        timeout: Request timeout in seconds (default: 30)
        verify_ssl: Whether to verify SSL certificates (default: True)

    Returns:
        Local path of the downloaded file

    Raises:
        DownloadError: If the request fails or the file cannot be written
    """
    file_name = Path(urlparse(url).path).name or "download"
    output_path = os.path.join(output_dir, file_name)

    logger.info(f"Downloading video from: {url[:100]}...")
    try:
        os.makedirs(output_dir, exist_ok=True)
        with requests.get(url, stream=True, timeout=timeout, verify=verify_ssl) as response:
            response.raise_for_status()
            with open(output_path, 'wb') as f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    f.write(chunk)
    except (requests.RequestException, OSError) as e:
        if os.path.isfile(output_path):
            os.remove(output_path)  # drop the partial file
        logger.error(f"Failed to download video from {url[:100]}: {str(e)}")
        raise DownloadError(f"Video download failed: {str(e)}") from e

    logger.info(f"Video saved to: {output_path}")
    return output_path


class VideoDownloader:
    """
    Resolves local paths, direct URLs and YouTube URLs to local video files.
    """

    def __init__(self, youtube_cookies_path: Optional[str] = None, timeout: int = 30):
        """
        Initialize video downloader.

        Args:
            youtube_cookies_path: Optional path to cookies file for YouTube authentication
            timeout: Request timeout in seconds for direct downloads
        """
        self.youtube_client = YouTubeClient(cookies_path=youtube_cookies_path)
        self.timeout = timeout

    def resolve(self, source: str, work_dir: str) -> str:
        """
        Return a local path for source, downloading it into work_dir if remote.

        Args:
            source: Local path, direct video URL or YouTube URL
            work_dir: Directory for downloaded files

        Returns:
            Local file path

        Raises:
            FileNotFoundError: If a local source does not exist
            DownloadError: If a remote source cannot be fetched
        """
        if is_youtube_url(source):
            logger.info(f"Detected YouTube URL: {extract_youtube_id(source)}")
            return self.youtube_client.download_video(source, work_dir)

        if is_http_url(source):
            return download_video_file(source, work_dir, timeout=self.timeout)

        if not os.path.isfile(source):
            raise FileNotFoundError(f"Video file not found: {source}")
        return source
