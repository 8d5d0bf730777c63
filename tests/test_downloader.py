import pytest
import requests
import yt_dlp

from previewkit import downloader
from previewkit.downloader import VideoDownloader, download_video_file, is_http_url
from previewkit.exceptions import DownloadError
from previewkit.youtube import YouTubeClient, extract_youtube_id, is_youtube_url
from previewkit.youtube import client as youtube_client


class _FakeResponse:
    def __init__(self, chunks, status_error=None):
        self._chunks = chunks
        self._status_error = status_error

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def raise_for_status(self):
        if self._status_error:
            raise self._status_error

    def iter_content(self, chunk_size=1):
        return iter(self._chunks)


def test_url_detection():
    assert is_http_url("http://example.com/a.mp4")
    assert not is_http_url("ftp://example.com/a.mp4")
    assert not is_http_url("clip.mp4")
    assert is_youtube_url("https://youtu.be/dQw4w9WgXcQ")
    assert is_youtube_url("https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=10")
    assert not is_youtube_url("https://example.com/watch?v=abc")
    assert extract_youtube_id("https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=10") == "dQw4w9WgXcQ"


def test_resolve_local_file(tmp_path):
    video = tmp_path / "clip.mp4"
    video.write_bytes(b"\x00")
    assert VideoDownloader().resolve(str(video), str(tmp_path / "work")) == str(video)


def test_resolve_missing_local_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        VideoDownloader().resolve(str(tmp_path / "missing.mp4"), str(tmp_path))


def test_download_video_file_streams_chunks(tmp_path, monkeypatch):
    calls = {}

    def fake_get(url, stream, timeout, verify):
        calls["url"] = url
        calls["stream"] = stream
        return _FakeResponse([b"abc", b"def"])

    monkeypatch.setattr(downloader.requests, "get", fake_get)
    path = download_video_file("https://cdn.example.com/media/clip.mp4?sig=1", str(tmp_path / "dl"))

    assert path.endswith("clip.mp4")
    assert open(path, "rb").read() == b"abcdef"
    assert calls["stream"] is True


def test_download_http_error_is_wrapped(tmp_path, monkeypatch):
    def fake_get(url, stream, timeout, verify):
        return _FakeResponse([], status_error=requests.HTTPError("404 Not Found"))

    monkeypatch.setattr(downloader.requests, "get", fake_get)
    with pytest.raises(DownloadError):
        download_video_file("https://example.com/missing.mp4", str(tmp_path))


def test_resolve_youtube_uses_client(tmp_path, monkeypatch):
    client_calls = []
    resolver = VideoDownloader()
    monkeypatch.setattr(
        resolver.youtube_client,
        "download_video",
        lambda url, output_dir: client_calls.append((url, output_dir)) or "/tmp/video.mp4",
    )

    path = resolver.resolve("https://youtu.be/dQw4w9WgXcQ", str(tmp_path))
    assert path == "/tmp/video.mp4"
    assert client_calls == [("https://youtu.be/dQw4w9WgXcQ", str(tmp_path))]


def test_write_failure_removes_partial_file(tmp_path, monkeypatch):
    def chunks():
        yield b"abc"
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(downloader.requests, "get", lambda url, stream, timeout, verify: _FakeResponse(chunks()))
    with pytest.raises(DownloadError) as excinfo:
        download_video_file("https://example.com/clip.mp4", str(tmp_path))

    assert isinstance(excinfo.value.__cause__, OSError)
    assert not (tmp_path / "clip.mp4").exists()


def test_unwritable_output_dir_is_wrapped(tmp_path, monkeypatch):
    blocker = tmp_path / "not-a-directory"
    blocker.write_text("x")
    monkeypatch.setattr(downloader.requests, "get", lambda url, stream, timeout, verify: _FakeResponse([b"abc"]))

    with pytest.raises(DownloadError):
        download_video_file("https://example.com/clip.mp4", str(blocker / "dl"))


class _FakeYoutubeDL:
    """Stands in for yt_dlp.YoutubeDL; writes files named by the class attributes."""

    instances = []
    written_ext = "mp4"
    reported_ext = "mp4"
    error = None

    def __init__(self, opts):
        self.opts = opts
        type(self).instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def extract_info(self, url, download):
        if self.error:
            raise self.error
        if self.written_ext:
            with open(self.opts["outtmpl"].replace("%(ext)s", self.written_ext), "wb") as f:
                f.write(b"\x00")
        return {"id": "dQw4w9WgXcQ", "ext": self.reported_ext}

    def prepare_filename(self, info):
        return self.opts["outtmpl"].replace("%(ext)s", info["ext"])


@pytest.fixture
def fake_ydl(monkeypatch):
    class FakeYoutubeDL(_FakeYoutubeDL):
        instances = []

    monkeypatch.setattr(youtube_client.yt_dlp, "YoutubeDL", FakeYoutubeDL)
    return FakeYoutubeDL


def test_youtube_download_returns_prepared_filename(tmp_path, fake_ydl):
    client = YouTubeClient(cookies_path="cookies.txt")
    path = client.download_video("https://youtu.be/dQw4w9WgXcQ", str(tmp_path / "yt"), max_height=480)

    assert path == str(tmp_path / "yt" / "dQw4w9WgXcQ.mp4")
    opts = fake_ydl.instances[0].opts
    assert opts["format"] == "best[height<=480][vcodec!=none]/best"
    assert opts["cookiefile"] == "cookies.txt"
    assert opts["noplaylist"] is True


def test_youtube_download_falls_back_to_written_extension(tmp_path, fake_ydl):
    fake_ydl.written_ext = "webm"
    path = YouTubeClient().download_video("https://youtu.be/dQw4w9WgXcQ", str(tmp_path))
    assert path == str(tmp_path / "dQw4w9WgXcQ.webm")


def test_youtube_download_without_output_file_fails(tmp_path, fake_ydl):
    fake_ydl.written_ext = None
    with pytest.raises(DownloadError):
        YouTubeClient().download_video("https://youtu.be/dQw4w9WgXcQ", str(tmp_path))


def test_youtube_download_error_is_wrapped(tmp_path, fake_ydl):
    fake_ydl.error = yt_dlp.utils.DownloadError("ERROR: Video unavailable")
    with pytest.raises(DownloadError) as excinfo:
        YouTubeClient().download_video("https://youtu.be/dQw4w9WgXcQ", str(tmp_path))
    assert isinstance(excinfo.value.__cause__, yt_dlp.utils.DownloadError)


def test_youtube_download_rejects_non_youtube_url(tmp_path, fake_ydl):
    with pytest.raises(ValueError):
        YouTubeClient().download_video("https://example.com/clip.mp4", str(tmp_path))
    assert fake_ydl.instances == []
