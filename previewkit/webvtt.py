"""
WebVTT cue index writer for PreviewKit.

Serializes the cue list of a closed sprite sheet manager into a WebVTT
file whose cue payloads are media fragment references into the sheet
images, e.g. ``spritesheet_0000.jpg#xywh=160,0,160,90``.
"""

import logging
from typing import Sequence

from .media_time import MediaTime
from .models import Cue, Rect

logger = logging.getLogger(__name__)


def format_timestamp(time: MediaTime) -> str:
    """
    Format a MediaTime as a WebVTT timestamp.

    Hours are omitted when zero.

    Example:
        >>> format_timestamp(MediaTime.from_millis(90500))
        '01:30.500'
        >>> format_timestamp(MediaTime.from_seconds(3600))
        '01:00:00.000'
    """
    return str(time)


def format_cue_reference(file_name: str, rect: Rect) -> str:
    """
    Build the spatial media fragment pointing at one tile.

    Example:
        >>> format_cue_reference("spritesheet_0000.jpg", Rect(160, 0, 160, 90))
        'spritesheet_0000.jpg#xywh=160,0,160,90'
    """
    return f"{file_name}#xywh={rect.x},{rect.y},{rect.width},{rect.height}"


def format_vtt_from_cues(cues: Sequence[Cue], sheet_names: Sequence[str]) -> str:
    """
    Format a list of preview cues into WebVTT content.

    Args:
        cues: Closed cues in ascending start order
        sheet_names: File name of each sprite sheet, indexed by sheet index

    Returns:
        WebVTT content as string, one numbered block per cue

    Example:
        >>> cue = Cue(MediaTime(0), MediaTime(2000), 0, Rect(0, 0, 160, 90))
        >>> format_vtt_from_cues([cue], ["spritesheet_0000.jpg"]).splitlines()
        ['WEBVTT', '', '1', '00:00.000 --> 00:02.000', 'spritesheet_0000.jpg#xywh=0,0,160,90']
    """
    content = "WEBVTT\n\n"

    for idx, cue in enumerate(cues, start=1):
        content += f"{idx}\n"
        content += f"{format_timestamp(cue.start)} --> {format_timestamp(cue.end)}\n"
        content += f"{format_cue_reference(sheet_names[cue.sheet_index], cue.rect)}\n\n"

    return content


def write_vtt_file(path: str, content: str) -> None:
    """Write WebVTT content as UTF-8 with Unix line endings."""
    with open(path, 'w', encoding='utf-8', newline='\n') as f:
        f.write(content)
    logger.debug(f"Wrote cue index to {path}")
