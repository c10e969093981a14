"""
Wrappers around the ffprobe and ffmpeg command-line tools
"""

import json
import logging
import os
import subprocess
from typing import List, Optional

logger = logging.getLogger(__name__)

ASPECT_LANDSCAPE = "16:9"
ASPECT_PORTRAIT = "9:16"
ASPECT_OTHER = "other"

_PREFIXES = {
    ASPECT_LANDSCAPE: "landscape",
    ASPECT_PORTRAIT: "portrait",
}


class MediaToolError(Exception):
    """Raised when an external media tool fails or returns unusable output"""


def _run(cmd: List[str], timeout: Optional[float]) -> subprocess.CompletedProcess:
    try:
        return subprocess.run(cmd, capture_output=True, check=True, timeout=timeout)
    except FileNotFoundError as e:
        raise MediaToolError(f"{cmd[0]} not found") from e
    except subprocess.TimeoutExpired as e:
        raise MediaToolError(f"{cmd[0]} timed out after {timeout}s") from e
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or b"").decode("utf-8", errors="ignore").strip()
        logger.error("%s exited with %s: %s", cmd[0], e.returncode, stderr[-500:])
        raise MediaToolError(f"unable to run {cmd[0]}") from e


def classify_aspect_ratio(width: int, height: int) -> str:
    """
    Classify a frame size as landscape, portrait or other.

    Uses exact integer equality on the floor-divided ratio, so a size must
    match 16:9 or 9:16 exactly after truncation (1920x1080 does, 800x600 and
    most rounded sizes do not).
    """
    if width == 16 * height // 9:
        return ASPECT_LANDSCAPE
    if height == 16 * width // 9:
        return ASPECT_PORTRAIT
    return ASPECT_OTHER


def aspect_ratio_prefix(aspect_ratio: str) -> str:
    """Object-key prefix for an aspect ratio class"""
    return _PREFIXES.get(aspect_ratio, "other")


def get_video_aspect_ratio(file_path: str, ffprobe_bin: str = "ffprobe",
                           timeout: Optional[float] = None) -> str:
    """Probe the first video stream of a file and classify its aspect ratio"""
    cmd = [ffprobe_bin, "-v", "error", "-print_format", "json", "-show_streams", file_path]
    result = _run(cmd, timeout)

    try:
        output = json.loads(result.stdout)
        streams = output["streams"]
    except (ValueError, KeyError, TypeError) as e:
        raise MediaToolError(f"could not parse ffprobe output: {e}") from e

    if not streams:
        raise MediaToolError("no video streams found")

    video_streams = [s for s in streams if s.get("codec_type", "video") == "video"]
    if not video_streams:
        raise MediaToolError("no video streams found")

    try:
        width = int(video_streams[0]["width"])
        height = int(video_streams[0]["height"])
    except (KeyError, ValueError, TypeError) as e:
        raise MediaToolError("video stream has no dimensions") from e

    aspect_ratio = classify_aspect_ratio(width, height)
    logger.info("Probed %s: %dx%d (%s)", file_path, width, height, aspect_ratio)
    return aspect_ratio


def process_video_for_fast_start(file_path: str, ffmpeg_bin: str = "ffmpeg",
                                 timeout: Optional[float] = None) -> str:
    """
    Remux a video so the moov atom sits before the media data.

    Streams are copied, not re-encoded. The output is written next to the
    input as `<file_path>.processing` and its path is returned.
    """
    output_path = f"{file_path}.processing"
    cmd = [
        ffmpeg_bin, "-y",
        "-i", file_path,
        "-c", "copy",
        "-movflags", "faststart",
        "-f", "mp4",
        output_path,
    ]
    _run(cmd, timeout)

    if not os.path.exists(output_path) or os.path.getsize(output_path) == 0:
        raise MediaToolError("processed file is missing or empty")
    return output_path
