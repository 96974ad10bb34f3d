"""
Lecture Link Helpers
====================

Rewrites lecture links from YouTube and Google Drive into embeddable player
URLs and direct download URLs.
"""

import logging
from typing import Optional
from urllib.parse import parse_qs, urlparse

logger = logging.getLogger(__name__)

YOUTUBE_EMBED = "https://www.youtube.com/embed/{}?autoplay=1&rel=0"


def drive_file_id(path: str) -> Optional[str]:
    """Returns <id> from a /file/d/<id>/... path."""
    parts = path.split("/")
    if "d" in parts:
        index = parts.index("d")
        if len(parts) > index + 1 and parts[index + 1]:
            return parts[index + 1]
    return None


def embed_url(url: str) -> Optional[str]:
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        logger.error(f"Invalid or unsupported URL: {url}")
        return None

    host = parsed.hostname or ""
    if "youtube.com" in host:
        video_id = parse_qs(parsed.query).get("v", [""])[0]
        if video_id:
            return YOUTUBE_EMBED.format(video_id)
    elif host == "youtu.be":
        video_id = parsed.path[1:]
        if video_id:
            return YOUTUBE_EMBED.format(video_id)
    elif host == "drive.google.com":
        file_id = drive_file_id(parsed.path)
        if file_id:
            return f"https://drive.google.com/file/d/{file_id}/preview"

    return url


def download_url(url: str) -> str:
    parsed = urlparse(url)
    if parsed.hostname == "drive.google.com":
        file_id = drive_file_id(parsed.path)
        if file_id:
            return f"https://drive.google.com/uc?export=download&id={file_id}"
    return url
