"""Playlist scanning and segment URL resolution."""

from __future__ import annotations

from typing import Optional


def find_line_after(text: str, marker: str) -> Optional[str]:
    """Return the trimmed line following the first line containing ``marker``.

    Only the first occurrence is considered and blank lines after it are
    skipped. Returns ``None`` when the marker is missing or nothing follows it.
    """
    lines = text.splitlines()
    for index, line in enumerate(lines):
        if marker in line:
            for following in lines[index + 1 :]:
                if following.strip():
                    return following.strip()
            return None
    return None


def resolve_segment(playlist_url: str, segment_ref: str) -> str:
    """Resolve ``segment_ref`` against ``playlist_url``.

    Absolute references (starting with ``http``) are returned untouched.
    Otherwise the last path segment of the playlist URL is replaced; this is
    plain text substitution, not RFC 3986 resolution.
    """
    if segment_ref.startswith("http"):
        return segment_ref
    pos = playlist_url.rfind("/")
    if pos == -1:
        return segment_ref
    return playlist_url[: pos + 1] + segment_ref
