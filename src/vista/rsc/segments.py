"""Route segment classification shared by the pattern compiler and the route tree."""

from __future__ import annotations

from enum import Enum


class SegmentKind(str, Enum):
    """Kind of a single directory segment in the route tree."""

    STATIC = "static"
    DYNAMIC = "dynamic"
    CATCH_ALL = "catch-all"
    GROUP = "group"


def classify_segment(name: str) -> tuple[str, SegmentKind]:
    """Classify a directory name.

    ``(name)`` is a route group and contributes no label. ``[...name]`` is
    catch-all and ``[name]`` dynamic, both labelled by the inner name.
    Anything else is copied literally.

    Returns:
        (label, kind)
    """
    if name.startswith("(") and name.endswith(")"):
        return "", SegmentKind.GROUP
    if name.startswith("[...") and name.endswith("]"):
        return name[4:-1], SegmentKind.CATCH_ALL
    if name.startswith("[") and name.endswith("]"):
        return name[1:-1], SegmentKind.DYNAMIC
    return name, SegmentKind.STATIC


__all__ = ["SegmentKind", "classify_segment"]
