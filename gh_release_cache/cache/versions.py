"""Semantic version extraction from release tag names."""

import re
from typing import NamedTuple

VERSION_PATTERN = re.compile(r"^v?(\d+)\.(\d+)\.(\d+)")


class SemVer(NamedTuple):
    major: int
    minor: int
    patch: int


def parse_version(tag_name: str) -> SemVer | None:
    """Extract the major.minor.patch triple from a tag.

    A leading ``v`` is ignored and anything after the patch number
    (``-pre``, ``-dev``) is allowed.

    Args:
        tag_name: Tag string such as ``v1.7.2000`` or ``2.2.0-pre``

    Returns:
        SemVer triple, or None when the tag does not start with a version

    Example:
        >>> parse_version("v1.7.3")
        SemVer(major=1, minor=7, patch=3)
        >>> parse_version("nightly-build") is None
        True
    """
    match = VERSION_PATTERN.match(tag_name.strip())
    if match is None:
        return None
    major, minor, patch = (int(group) for group in match.groups())
    return SemVer(major, minor, patch)
