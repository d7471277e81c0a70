"""Release asset classification by filename.

Asset names follow the convention
``<project>-<version>-<platform>-<arch-or-distro>-<tag>*.<ext>``, e.g.
``pcsx2-v1.7.3-windows-64bit-AVX2-Qt.7z`` or
``pcsx2-v1.7.3-linux-AppImage-64bit-Qt.AppImage``. The position of the
platform component is configurable because older builds put it first
(``windows-x64-Qt.7z``). Assets in the legacy archive are all Windows builds.
"""

import logging
import re
from typing import NamedTuple

from ..github_client.models import RawReleaseAsset
from .models import ReleaseAsset, ReleasePlatform, empty_asset_buckets

logger = logging.getLogger(__name__)

EXTENSION_PATTERN = re.compile(r"(\.[A-Za-z0-9]+)+$")
COMPONENT_DELIMITER = "-"
DEFAULT_PLATFORM_INDEX = 2
LEGACY_DISPLAY_NAME = "Windows 32bit"


class ClassifiedAsset(NamedTuple):
    platform: ReleasePlatform
    display_name: str
    additional_tags: list[str]


def strip_extension(filename: str) -> str:
    """Remove the file extension, including compound ones like ``.tar.xz``."""
    return EXTENSION_PATTERN.sub("", filename)


def classify_asset(
    filename: str,
    legacy: bool = False,
    platform_index: int = DEFAULT_PLATFORM_INDEX,
) -> ClassifiedAsset | None:
    """Work out the platform and display label of a release asset.

    Args:
        filename: Asset filename, with or without extension
        legacy: Whether the asset belongs to the legacy nightly archive
        platform_index: Position of the platform component in the name

    Returns:
        ClassifiedAsset (possibly with an UNRECOGNIZED platform), or None if
        the name has too few components to classify
    """
    stem = strip_extension(filename)

    if legacy:
        if "windows" in stem.lower():
            return ClassifiedAsset(ReleasePlatform.WINDOWS, LEGACY_DISPLAY_NAME, [])
        return ClassifiedAsset(ReleasePlatform.UNRECOGNIZED, stem, [])

    components = stem.split(COMPONENT_DELIMITER)
    # platform plus the arch/distro/os-version component that follows it
    if len(components) < platform_index + 2:
        logger.warning(
            f"Asset '{filename}' has {len(components)} name components, "
            f"expected at least {platform_index + 2}; skipping"
        )
        return None

    platform = ReleasePlatform.from_token(components[platform_index])
    qualifier = components[platform_index + 1]
    additional_tags = components[platform_index + 2 :]
    return ClassifiedAsset(platform, f"{platform.value} {qualifier}", additional_tags)


def gather_release_assets(
    raw_assets: list[RawReleaseAsset],
    legacy: bool = False,
    platform_index: int = DEFAULT_PLATFORM_INDEX,
) -> dict[ReleasePlatform, list[ReleaseAsset]]:
    """Bucket a release's assets by platform.

    Every known platform key is present in the result, even when empty.
    Assets that cannot be classified or target an unrecognized platform
    are left out.
    """
    buckets = empty_asset_buckets()

    for raw_asset in raw_assets:
        classified = classify_asset(raw_asset.name, legacy, platform_index)
        if classified is None:
            continue
        if classified.platform is ReleasePlatform.UNRECOGNIZED:
            logger.debug(f"Ignoring asset '{raw_asset.name}' for unknown platform")
            continue

        buckets[classified.platform].append(
            ReleaseAsset(
                url=raw_asset.browser_download_url,
                display_name=classified.display_name,
                additional_tags=classified.additional_tags,
                download_count=raw_asset.download_count,
            )
        )

    return buckets
