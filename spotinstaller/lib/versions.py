"""Version strings as published in the Spotify pool listing.

Package files look like ``spotify-client_1.2.31.1205.g4d59ad7c_amd64.deb``:
four dot-separated integers, optionally followed by a build tag. The
``full`` version keeps the tag (it is part of the file name); the
``display`` version is the bare four-part number that ``spotify --version``
reports.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

_DISPLAY_RE = re.compile(r"\d+\.\d+\.\d+\.\d+")
_INSTALLED_RE = re.compile(r"Spotify version (\d+\.\d+\.\d+\.\d+)")
_CHUNK_RE = re.compile(r"\d+|\D+")


@dataclass(frozen=True)
class VersionInfo:
    full: str
    display: str


def version_key(version: str) -> Tuple[Tuple[int, int, str], ...]:
    """Sort key approximating ``sort -V``: digit runs compare numerically."""

    key = []
    for chunk in _CHUNK_RE.findall(version):
        if chunk.isdigit():
            key.append((1, int(chunk), ""))
        else:
            key.append((0, 0, chunk))
    return tuple(key)


def display_version(full: str) -> Optional[str]:
    m = _DISPLAY_RE.search(full)
    return m.group(0) if m else None


def parse_installed_version(output: str) -> Optional[str]:
    """Pull the four-part version out of ``spotify --version`` output."""

    m = _INSTALLED_RE.search(output or "")
    return m.group(1) if m else None


def package_pattern(package_name: str = "spotify-client", arch: str = "amd64") -> re.Pattern[str]:
    return re.compile(
        rf"{re.escape(package_name)}_(\d+\.\d+\.\d+\.\d+[^_\s\"'<>/]*)_{re.escape(arch)}\.deb"
    )


def package_filename(full_version: str, package_name: str = "spotify-client", arch: str = "amd64") -> str:
    return f"{package_name}_{full_version}_{arch}.deb"


def extract_package_versions(
    listing: str,
    *,
    package_name: str = "spotify-client",
    arch: str = "amd64",
) -> List[str]:
    """Return the distinct full versions named in a directory listing, sorted ascending."""

    found = set(package_pattern(package_name, arch).findall(listing or ""))
    return sorted(found, key=version_key)


def pick_latest(versions: Iterable[str]) -> Optional[VersionInfo]:
    ordered = sorted(versions, key=version_key)
    if not ordered:
        return None
    full = ordered[-1]
    display = display_version(full)
    if display is None:
        return None
    return VersionInfo(full=full, display=display)


def compare(a: str, b: str) -> int:
    ka, kb = version_key(a), version_key(b)
    return (ka > kb) - (ka < kb)
