from __future__ import annotations

import logging
import platform
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

FEDORA_RELEASE = "/etc/fedora-release"


def detect_distro(release_file: str = FEDORA_RELEASE) -> str:
    """Detect the distribution we know how to install onto.

    Returns: 'fedora' or 'unsupported'.
    """

    if Path(release_file).is_file():
        return "fedora"
    return "unsupported"


def normalize_arch(machine: Optional[str] = None) -> str:
    m = (machine if machine is not None else platform.machine()).lower()
    return {
        "x86_64": "amd64",
        "amd64": "amd64",
        "aarch64": "arm64",
        "arm64": "arm64",
        "armv7l": "armhf",
        "armv6l": "armhf",
    }.get(m, m)
