from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

DEFAULT_REPOSITORY_URL = "https://repository.spotify.com/pool/non-free/s/spotify-client/"
DEFAULT_CONFIG_PATH = "~/.config/spotinstaller/config.yaml"

# Anything smaller than this is treated as an interrupted download.
DEFAULT_MIN_DOWNLOAD_BYTES = 50_000_000


def expand_home(path: str, env: Optional[Mapping[str, str]] = None) -> str:
    """Expand a leading ``~`` against $HOME from env (defaults to os.environ)."""

    e = os.environ if env is None else env
    if path == "~" or path.startswith("~/"):
        home = e.get("HOME") or str(Path.home())
        return home + path[1:]
    return path


@dataclass(frozen=True)
class InstallerConfig:
    raw: Dict[str, Any] = field(default_factory=dict)
    env: Mapping[str, str] = field(default_factory=lambda: dict(os.environ))

    def _path(self, key: str, default: str) -> str:
        return expand_home(str(self.raw.get(key) or default), self.env)

    @property
    def install_path(self) -> str:
        return self._path("install_path", "~/.local/spotify")

    @property
    def download_dir(self) -> str:
        return self._path("download_dir", "/tmp")

    @property
    def bin_dir(self) -> str:
        return self._path("bin_dir", "~/.local/bin")

    @property
    def applications_dir(self) -> str:
        return self._path("applications_dir", "~/.local/share/applications")

    @property
    def repository_url(self) -> str:
        return str(self.raw.get("repository_url") or DEFAULT_REPOSITORY_URL)

    @property
    def package_name(self) -> str:
        return str(self.raw.get("package_name") or "spotify-client")

    @property
    def arch(self) -> str:
        return str(self.raw.get("arch") or "amd64")

    @property
    def min_download_bytes(self) -> int:
        v = self.raw.get("min_download_bytes")
        return DEFAULT_MIN_DOWNLOAD_BYTES if v is None else int(v)

    @property
    def http_timeout(self) -> float:
        v = self.raw.get("http_timeout")
        return 60.0 if v is None else float(v)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "install_path": self.install_path,
            "download_dir": self.download_dir,
            "bin_dir": self.bin_dir,
            "applications_dir": self.applications_dir,
            "repository_url": self.repository_url,
            "package_name": self.package_name,
            "arch": self.arch,
            "min_download_bytes": self.min_download_bytes,
            "http_timeout": self.http_timeout,
        }


def load_config(path: Optional[str] = None, *, env: Optional[Mapping[str, str]] = None) -> InstallerConfig:
    """Load installer config from YAML.

    With no explicit path, the per-user config is read if present; otherwise
    built-in defaults apply. An explicit path that does not exist is an error.
    """

    e = dict(os.environ) if env is None else dict(env)

    if path is None:
        p = Path(expand_home(DEFAULT_CONFIG_PATH, e))
        if not p.exists():
            return InstallerConfig(raw={}, env=e)
    else:
        p = Path(expand_home(path, e))
        if not p.exists():
            raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("config must be YAML")

    try:
        import yaml  # type: ignore
    except Exception as ex:
        raise RuntimeError("PyYAML is required to read the config file") from ex

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as ex:
        raise ValueError(f"Invalid YAML in {p}: {ex}") from ex
    if not isinstance(raw, dict):
        raise ValueError(f"{p} must contain a mapping/object")

    return InstallerConfig(raw=raw, env=e)
