"""
Shared test fixtures and configuration.
"""

from pathlib import Path
from typing import Any, Dict

import pytest

from spotinstaller.state_store import ensure_defaults


LISTING = """<html><head><title>Index of /pool/non-free/s/spotify-client</title></head><body>
<a href="spotify-client_1.1.84.716.gc5f8b819_amd64.deb">spotify-client_1.1.84.716.gc5f8b819_amd64.deb</a>
<a href="spotify-client_1.2.9.743.g85d9593d_amd64.deb">spotify-client_1.2.9.743.g85d9593d_amd64.deb</a>
<a href="spotify-client_1.2.31.1205.g4d59ad7c_amd64.deb">spotify-client_1.2.31.1205.g4d59ad7c_amd64.deb</a>
<a href="spotify-client_1.2.31.1205.g4d59ad7c_i386.deb">spotify-client_1.2.31.1205.g4d59ad7c_i386.deb</a>
<a href="spotify-client-gnome-support_0.1.0_all.deb">spotify-client-gnome-support_0.1.0_all.deb</a>
</body></html>
"""


class FakeResponse:
    def __init__(self, text: str = "", content: bytes = b"", status_code: int = 200):
        self.text = text
        self.content = content
        self.status_code = status_code

    def raise_for_status(self) -> None:
        import requests

        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def iter_content(self, chunk_size: int = 1):
        for i in range(0, len(self.content), chunk_size):
            yield self.content[i : i + chunk_size]

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


@pytest.fixture
def listing() -> str:
    return LISTING


@pytest.fixture
def home(tmp_path: Path, monkeypatch) -> Path:
    """A throwaway $HOME."""
    h = tmp_path / "home"
    h.mkdir()
    monkeypatch.setenv("HOME", str(h))
    return h


@pytest.fixture
def state(home: Path, tmp_path: Path) -> Dict[str, Any]:
    """A run state with config pointing into the temp home."""
    s = ensure_defaults({})
    s["config"].update(
        {
            "install_path": str(home / ".local" / "spotify"),
            "bin_dir": str(home / ".local" / "bin"),
            "applications_dir": str(home / ".local" / "share" / "applications"),
            "download_dir": str(tmp_path / "downloads"),
            "repository_url": "https://repo.example/pool/spotify-client/",
            "package_name": "spotify-client",
            "arch": "amd64",
            "min_download_bytes": 100,
            "http_timeout": 5,
        }
    )
    return s


@pytest.fixture
def fake_response():
    return FakeResponse


def _fake_extract(deb_file, dest_dir, dry_run=False):
    """Lay out what ``dpkg-deb -x`` produces for the spotify-client package."""
    if dry_run:
        return
    usr = Path(dest_dir) / "usr"
    (usr / "share" / "spotify").mkdir(parents=True)
    (usr / "share" / "spotify" / "spotify").write_text("#!/bin/sh\n")
    (usr / "share" / "spotify" / "spotify.desktop").write_text("[Desktop Entry]\n")
    (usr / "bin").mkdir()
    (usr / "bin" / "spotify").symlink_to("../share/spotify/spotify")


@pytest.fixture
def fake_extract():
    return _fake_extract
