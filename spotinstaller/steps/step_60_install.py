from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict

from ..console import say
from ..lib.deb import extract_deb
from ..lib.fsops import backup_dir, copy_tree, force_symlink, remove_path
from ..state_store import record_decision

logger = logging.getLogger(__name__)


class InstallStep:
    step_id = "60_install"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        package = state.get("package") or {}
        distro = ((state.get("execution") or {}).get("decisions") or {}).get("distro")
        dry_run = bool(cfg.get("dry_run", False))

        deb_file = package.get("deb_file")
        if not deb_file:
            raise RuntimeError("package.deb_file missing; run the download step first")
        if not dry_run and not Path(deb_file).is_file():
            raise RuntimeError(f"Failed to get valid Spotify package path: {deb_file}")

        # The downloaded archive is kept on failure so the next run can reuse it.
        if distro != "fedora":
            raise RuntimeError("Your distribution is not supported yet.")

        install_fedora(
            deb_file,
            install_path=str(cfg["install_path"]),
            bin_dir=str(cfg["bin_dir"]),
            applications_dir=str(cfg["applications_dir"]),
            dry_run=dry_run,
        )
        record_decision(state, "installed_to", cfg["install_path"])
        return state


def install_fedora(
    deb_file: str,
    *,
    install_path: str,
    bin_dir: str,
    applications_dir: str,
    dry_run: bool = False,
) -> None:
    """Unpack the .deb and lay out ~/.local/spotify with its two symlinks."""

    say("Installing Spotify for Fedora...")

    install = Path(install_path)
    # Nothing is unpacked in a dry run, so no scratch directory is needed.
    tmp = os.path.join(tempfile.gettempdir(), "spotify_rpm_dry_run") if dry_run else tempfile.mkdtemp(prefix="spotify_rpm_")
    try:
        extract_deb(deb_file, tmp, dry_run=dry_run)

        payload = Path(tmp) / "usr"
        if not dry_run and not payload.is_dir():
            raise RuntimeError(f"Package has no usr/ payload: {deb_file}")

        backup_dir(str(install), dry_run=dry_run)
        if not dry_run:
            install.mkdir(parents=True, exist_ok=True)

        copy_tree(str(payload), str(install), dry_run=dry_run)

        if not dry_run and not install.is_dir():
            raise RuntimeError(f"Install path missing after copy: {install}")

        force_symlink(str(install / "bin" / "spotify"), str(Path(bin_dir) / "spotify"), dry_run=dry_run)
        force_symlink(
            str(install / "share" / "spotify" / "spotify.desktop"),
            str(Path(applications_dir) / "spotify.desktop"),
            dry_run=dry_run,
        )
    finally:
        if not dry_run:
            remove_path(tmp)

    logger.info("Installed %s into %s", deb_file, install)
