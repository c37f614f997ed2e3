from __future__ import annotations

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def copy_tree(src: str, dst: str, *, dry_run: bool = False) -> None:
    """Copy the contents of src into dst, merging with what is already there."""

    s = Path(src)
    d = Path(dst)
    if dry_run:
        logger.info("Would copy tree %s -> %s", str(s), str(d))
        return

    if not s.exists():
        raise FileNotFoundError(src)

    # Symlinks inside the payload are kept as links.
    shutil.copytree(s, d, symlinks=True, dirs_exist_ok=True)


def remove_path(path: str, *, dry_run: bool = False) -> None:
    p = Path(path)
    if not (p.exists() or p.is_symlink()):
        return
    if dry_run:
        logger.info("Would remove %s", str(p))
        return
    if p.is_dir() and not p.is_symlink():
        shutil.rmtree(p)
    else:
        p.unlink()


def backup_dir(path: str, *, dry_run: bool = False) -> str | None:
    """Move an existing directory aside to ``<path>.bak``; returns the backup path.

    Only the most recent backup is kept.
    """

    p = Path(path)
    if not p.is_dir():
        return None

    bak = p.with_name(p.name + ".bak")
    if dry_run:
        logger.info("Would move %s -> %s", str(p), str(bak))
        return str(bak)

    remove_path(str(bak))
    p.rename(bak)
    logger.info("Backed up %s -> %s", str(p), str(bak))
    return str(bak)


def force_symlink(target: str, link: str, *, dry_run: bool = False) -> None:
    """Equivalent of ``ln -sf target link``, creating the link's parent."""

    lp = Path(link)
    if dry_run:
        logger.info("Would link %s -> %s", str(lp), target)
        return

    lp.parent.mkdir(parents=True, exist_ok=True)
    if lp.is_dir() and not lp.is_symlink():
        raise RuntimeError(f"Cannot link {lp}: a directory is in the way")
    if lp.is_symlink() or lp.exists():
        lp.unlink()
    lp.symlink_to(target)
    logger.info("Linked %s -> %s", str(lp), target)
