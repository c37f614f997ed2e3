from __future__ import annotations

import argparse
import logging
from typing import Any, Dict, Optional

from .banner import print_logo
from .config import expand_home, load_config
from .console import error
from .lib.prompt import is_interactive
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import run_pipeline
from .state_store import fresh_run_state, load_state, save_state
from .steps import (
    CheckDistroStep,
    CheckLatestStep,
    CleanupStep,
    DecideStep,
    DetectInstalledStep,
    DownloadStep,
    InstallStep,
)

logger = logging.getLogger(__name__)


DEFAULT_STATE_PATH = "~/.local/state/spotinstaller/state.json"


def build_steps():
    return [
        CheckDistroStep(),
        DetectInstalledStep(),
        CheckLatestStep(),
        DecideStep(),
        DownloadStep(),
        InstallStep(),
        CleanupStep(),
    ]


def run(
    *,
    config_path: Optional[str] = None,
    state_path: str = DEFAULT_STATE_PATH,
    log_path: str = DEFAULT_LOG_PATH,
    assume_yes: bool = False,
    dry_run: bool = False,
    interactive: Optional[bool] = None,
    steps=None,
) -> Dict[str, Any]:
    """Check, and if needed install or update, Spotify; returns the run record."""

    print_logo()
    actual_log_path = configure_logging(log_path=log_path)

    state_file = expand_home(state_path)

    try:
        previous = load_state(state_file)
    except (ValueError, OSError) as e:
        logger.warning("Ignoring unreadable run record %s: %s", state_file, e)
        previous = {}

    state = fresh_run_state(previous)
    state["config"]["dry_run"] = dry_run
    state["config"]["assume_yes"] = assume_yes
    state["config"]["interactive"] = is_interactive() if interactive is None else interactive
    state["execution"].setdefault("paths", {})["log_path_actual"] = actual_log_path

    try:
        cfg = load_config(config_path)
        state["config"].update(cfg.as_dict())

        result = run_pipeline(state=state, steps=build_steps() if steps is None else steps)
        state = result.state
        state["execution"]["ran_steps"] = result.ran_steps
        state["execution"]["halted_by"] = result.halted_by
        return state
    except Exception as e:
        logger.exception("spotinstaller failed")
        state["execution"]["outcome"] = "failed"
        state["execution"]["errors"].append(
            {
                "step": state["execution"].get("current_step"),
                "error": str(e),
            }
        )
        raise
    finally:
        _save_record(state_file, state)


def _save_record(path: str, state: Dict[str, Any]) -> None:
    try:
        save_state(path, state)
    except OSError as e:
        logger.warning("Could not save run record %s: %s", path, e)


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(
        prog="spotinstaller",
        description="Install or update Spotify under ~/.local from the official .deb pool.",
    )
    p.add_argument("--config", default=None, help="Path to YAML config (default ~/.config/spotinstaller/config.yaml)")
    p.add_argument("--state", default=DEFAULT_STATE_PATH, help="Path to run record (json|yaml)")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to log file")
    p.add_argument("-y", "--yes", action="store_true", help="Do not prompt; install/update if needed")
    p.add_argument("--dry-run", action="store_true", help="Log what would be done without doing it")

    args = p.parse_args(argv)

    try:
        run(
            config_path=args.config,
            state_path=args.state,
            log_path=args.log,
            assume_yes=bool(args.yes),
            dry_run=bool(args.dry_run),
        )
    except KeyboardInterrupt:
        error("Interrupted.")
        return 130
    except (RuntimeError, OSError, ValueError) as e:
        error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
