from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext in {"json", "yaml", "yml"}:
        return ext
    # Default to JSON for unknown extensions.
    return "json"


def _yaml():
    try:
        import yaml  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError(
            "YAML run record requested but PyYAML is not available. "
            "Use a .json state path or install PyYAML."
        ) from e
    return yaml


def load_state(path: str) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        return {}

    if _detect_format(p) in {"yaml", "yml"}:
        yaml = _yaml()
        try:
            data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {p}: {e}") from e
    else:
        data = json.loads(p.read_text(encoding="utf-8"))

    if not isinstance(data, dict):
        raise ValueError(f"State file must be an object/dict, got {type(data)}")

    return data


def save_state(path: str, state: Dict[str, Any]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    if _detect_format(p) in {"yaml", "yml"}:
        p.write_text(_yaml().safe_dump(state, sort_keys=False) + "\n", encoding="utf-8")
    else:
        p.write_text(json.dumps(state, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def ensure_defaults(state: Dict[str, Any]) -> Dict[str, Any]:
    """Fill required keys with sane defaults (without overriding existing values)."""

    state.setdefault("config", {})
    state.setdefault("spotify", {})
    state.setdefault("latest", {})
    state.setdefault("plan", {})
    state.setdefault("package", {})
    state.setdefault("execution", {})

    cfg = state["config"]
    cfg.setdefault("dry_run", False)
    cfg.setdefault("assume_yes", False)
    cfg.setdefault("interactive", False)

    exe = state["execution"]
    exe.setdefault("current_step", None)
    exe.setdefault("completed_steps", [])
    exe.setdefault("errors", [])
    exe.setdefault("decisions", {})
    exe.setdefault("halt", None)

    return state


def fresh_run_state(previous: Dict[str, Any]) -> Dict[str, Any]:
    """Start a new run, carrying over only what the last run learned."""

    state = ensure_defaults({})
    last = {
        "installed_version": (previous.get("spotify") or {}).get("version"),
        "latest_version": (previous.get("latest") or {}).get("full"),
        "outcome": (previous.get("execution") or {}).get("outcome"),
    }
    if any(last.values()):
        state["previous_run"] = last
    return state


def mark_step_completed(state: Dict[str, Any], step_id: str) -> None:
    exe = state.setdefault("execution", {})
    completed = exe.setdefault("completed_steps", [])
    if step_id not in completed:
        completed.append(step_id)


def record_decision(state: Dict[str, Any], key: str, value: Any) -> None:
    state.setdefault("execution", {}).setdefault("decisions", {})[key] = value


def halt(state: Dict[str, Any], reason: str) -> None:
    """Ask the pipeline to stop after the current step."""

    state.setdefault("execution", {})["halt"] = reason
