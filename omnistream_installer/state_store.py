"""Run state kept between invocations.

The state only records what happened (host, decisions, errors, which steps
finished). Steps re-check the host before trusting it, so losing the file
costs a slower re-run and nothing else.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict

import yaml

STATE_VERSION = 1


class StateFileError(ValueError):
    """The state file exists but cannot be parsed into a mapping."""


def _is_yaml(path: Path) -> bool:
    return path.suffix.lower() in {".yaml", ".yml"}


def _dump(path: Path, state: Dict[str, Any]) -> str:
    if _is_yaml(path):
        return yaml.safe_dump(state, sort_keys=False)
    return json.dumps(state, indent=2, sort_keys=True) + "\n"


def load_state(path: str) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        return {}

    text = p.read_text(encoding="utf-8")
    if not text.strip():
        return {}

    try:
        data = yaml.safe_load(text) if _is_yaml(p) else json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise StateFileError(f"Unreadable state file {p}: {e}") from e

    if not isinstance(data, dict):
        raise StateFileError(f"State file {p} must hold a mapping, got {type(data).__name__}")
    return data


def save_state(path: str, state: Dict[str, Any]) -> None:
    """Write state atomically: a crash mid-write leaves the old file intact."""

    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp = tempfile.mkstemp(prefix=f".{p.name}.", dir=str(p.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(_dump(p, state))
        os.replace(tmp, p)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise


def ensure_defaults(state: Dict[str, Any]) -> Dict[str, Any]:
    state.setdefault("version", STATE_VERSION)
    state.setdefault("host", {})
    exe = state.setdefault("execution", {})
    exe.setdefault("current_step", None)
    exe.setdefault("completed_steps", [])
    exe.setdefault("errors", [])
    exe.setdefault("decisions", {})
    return state


def mark_step_completed(state: Dict[str, Any], step_id: str) -> None:
    completed = state.setdefault("execution", {}).setdefault("completed_steps", [])
    if step_id not in completed:
        completed.append(step_id)


def is_step_completed(state: Dict[str, Any], step_id: str) -> bool:
    return step_id in ((state.get("execution") or {}).get("completed_steps") or [])


def record_decision(state: Dict[str, Any], key: str, value: Any) -> None:
    state.setdefault("execution", {}).setdefault("decisions", {})[key] = value
