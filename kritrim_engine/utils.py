"""Small helpers shared across the engine: clock, slugs, env config, event sanitizing."""

from __future__ import annotations

import os
import re
from datetime import datetime, timezone
from pathlib import Path
import tomllib
from typing import Any, Mapping


PROJECT_NAME = "kritrim"

_SLUG_SPACE_RE = re.compile(r"\s+")
# Keys whose values are image bytes or data URLs; they never reach the events file.
_IMAGE_KEYS = frozenset({"image", "image_bytes", "data", "result", "source_image"})


def now_utc_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def slugify(label: str) -> str:
    return _SLUG_SPACE_RE.sub("-", str(label or "").strip().lower())


def is_data_url(value: str) -> bool:
    return value.startswith("data:") and ";base64," in value


def sanitize_payload(payload: Any) -> Any:
    if payload is None or isinstance(payload, (bool, int, float)):
        return payload
    if isinstance(payload, str):
        return f"<data-url:{len(payload)}>" if is_data_url(payload) else payload
    if isinstance(payload, bytes):
        return f"<bytes:{len(payload)}>"
    if isinstance(payload, Mapping):
        return {
            str(key): "<omitted>" if str(key).lower() in _IMAGE_KEYS else sanitize_payload(value)
            for key, value in payload.items()
        }
    if isinstance(payload, (list, tuple)):
        return [sanitize_payload(item) for item in payload]
    return str(payload)


def getenv_int(key: str, default: int) -> int:
    raw = (os.getenv(key) or "").strip()
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def parse_env_file(text: str) -> dict[str, str]:
    """Parse ``KEY=value`` lines; ``export`` prefixes and matching quotes are stripped."""
    values: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        name, _, value = line.partition("=")
        name = name.strip()
        value = value.strip()
        if len(value) >= 2 and value[0] in "\"'" and value[-1] == value[0]:
            value = value[1:-1]
        if name:
            values[name] = value
    return values


def load_dotenv(path: Path | None = None, override: bool = False) -> bool:
    env_path = path or _default_env_path()
    if not env_path.is_file():
        return False
    for name, value in parse_env_file(env_path.read_text(encoding="utf-8")).items():
        if override or name not in os.environ:
            os.environ[name] = value
    return True


def _default_env_path() -> Path:
    cwd = Path.cwd()
    root = _find_project_root(cwd)
    if root is not None and (root / ".env").is_file():
        return root / ".env"
    return cwd / ".env"


def _find_project_root(start: Path) -> Path | None:
    for candidate in (start, *start.parents):
        if (candidate / "kritrim_engine").is_dir() or _pyproject_name(candidate) == PROJECT_NAME:
            return candidate
    return None


def _pyproject_name(directory: Path) -> str | None:
    pyproject = directory / "pyproject.toml"
    if not pyproject.is_file():
        return None
    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError):
        return None
    return data.get("project", {}).get("name")
