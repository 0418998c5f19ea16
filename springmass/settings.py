"""Single source of truth for harness config + repo paths (no env overrides).

Policy:
- No fallback/default config values in code.
- If required config keys are missing, terminate with a clear error.
- Physics (masses, springs, dt) lives in scenario records, not here.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


REPO_ROOT = Path(__file__).parent.parent
DEFAULT_CONFIG_PATH = REPO_ROOT / 'config.json'


def resolve_path(p: str) -> Path:
    path = Path(p)
    return path if path.is_absolute() else (REPO_ROOT / path)


def load_json(path: Path) -> dict:
    return json.loads(path.read_text(encoding='utf-8'))


def _require_path(cfg: dict, keys: list[str]) -> Any:
    cur: Any = cfg
    prefix: list[str] = []
    for k in keys:
        prefix.append(k)
        if not isinstance(cur, dict) or k not in cur:
            raise KeyError(f'Missing required config key: {".".join(prefix)}')
        cur = cur[k]
    return cur


def req_str(cfg: dict, keys: list[str]) -> str:
    v = _require_path(cfg, keys)
    if not isinstance(v, str) or not v.strip():
        raise ValueError(f'Config key {".".join(keys)} must be a non-empty string.')
    return v


def req_int(cfg: dict, keys: list[str]) -> int:
    v = _require_path(cfg, keys)
    if isinstance(v, bool):
        raise ValueError(f'Config key {".".join(keys)} must be an int-like value.')
    try:
        return int(v)
    except Exception as e:
        raise ValueError(f'Config key {".".join(keys)} must be an int-like value.') from e


def req_bool(cfg: dict, keys: list[str]) -> bool:
    v = _require_path(cfg, keys)
    if not isinstance(v, bool):
        raise ValueError(f'Config key {".".join(keys)} must be true or false.')
    return v


def req_str_list(cfg: dict, keys: list[str]) -> list[str]:
    v = _require_path(cfg, keys)
    if not isinstance(v, list) or not v or not all(isinstance(x, str) and x.strip() for x in v):
        raise ValueError(f'Config key {".".join(keys)} must be a non-empty list of strings.')
    return [x.strip() for x in v]


def read_config(path: Path = DEFAULT_CONFIG_PATH) -> dict:
    cfg = load_json(path)
    validate_config(cfg)
    return cfg


def validate_config(cfg: dict) -> None:
    # Existence/type checks (no defaults).
    req_str(cfg, ['output', 'dir'])
    req_bool(cfg, ['output', 'write_csv'])

    req_str_list(cfg, ['run', 'scenarios'])

    req_bool(cfg, ['plotting', 'enabled'])
    if req_int(cfg, ['plotting', 'dpi']) <= 0:
        raise ValueError('Config key plotting.dpi must be > 0.')
