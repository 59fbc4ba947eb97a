from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, MutableMapping, Optional

import yaml

logger = logging.getLogger(__name__)


def _read_policy(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in {".yaml", ".yml"}:
        payload = yaml.safe_load(text)
    else:
        payload = json.loads(text)
    return payload if isinstance(payload, dict) else {}


def apply_policy_defaults(path: Optional[Path], env: Optional[MutableMapping[str, str]] = None) -> int:
    """Set default environment variables from a JSON or YAML policy file if not already set.

    Only variables that are missing or blank are filled in. Returns the
    number of variables that were set.
    """
    target = os.environ if env is None else env
    if path is None or not path.exists():
        return 0
    try:
        payload = _read_policy(path)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        logger.warning("Warning: unable to read policy file %s: %s", path, exc)
        return 0
    env_defaults = payload.get("env_defaults") or {}
    applied = 0
    for key, value in env_defaults.items():
        if str(target.get(key, "")).strip() == "":
            target[key] = str(value)
            applied += 1
    return applied
