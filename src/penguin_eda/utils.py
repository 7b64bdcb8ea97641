from __future__ import annotations

import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def new_id() -> str:
    return str(uuid.uuid4())


def read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def write_json(path: Path, obj: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj, indent=2, ensure_ascii=False, sort_keys=True) + "\n", encoding="utf-8")


def merge_json(path: Path, payload: dict[str, Any]) -> None:
    """Best-effort merge of `payload` into a JSON object file.

    Lists are extended, everything else is overwritten. Never raises: a run
    must not fail because its log could not be written.
    """
    try:
        existing: Any = read_json(path) if path.exists() else {}
        if not isinstance(existing, dict):
            existing = {}
        for k, v in payload.items():
            if isinstance(v, list) and isinstance(existing.get(k), list):
                existing[k].extend(v)
            else:
                existing[k] = v
        write_json(path, existing)
    except (OSError, ValueError, TypeError):
        return
