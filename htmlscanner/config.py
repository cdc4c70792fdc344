from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, List

from .errors import ConfigurationError


DEFAULT_OUTPUT = "output.txt"


def normalize_keywords(keywords: Iterable[str]) -> List[str]:
    out: List[str] = []
    seen = set()
    for k in keywords:
        k = str(k)
        if not k:
            raise ConfigurationError("Keywords must not be empty strings.")
        if k in seen:
            continue
        seen.add(k)
        out.append(k)

    if not out:
        raise ConfigurationError("No keywords were provided.")
    return out


def load_keywords(path: str | None) -> List[str]:
    if not path:
        return []

    p = Path(path)
    if not p.is_file():
        raise ConfigurationError(f"Keyword file not found: {p}")

    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"Unable to read keyword file {p}: {e}") from e

    items = data.get("keywords", []) if isinstance(data, dict) else data
    if not isinstance(items, list):
        raise ConfigurationError(f"Keyword file must hold a list of keywords: {p}")
    return [str(k).strip() for k in items if str(k).strip()]
