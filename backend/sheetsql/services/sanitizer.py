from __future__ import annotations
from typing import Any, Dict, Iterable, List, Mapping

from sheetsql.constants.regex_constants import _NOT_LABEL_CHAR


def clean_label(label: Any) -> str:
    """Drop everything but letters, digits, underscore and whitespace, then trim."""
    return _NOT_LABEL_CHAR.sub("", "" if label is None else str(label)).strip()


def clean_columns(columns: Iterable[Any]) -> List[str]:
    return [clean_label(c) for c in columns]


def clean_row(row: Mapping[Any, Any]) -> Dict[str, Any]:
    # colliding labels: the later key wins
    return {clean_label(k): v for k, v in row.items()}


def find_collisions(columns: Iterable[Any]) -> Dict[str, List[str]]:
    groups: Dict[str, List[str]] = {}
    for raw in columns:
        groups.setdefault(clean_label(raw), []).append(str(raw))
    return {k: v for k, v in groups.items() if len(v) > 1}
