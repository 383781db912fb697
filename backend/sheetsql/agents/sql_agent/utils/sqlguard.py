from __future__ import annotations
from sheetsql.constants.regex_constants import _FORBIDDEN, _START_OK


def is_safe(sql: str) -> bool:
    """Whitelist starts + blacklist forbidden tokens."""
    return bool(_START_OK.search(sql)) and not _FORBIDDEN.search(sql)
