import re

_FORBIDDEN = re.compile(
    r"\b(DELETE|UPDATE|INSERT|REPLACE\s+INTO|ALTER|DROP|TRUNCATE|ATTACH|DETACH|PRAGMA|VACUUM|CREATE)\b",
    re.I,
)
_START_OK = re.compile(r"^\s*(SELECT|WITH|VALUES)\b", re.I)
_SQL_FENCE_MARKERS = re.compile(r"```sql|```", re.I)
_NOT_LABEL_CHAR = re.compile(r"[^A-Za-z0-9_\s]")
