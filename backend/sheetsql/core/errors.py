from __future__ import annotations
from typing import Optional


class SheetSQLError(Exception):
    """Base class for every failure a pipeline stage reports to the caller."""


class ParseError(SheetSQLError):
    pass


class DatasetError(SheetSQLError):
    pass


class NoDatasetError(SheetSQLError):
    def __init__(self, message: str = "No dataset loaded. Upload a file or load the sample first."):
        super().__init__(message)


class SessionNotFound(SheetSQLError):
    def __init__(self, session_id: str):
        super().__init__(f"Unknown session '{session_id}'")
        self.session_id = session_id


class TranslationError(SheetSQLError):
    """The language model call failed (network, auth, bad payload)."""

    user_message = "API Error"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(TranslationError):
    user_message = "Quota reached. Please wait a minute and try again."

    def __init__(self, message: str, retry_after: Optional[str] = None):
        super().__init__(message, status_code=429)
        self.retry_after = retry_after
