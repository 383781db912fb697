from __future__ import annotations
import logging
from typing import Optional, Sequence

from sheetsql.agents import llm_client
from sheetsql.constants.prompts import TRANSLATE_PROMPT
from sheetsql.constants.regex_constants import _SQL_FENCE_MARKERS
from sheetsql.constants.sql_query import TABLE_NAME
from sheetsql.core.config import Settings

LOG = logging.getLogger(__name__)


def build_prompt(question: str, schema: Sequence[str]) -> str:
    return TRANSLATE_PROMPT.format(table=TABLE_NAME, columns=", ".join(schema), question=question)


def clean_sql(raw: str) -> str:
    """Strip code fences and every semicolon from the model answer."""
    s = (raw or "").strip()
    s = _SQL_FENCE_MARKERS.sub("", s)
    return s.replace(";", "").strip()


def translate_question(question: str, schema: Sequence[str], *, settings: Optional[Settings] = None) -> str:
    """
    Ask the model for one SQLite statement answering `question`.

    The result is not validated; bad column names surface later as query
    errors. TranslationError / RateLimitError propagate to the caller.
    """
    prompt = build_prompt(question, schema)
    raw = llm_client.generate_text(prompt, settings=settings)
    sql = clean_sql(raw)
    LOG.info("Translated %r -> %s", question, sql)
    return sql
