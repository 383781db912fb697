from __future__ import annotations
import logging
from typing import Optional

import google.generativeai as genai
import requests
from google.api_core import exceptions as google_exceptions

from sheetsql.core.config import Settings, settings as default_settings
from sheetsql.core.errors import RateLimitError, TranslationError

LOG = logging.getLogger(__name__)


def _gemini_generate(prompt: str, cfg: Settings, temperature: float = 0.0) -> str:
    if not cfg.GEMINI_API_KEY:
        raise TranslationError("GEMINI_API_KEY is not set")
    genai.configure(api_key=cfg.GEMINI_API_KEY)
    model = genai.GenerativeModel(cfg.GEMINI_MODEL)
    try:
        response = model.generate_content(
            prompt,
            generation_config={"temperature": temperature},
            request_options={"timeout": cfg.LLM_TIMEOUT},
        )
    except google_exceptions.ResourceExhausted as e:
        LOG.warning("Gemini quota exhausted: %s", e)
        raise RateLimitError(f"Gemini quota exceeded: {e}") from e
    except google_exceptions.GoogleAPIError as e:
        raise TranslationError(f"Gemini error: {e}", status_code=getattr(e, "code", None)) from e
    try:
        return response.text
    except ValueError as e:
        # blocked prompt or no candidates
        raise TranslationError(f"Gemini returned no text: {e}") from e


def _ollama_chat(prompt: str, cfg: Settings, temperature: float = 0.0) -> str:
    payload = {
        "model": cfg.OLLAMA_MODEL,
        "messages": [{"role": "user", "content": prompt}],
        "stream": False,
        "options": {"temperature": temperature},
    }
    try:
        response = requests.post(cfg.OLLAMA_URL, json=payload, timeout=cfg.LLM_TIMEOUT)
    except requests.exceptions.RequestException as e:
        raise TranslationError(f"Ollama request failed: {e}") from e
    if response.status_code == 429:
        retry_after = response.headers.get("Retry-After")
        LOG.warning("Ollama rate limit hit (retry-after=%s)", retry_after)
        raise RateLimitError(f"Ollama busy: {response.text[:300]}", retry_after=retry_after)
    if response.status_code != 200:
        raise TranslationError(
            f"Ollama error {response.status_code}: {response.text[:300]}",
            status_code=response.status_code,
        )
    try:
        data = response.json()
    except ValueError as e:
        raise TranslationError("Ollama returned a non-JSON body") from e
    # newer Ollama: {"message":{"role":"assistant","content":"..."}}
    # older: {"response":"..."}
    return (data.get("message") or {}).get("content") or data.get("response") or ""


def generate_text(prompt: str, *, settings: Optional[Settings] = None) -> str:
    """Single-shot text in / text out call to the configured model."""
    cfg = settings or default_settings
    if cfg.LLM_PROVIDER == "ollama":
        return _ollama_chat(prompt, cfg)
    return _gemini_generate(prompt, cfg)
