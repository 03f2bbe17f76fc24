# app/domain/services/ai_ranker_svc.py

from __future__ import annotations
from typing import List, Optional, Sequence
import logging
import re
from time import monotonic as _now

import openai
from openai import AsyncOpenAI

from app.core.config import Settings, is_ai_configured
from app.domain.errors import ConfigurationMissingError, MalformedResponseError
from app.domain.models.product import Product
from app.domain.services.constants import AI_MAX_TOKENS, AI_CHECK_PROMPT
from app.domain.services.prompts import SYSTEM_PROMPT, recommendation_prompt

logger = logging.getLogger(__name__)

# =============================================================================
#                               RESPONSE PARSING
# =============================================================================

# Regex to strip code fences (``` or ```text) from LLM output
_CODE_FENCE_RE = re.compile(r"^```(?:\w+)?\s*|\s*```$", re.MULTILINE)
# Separators the model uses in practice, despite being asked for commas
_SEPARATOR_RE = re.compile(r"[,\n;]+")
_TOKEN_STRIP = " \t\r\"'`[]()"
# "- p1", "* p1", "1. p1": list markers only when followed by whitespace
_LIST_MARKER_RE = re.compile(r"^\s*(?:[-*]|\d+[.)])\s+")

def _strip_fences(s: str) -> str:
    """Remove ``` fences the LLM might add."""
    return _CODE_FENCE_RE.sub("", s).strip()

def parse_product_ids(text: str) -> List[str]:
    """
    Parse an untrusted, comma-separated id list.
    Tokens are trimmed of whitespace, quotes and brackets; empties and
    duplicates are dropped; the model's order is kept.
    """
    raw = _strip_fences(text or "")
    seen = set()
    ids: List[str] = []
    for token in _SEPARATOR_RE.split(raw):
        pid = _LIST_MARKER_RE.sub("", token).strip(_TOKEN_STRIP)
        if pid and pid not in seen:
            seen.add(pid)
            ids.append(pid)
    return ids

def describe_ai_error(error: Exception) -> str:
    """Human-readable reason for a failed Gemini call (key check endpoint)."""
    text = str(error)
    if isinstance(error, openai.AuthenticationError) or "API_KEY_INVALID" in text:
        return "Invalid API key. Please check your Gemini API key."
    if isinstance(error, openai.PermissionDeniedError) or "insufficient permissions" in text:
        return "API key has insufficient permissions. Please check your API key settings."
    if isinstance(error, openai.RateLimitError) or "quota" in text.lower():
        return "API quota exceeded. Please check your usage limits."
    return "Failed to validate API key"

# =============================================================================
#                               RANKER
# =============================================================================

class GeminiRanker:
    """
    Asks Gemini (OpenAI-compatible endpoint) to pick product ids for a user.
    Stateless apart from the HTTP client; safe to share across requests.
    """

    def __init__(self, *, api_key: str, model: str, base_url: str, timeout_s: float):
        self.model = model
        self.timeout_s = timeout_s
        self.client = AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=timeout_s, max_retries=0)

    @classmethod
    def from_settings(cls, settings: Settings, api_key: Optional[str] = None) -> "GeminiRanker":
        key = api_key if api_key is not None else settings.GEMINI_API_KEY
        if api_key is None and not is_ai_configured(settings):
            raise ConfigurationMissingError("Gemini API")
        return cls(
            api_key=key,
            model=settings.GEMINI_MODEL,
            base_url=settings.GEMINI_BASE_URL,
            timeout_s=settings.gemini_timeout_s,
        )

    async def _call_llm(self, messages: List[dict], max_tokens: int = AI_MAX_TOKENS) -> str:
        """
        Call the model and return the raw text of the first choice.
        """
        t0 = _now()
        resp = await self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            max_tokens=max_tokens,
            temperature=0.0,
        )
        dt = _now() - t0
        # Best-effort usage logging
        u = getattr(resp, "usage", None)
        logger.info(
            f"LLM call model={getattr(resp, 'model', self.model)} duration={dt:.3f}s "
            f"tokens(prompt={getattr(u, 'prompt_tokens', None)}, completion={getattr(u, 'completion_tokens', None)})"
        )
        if not resp.choices:
            return ""
        return resp.choices[0].message.content or ""

    async def rank(self, interacted: Sequence[Product], catalog: Sequence[Product], limit: int) -> List[str]:
        """
        Return the product ids the model picked, in its order.
        Ids are not checked against the catalog here.
        Raises MalformedResponseError when the answer holds no ids.
        """
        prompt = recommendation_prompt(interacted, catalog, limit)
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ]
        logger.info(f"LLM request size={(len(prompt)/1024):.1f}KB interacted={len(interacted)} catalog={len(catalog)}")
        text = (await self._call_llm(messages)).strip()
        logger.debug(f"LLM raw response: {text[:500]}")
        ids = parse_product_ids(text)
        if not ids:
            raise MalformedResponseError(text)
        return ids

    async def check(self) -> str:
        """Send a trivial prompt; returns the model's reply or raises."""
        text = await self._call_llm([{"role": "user", "content": AI_CHECK_PROMPT}], max_tokens=32)
        if not text.strip():
            raise MalformedResponseError(text)
        return text


def ranker_from_settings(settings: Settings) -> Optional[GeminiRanker]:
    """Ranker for the configured key, or None when AI is not configured."""
    try:
        return GeminiRanker.from_settings(settings)
    except ConfigurationMissingError as e:
        logger.debug(f"AI ranker disabled: {e.message}")
        return None
