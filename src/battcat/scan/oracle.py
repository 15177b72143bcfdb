"""Text oracle used for announcement classification.

Business logic depends only on :class:`TextOracle`; the Anthropic-backed
implementation is created by the scan job and can be swapped for a fake in
tests.
"""

from __future__ import annotations

import json
import os
import re
from typing import Any, List, Optional

from ..config.settings import API_KEY_ENV, ORACLE_MAX_TOKENS, ORACLE_MODEL
from ..utils.logging import get_logger

logger = get_logger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\n?([\s\S]*?)```")
_ARRAY_RE = re.compile(r"\[[\s\S]*\]")


class OracleError(RuntimeError):
    """The oracle could not be reached or returned no usable reply."""


class MissingCredentialError(RuntimeError):
    """Required API credential is not configured."""


class TextOracle:
    """Prompt text in, reply text out."""

    def complete(self, prompt: str) -> str:
        raise NotImplementedError


class AnthropicOracle(TextOracle):
    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = ORACLE_MODEL,
        max_tokens: int = ORACLE_MAX_TOKENS,
        client: Any = None,
    ) -> None:
        if client is None:
            import anthropic

            client = anthropic.Anthropic(api_key=api_key or require_api_key())
        self._client = client
        self.model = model
        self.max_tokens = max_tokens

    def complete(self, prompt: str) -> str:
        import anthropic

        try:
            response = self._client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as exc:
            raise OracleError(f"Oracle request failed: {exc}") from exc

        parts = [getattr(block, "text", "") for block in (response.content or [])]
        text = "".join(p for p in parts if p)
        logger.debug("Oracle reply (%d chars, model=%s)", len(text), self.model)
        return text


def require_api_key() -> str:
    key = os.getenv(API_KEY_ENV, "").strip()
    if not key:
        raise MissingCredentialError(
            f"{API_KEY_ENV} is not set. Set it with: export {API_KEY_ENV}=sk-ant-..."
        )
    return key


def strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub(r"\1", text or "").strip()


def extract_json_array(text: str) -> List[Any]:
    """Return the first JSON array in an oracle reply, or [] if there is none.

    Never raises: a malformed reply means "nothing found".
    """
    s = strip_code_fences(text)
    if not s:
        return []

    match = _ARRAY_RE.search(s)
    if match:
        try:
            obj = json.loads(match.group(0))
            if isinstance(obj, list):
                return obj
        except ValueError:
            pass

    # Prose after the array can contain brackets; decode from each '[' instead.
    decoder = json.JSONDecoder()
    for m in re.finditer(r"\[", s):
        try:
            obj, _ = decoder.raw_decode(s, m.start())
        except ValueError:
            continue
        if isinstance(obj, list):
            return obj

    logger.warning("Oracle reply did not contain a JSON array; treating as empty.")
    return []
