import re
import json
import logging
from json import JSONDecodeError
from typing import Any, Dict, Optional

import openai
from openai import OpenAI

from weekfit.utilities.config import AI_API_KEY, AI_BASE_URL, AI_MODEL
from weekfit.utilities.constants import AI_RATE_LIMIT_MESSAGE, AI_NO_CREDITS_MESSAGE

logger = logging.getLogger(__name__)


class AIServiceError(Exception):
    """Upstream AI failure carrying the HTTP status the proxy should answer with."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def error_for_status(status_code: Optional[int], text: str) -> AIServiceError:
    """Map an upstream status to the proxy error: only 429 and 402 are passed through."""
    if status_code == 429:
        return AIServiceError(429, AI_RATE_LIMIT_MESSAGE)
    if status_code == 402:
        return AIServiceError(402, AI_NO_CREDITS_MESSAGE)
    return AIServiceError(500, text or "AI gateway error")


# === Text Cleaning Helpers ===
def _strip_code_fences(text: str) -> str:
    """Remove common markdown code fences and leading/trailing whitespace."""
    text = re.sub(r"```(?:json)?\n(.*?)```", r"\1", text, flags=re.S)
    text = re.sub(r"^```|```$", "", text)
    return text.strip()


def _remove_trailing_commas(text: str) -> str:
    return re.sub(r",\s*(\}|\])", r"\1", text)


def _extract_json_by_balancing(text: str) -> Optional[str]:
    """Extract the first JSON object/array by balancing braces/brackets."""
    start = None
    stack = []
    in_string = False
    escape = False

    for i, ch in enumerate(text):
        if ch == '"' and not escape:
            in_string = not in_string
        if in_string and ch == "\\" and not escape:
            escape = True
            continue
        else:
            escape = False

        if not in_string:
            if ch in "{[":
                if start is None:
                    start = i
                stack.append(ch)
            elif ch in "}]":
                if not stack:
                    continue
                opening = stack.pop()
                if (opening == "{" and ch != "}") or (opening == "[" and ch != "]"):
                    return None
                if not stack and start is not None:
                    return text[start:i + 1]
    return None


def parse_json_reply(content: str) -> Dict[str, Any]:
    """Parse the model reply; tolerate code fences, trailing commas and surrounding prose."""
    content = (content or "").strip()
    if not content:
        raise AIServiceError(500, "AI returned an empty response")
    try:
        parsed = json.loads(content)
    except JSONDecodeError:
        cleaned = _remove_trailing_commas(_strip_code_fences(content))
        candidate = _extract_json_by_balancing(cleaned)
        if candidate is None:
            logger.error("AI output is not valid JSON and no JSON substring found")
            raise AIServiceError(500, "Failed to parse AI response")
        try:
            parsed = json.loads(_remove_trailing_commas(candidate))
        except JSONDecodeError as e:
            logger.error("Failed to decode extracted JSON from AI output: %s", e)
            raise AIServiceError(500, "Failed to parse AI response") from e
    if not isinstance(parsed, dict):
        raise AIServiceError(500, "AI response is not a JSON object")
    return parsed


class AIGateway:
    """Chat-completions client for the OpenAI-compatible AI gateway."""

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None,
                 model: Optional[str] = None, client: Optional[OpenAI] = None):
        self.api_key = AI_API_KEY if api_key is None else api_key
        self.base_url = base_url or AI_BASE_URL
        self.model = model or AI_MODEL
        self._client = client

    def _get_client(self) -> OpenAI:
        if self._client is None:
            if not self.api_key:
                logger.warning("AI_API_KEY not set; cannot call the AI gateway.")
                raise AIServiceError(500, "AI_API_KEY not configured")
            # one upstream call per request; 429/5xx go straight back to the caller
            self._client = OpenAI(api_key=self.api_key, base_url=self.base_url, max_retries=0)
        return self._client

    def complete_json(self, system_prompt: str, user_prompt: str) -> Dict[str, Any]:
        client = self._get_client()
        try:
            response = client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                response_format={"type": "json_object"},
            )
        except openai.APIStatusError as e:
            logger.error("AI gateway error %s: %s", e.status_code, e.message)
            raise error_for_status(e.status_code, str(e.message)) from e
        except openai.APIError as e:
            logger.exception("AI gateway request failed")
            raise AIServiceError(500, str(e)) from e

        content = response.choices[0].message.content if response.choices else ""
        return parse_json_reply(content or "")
