"""LLM service for OpenAI integration."""

import base64
import hashlib
import json
import logging
import re
from typing import Any, Dict, Optional, Tuple

import openai
from diskcache import Cache
from tenacity import Retrying, stop_after_attempt, wait_exponential

from ..core.config import settings
from ..core.constants import CacheConstants, ErrorConstants, PromptConstants

logger = logging.getLogger(__name__)

JSON_ONLY_SUFFIX = "OUTPUT: Valid JSON only. Do not provide markdown commentary."


def _strip_code_fences(s: str) -> str:
    s = s.strip()
    return re.sub(r"^```(?:json)?|```$", "", s, flags=re.IGNORECASE | re.MULTILINE).strip()


def parse_json_reply(s: Optional[str]) -> Any:
    """Parse JSON from a model reply, tolerating code fences and surrounding prose."""
    if not s or not s.strip():
        raise ValueError("Empty reply from model")
    try:
        return json.loads(s)
    except json.JSONDecodeError:
        pass

    cleaned = _strip_code_fences(s)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        pass

    # Object first: structured replies are wrapped in a top-level object
    for pattern in (r"\{.*\}", r"\[.*\]"):
        match = re.search(pattern, cleaned, re.DOTALL)
        if match:
            try:
                return json.loads(match.group(0))
            except json.JSONDecodeError:
                continue
    raise ValueError(f"Could not parse JSON from: {s[:200]}...")


def to_data_url(b64_data: Optional[str], mime_type: str = "image/png") -> Optional[str]:
    if not b64_data:
        return None
    return f"data:{mime_type};base64,{b64_data}"


class LLMServiceFactory:
    """Factory for creating LLM services."""

    @staticmethod
    def create():
        """Create appropriate LLM service."""
        if settings.effective_openai_key:
            return OpenAIService()
        else:
            return FallbackLLMService()


class OpenAIService:
    """OpenAI-based LLM service.

    Every method raises on failure; callers at the service boundary decide how
    a failure degrades. Requests are attempted ``settings.max_attempts`` times
    (one by default, so nothing is retried unless configured).
    """

    def __init__(self, client=None):
        self.client = client or openai.OpenAI(api_key=settings.effective_openai_key)
        self.model = settings.openai_model
        self.search_model = settings.search_model
        self.image_model = settings.image_model
        self.timeout = settings.request_timeout
        self.cache = Cache(settings.cache_dir) if settings.cache_enabled else None
        logger.info(f"OpenAI service initialized (model={self.model}, cache={'on' if self.cache else 'off'})")

    def _retrying(self) -> Retrying:
        return Retrying(
            stop=stop_after_attempt(max(1, settings.max_attempts)),
            wait=wait_exponential(multiplier=settings.retry_delay, exp_base=settings.retry_backoff,
                                  max=ErrorConstants.MAX_RETRY_WAIT),
            reraise=True,
        )

    def _call(self, fn, **kwargs):
        for attempt in self._retrying():
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    logger.warning(f"Retrying model request (attempt {attempt.retry_state.attempt_number})")
                return fn(**kwargs)

    def _cache_key(self, *parts: Any) -> str:
        raw = "|".join(str(p) for p in parts) + f"|{PromptConstants.PROMPT_VERSION}"
        return hashlib.md5(raw.encode()).hexdigest()

    def _cached(self, key: str) -> Optional[str]:
        if self.cache is None:
            return None
        cached = self.cache.get(key)
        if cached:
            logger.debug(f"Cache hit for LLM request: {key[:CacheConstants.CACHE_KEY_LENGTH]}...")
        return cached

    def _store(self, key: str, value: str) -> None:
        if self.cache is not None and value:
            self.cache.set(key, value, expire=3600 * settings.cache_ttl_hours)

    def chat(self, system: Optional[str], user: str, temperature: float = 0.3, max_tokens: Optional[int] = None,
             grounded: bool = False, response_format: Optional[Dict[str, Any]] = None) -> str:
        """Single-turn completion returning the reply text."""
        grounded = grounded and settings.enable_web_search
        model = self.search_model if grounded else self.model
        key = self._cache_key(model, system, user, temperature, max_tokens, json.dumps(response_format, sort_keys=True))
        cached = self._cached(key)
        if cached:
            return cached

        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": user})

        kwargs: Dict[str, Any] = {"model": model, "messages": messages, "timeout": self.timeout}
        if max_tokens:
            kwargs["max_tokens"] = max_tokens
        if grounded:
            # Search models reject sampling parameters
            kwargs["web_search_options"] = {}
        else:
            kwargs["temperature"] = temperature
        if response_format:
            kwargs["response_format"] = response_format

        response = self._call(self.client.chat.completions.create, **kwargs)
        result = (response.choices[0].message.content or "").strip()
        self._store(key, result)
        return result

    def generate_json(self, prompt: str, schema: Dict[str, Any], name: str, grounded: bool = False,
                      system: Optional[str] = None, temperature: float = PromptConstants.INSIGHT_TEMPERATURE) -> Any:
        """Request a reply conforming to ``schema`` and return the parsed JSON.

        Plain requests use structured output. Grounded requests go to the
        search model, which takes the schema inline in the prompt instead.
        """
        if grounded and settings.enable_web_search:
            user = f"{prompt}\n\nRespond with JSON matching this schema:\n{json.dumps(schema)}\n\n{JSON_ONLY_SUFFIX}"
            reply = self.chat(system, user, temperature=temperature, grounded=True)
        else:
            response_format = {
                "type": "json_schema",
                "json_schema": {"name": name, "schema": schema, "strict": False},
            }
            reply = self.chat(system, f"{prompt}\n\n{JSON_ONLY_SUFFIX}", temperature=temperature,
                              response_format=response_format)
        return parse_json_reply(reply)

    def generate_image(self, prompt: str) -> Optional[str]:
        """Generate an image; returns base64-encoded PNG data."""
        result = self._call(self.client.images.generate, model=self.image_model, prompt=prompt, n=1,
                            timeout=self.timeout)
        return result.data[0].b64_json if result.data else None

    def edit_image(self, image_b64: str, prompt: str, mime_type: str = "image/jpeg") -> Optional[str]:
        """Edit an inline image with a text instruction; returns base64 PNG data."""
        extension = mime_type.split("/")[-1]
        image = (f"capture.{extension}", base64.b64decode(image_b64), mime_type)
        result = self._call(self.client.images.edit, model=self.image_model, image=image, prompt=prompt,
                            timeout=self.timeout)
        return result.data[0].b64_json if result.data else None

    def describe_image(self, image_b64: str, prompt: str, mime_type: str = "image/jpeg") -> str:
        """Ask a question about an inline image and return the text reply."""
        content = [
            {"type": "text", "text": prompt},
            {"type": "image_url", "image_url": {"url": to_data_url(image_b64, mime_type)}},
        ]
        response = self._call(self.client.chat.completions.create, model=self.model,
                              messages=[{"role": "user", "content": content}], timeout=self.timeout)
        return (response.choices[0].message.content or "").strip()

    def respond(self, message: str, instructions: str,
                previous_response_id: Optional[str] = None) -> Tuple[str, Optional[str]]:
        """One turn of a server-side conversation.

        Returns the reply text and the response id to chain the next turn on.
        """
        kwargs: Dict[str, Any] = {"model": self.model, "instructions": instructions, "input": message,
                                  "timeout": self.timeout}
        if previous_response_id:
            kwargs["previous_response_id"] = previous_response_id
        response = self._call(self.client.responses.create, **kwargs)
        return (response.output_text or "").strip(), response.id


class FallbackLLMService:
    """Fallback LLM service used when no API key is configured."""

    def __init__(self):
        logger.info("Using fallback LLM service")

    def chat(self, system: Optional[str], user: str, temperature: float = 0.3, max_tokens: Optional[int] = None,
             grounded: bool = False, response_format: Optional[Dict[str, Any]] = None) -> str:
        """Fallback chat method - returns empty string."""
        logger.warning("Fallback LLM service chat called - no actual LLM available")
        return ""

    def generate_json(self, prompt: str, schema: Dict[str, Any], name: str, grounded: bool = False,
                      system: Optional[str] = None, temperature: float = PromptConstants.INSIGHT_TEMPERATURE) -> Any:
        logger.warning(f"Fallback LLM service structured request '{name}' called - returning no payload")
        return None

    def generate_image(self, prompt: str) -> Optional[str]:
        logger.warning("Fallback LLM service image generation called - no image produced")
        return None

    def edit_image(self, image_b64: str, prompt: str, mime_type: str = "image/jpeg") -> Optional[str]:
        logger.warning("Fallback LLM service image edit called - no image produced")
        return None

    def describe_image(self, image_b64: str, prompt: str, mime_type: str = "image/jpeg") -> str:
        logger.warning("Fallback LLM service image analysis called - no analysis available")
        return ""

    def respond(self, message: str, instructions: str,
                previous_response_id: Optional[str] = None) -> Tuple[str, Optional[str]]:
        logger.warning("Fallback LLM service conversation called - no actual LLM available")
        return "", previous_response_id
