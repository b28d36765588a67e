"""Text-generation provider: Groq through the OpenAI-compatible API."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import openai
from openai import OpenAI

from jobscout.config import ProviderSettings, load_provider_settings, require_api_key
from jobscout.log import get_logger
from jobscout.retry import retry

log = get_logger(__name__)

_TRANSIENT = (openai.APIConnectionError, openai.RateLimitError, openai.InternalServerError)


@dataclass(frozen=True)
class ImageInput:
    mime_type: str
    data: str  # base64

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"


@dataclass(frozen=True)
class Completion:
    text: str
    finish_reason: str | None = None
    refusal: str | None = None


class ProviderBlocked(Exception):
    """The provider refused the request (content policy or similar)."""

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(reason or "blocked")
        self.reason = reason


class ProviderUnavailable(Exception):
    """Transport, auth or server failure talking to the provider."""


class TextProvider(Protocol):
    def complete(
        self,
        prompt: str,
        *,
        search: bool = False,
        image: ImageInput | None = None,
        json_mode: bool = False,
    ) -> Completion: ...


class GroqProvider:
    """Chat-completions client; ``search=True`` routes to the web-search model."""

    def __init__(self, settings: ProviderSettings | None = None, client: OpenAI | None = None) -> None:
        self.settings = require_api_key(settings or load_provider_settings())
        self._client = client or OpenAI(
            api_key=self.settings.api_key,
            base_url=self.settings.base_url,
            timeout=self.settings.timeout,
            max_retries=0,
        )

    def _model_for(self, search: bool, image: ImageInput | None) -> str:
        if image is not None:
            return self.settings.vision_model
        if search:
            return self.settings.search_model
        return self.settings.model

    @retry(attempts=3, base_delay=2.0, retry_on=_TRANSIENT)
    def _create(self, **kwargs):
        return self._client.chat.completions.create(**kwargs)

    def complete(
        self,
        prompt: str,
        *,
        search: bool = False,
        image: ImageInput | None = None,
        json_mode: bool = False,
    ) -> Completion:
        model = self._model_for(search, image)
        if image is not None:
            content: object = [
                {"type": "text", "text": prompt},
                {"type": "image_url", "image_url": {"url": image.data_url}},
            ]
        else:
            content = prompt

        kwargs: dict = {
            "model": model,
            "messages": [{"role": "user", "content": content}],
            "max_tokens": self.settings.max_tokens,
            "temperature": 0.4,
        }
        if json_mode and not search and image is None:
            kwargs["response_format"] = {"type": "json_object"}

        log.debug("Calling %s (search=%s, image=%s)", model, search, image is not None)
        try:
            r = self._create(**kwargs)
        except openai.PermissionDeniedError as exc:
            raise ProviderBlocked(_error_message(exc)) from exc
        except openai.APIError as exc:
            raise ProviderUnavailable(_error_message(exc)) from exc

        if not r.choices:
            return Completion(text="")
        choice = r.choices[0]
        message = choice.message
        refusal = getattr(message, "refusal", None)
        if choice.finish_reason == "content_filter" or refusal:
            raise ProviderBlocked(refusal or "content filter")
        return Completion(
            text=(message.content or "").strip(),
            finish_reason=choice.finish_reason,
            refusal=refusal,
        )


def _error_message(exc: openai.APIError) -> str:
    return getattr(exc, "message", None) or str(exc)
