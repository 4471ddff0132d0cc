# Gemini Client
# Calls the Gemini generateContent REST endpoint:
# https://ai.google.dev/api/generate-content

import logging
import requests
from typing import Any, Dict, Optional

from chat_relay.core import config
from chat_relay.core.errors import ConfigurationError, ProviderFailure, ProviderTimeout
from chat_relay.models.chat_models import ProviderPayload

logger = logging.getLogger(__name__)


class GeminiClient:
    """
    Thin transport over the Gemini REST API. One instance per process.

    The API key travels as a per-request header, so an injected session is
    never modified.
    """

    def __init__(
        self,
        api_key: str,
        model: str = config.GEMINI_MODEL,
        base_url: str = config.GEMINI_API_BASE,
        timeout: float = config.GEMINI_TIMEOUT,
        generation_config: Optional[Dict[str, Any]] = None,
        session: Optional[requests.Session] = None,
    ):
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY is required")
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.generation_config = generation_config or {}
        self._headers = {"x-goog-api-key": api_key, "Content-Type": "application/json"}
        self._session = session or requests.Session()

    @staticmethod
    def _parse_setting(name: str, raw: Optional[str], cast):
        if raw is None or raw.strip() == "":
            return None
        try:
            return cast(raw)
        except ValueError:
            raise ConfigurationError(f"{name} must be a valid {cast.__name__}, got '{raw}'")

    @classmethod
    def from_config(cls) -> "GeminiClient":
        """Build the client from environment configuration."""
        if not config.GEMINI_API_KEY:
            raise ConfigurationError(
                "GEMINI_API_KEY is not set. Add GEMINI_API_KEY=your_api_key to the .env file."
            )

        temperature = cls._parse_setting("GEMINI_TEMPERATURE", config.GEMINI_TEMPERATURE, float)
        max_output_tokens = cls._parse_setting("GEMINI_MAX_OUTPUT_TOKENS", config.GEMINI_MAX_OUTPUT_TOKENS, int)

        generation_config: Dict[str, Any] = {}
        if temperature is not None:
            generation_config["temperature"] = temperature
        if max_output_tokens is not None:
            generation_config["maxOutputTokens"] = max_output_tokens

        return cls(
            api_key=config.GEMINI_API_KEY,
            model=config.GEMINI_MODEL,
            base_url=config.GEMINI_API_BASE,
            timeout=config.GEMINI_TIMEOUT,
            generation_config=generation_config,
        )

    @property
    def url(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def generate(self, payload: ProviderPayload) -> Any:
        """
        Send one generateContent request.

        Returns:
            The decoded JSON reply, untouched

        Raises:
            ProviderTimeout: no answer within self.timeout seconds
            ProviderFailure: network error, HTTP error status or non-JSON body
        """
        body = payload.to_dict()
        if self.generation_config and "generationConfig" not in body:
            body["generationConfig"] = dict(self.generation_config)

        try:
            resp = self._session.post(self.url, json=body, headers=self._headers, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise ProviderTimeout(f"Gemini did not respond within {self.timeout}s: {e}") from e
        except requests.exceptions.RequestException as e:
            raise ProviderFailure(f"Gemini request failed: {e}") from e

        if resp.status_code >= 400:
            raise ProviderFailure(
                f"Gemini returned HTTP {resp.status_code}: {self._error_message(resp)}"
            )

        try:
            return resp.json()
        except ValueError as e:
            raise ProviderFailure(f"Gemini returned a non-JSON body: {resp.text[:200]!r}") from e

    @staticmethod
    def _error_message(resp: requests.Response) -> str:
        try:
            data = resp.json()
        except ValueError:
            return resp.text[:200]
        if isinstance(data, dict) and isinstance(data.get("error"), dict):
            return str(data["error"].get("message", data["error"]))
        return str(data)[:200]

    def close(self):
        self._session.close()
