"""Google Gemini recommendation client.

Talks to the ``generateContent`` REST endpoint directly with httpx so the
raw success and error envelopes can be told apart.
Reference: https://ai.google.dev/api/generate-content

Note: Gemini can return a 200 response with no text when the prompt is
blocked or generation stops early. Those cases are reported as distinct
outcomes rather than as an empty recommendation.
"""

import json
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from .base import RecommendationClient
from .models import (
    ApiError,
    Blocked,
    DecodeError,
    Empty,
    ErrorEnvelope,
    FetchResult,
    GenerateContentRequest,
    GenerateContentResponse,
    GenerationConfig,
    Recommendation,
    SafetyBlocked,
    TransportError,
    TransportErrorKind,
    Truncated,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com"
DEFAULT_API_VERSION = "v1beta"
DEFAULT_MODEL = "gemini-1.5-pro-latest"
DEFAULT_TIMEOUT = 60.0


class GeminiRecommendationClient(RecommendationClient):
    """Gemini REST client.

    Hidden design decisions:
    - Endpoint layout and key-in-query authentication
    - Request body shape and fixed generation parameters
    - Classification of transport failures, error envelopes and
      undecodable bodies
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        api_version: str = DEFAULT_API_VERSION,
        generation_config: GenerationConfig | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        **client_kwargs: Any
    ):
        """Initialize Gemini client.

        Args:
            api_key: Google AI API key
            model: Model id (default gemini-1.5-pro-latest)
            base_url: Provider host
            api_version: Path version segment (v1beta, v1)
            generation_config: Sampling parameters (defaults 0.7/40/0.95/1536)
            timeout: HTTP timeout in seconds
            **client_kwargs: Additional kwargs for httpx.AsyncClient
                (e.g. ``transport`` in tests)
        """
        if not api_key:
            raise ValueError("Gemini client requires a non-empty api_key")

        self._api_key = api_key
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._api_version = api_version.strip("/")
        self._generation_config = generation_config or GenerationConfig()
        self._client = httpx.AsyncClient(timeout=timeout, **client_kwargs)

    @property
    def model(self) -> str:
        """Get the model name."""
        return self._model

    @property
    def generation_config(self) -> GenerationConfig:
        return self._generation_config

    @property
    def endpoint(self) -> str:
        """Request URL without the credential."""
        return f"{self._base_url}/{self._api_version}/models/{self._model}:generateContent"

    def build_request(self, prompt: str) -> GenerateContentRequest:
        """Build the request body for a prompt."""
        return GenerateContentRequest.from_prompt(prompt, self._generation_config)

    async def fetch(self, prompt: str) -> FetchResult:
        """Send one prompt to Gemini.

        Never raises for network or provider failures; every terminal state
        is returned as a FetchResult.
        """
        payload = self.build_request(prompt).to_payload()
        logger.info("Sending request to Gemini (model: %s)", self._model)
        logger.debug("POST %s", self.endpoint)

        try:
            response = await self._client.post(
                self.endpoint,
                params={"key": self._api_key},
                json=payload,
            )
        except httpx.TimeoutException as e:
            logger.warning("Gemini request timed out: %s", e)
            return TransportError(error_kind=TransportErrorKind.TIMEOUT, detail=str(e))
        except httpx.ConnectError as e:
            logger.warning("Could not reach Gemini: %s", e)
            return TransportError(error_kind=TransportErrorKind.OFFLINE, detail=str(e))
        except httpx.DecodingError as e:
            logger.warning("Could not decode Gemini response body: %s", e)
            return DecodeError(detail=str(e))
        except httpx.RequestError as e:
            logger.warning("Network error talking to Gemini: %s", e)
            return TransportError(
                error_kind=TransportErrorKind.NETWORK,
                detail=str(e) or type(e).__name__,
            )

        result = parse_response(response.status_code, response.content, response.reason_phrase)
        logger.info("Gemini responded %s -> %s", response.status_code, result.kind)
        return result

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()


def parse_response(status_code: int, body: bytes, reason: str = "") -> FetchResult:
    """Map a raw HTTP response onto a FetchResult.

    Args:
        status_code: HTTP status
        body: Raw response body
        reason: HTTP reason phrase, used when a failure has no error envelope

    Returns:
        ApiError for error envelopes (any status) and for non-2xx responses
        without one; DecodeError for 2xx bodies that are not a valid response;
        otherwise the interpreted success envelope
    """
    try:
        payload = json.loads(body) if body else None
    except ValueError as e:
        payload = None
        decode_detail = f"Invalid JSON: {e}"
    else:
        decode_detail = "Empty response body" if payload is None else ""

    if isinstance(payload, dict) and "error" in payload:
        try:
            envelope = ErrorEnvelope.model_validate(payload)
        except ValidationError:
            envelope = None
        if envelope is not None:
            logger.debug("Provider error envelope: %s", envelope.error)
            return ApiError(
                code=envelope.error.code,
                message=envelope.error.message,
                status=envelope.error.status,
            )

    if not 200 <= status_code < 300:
        return ApiError(code=status_code, message=reason or None)

    if payload is None:
        logger.debug("Failed to decode response: %s", decode_detail)
        return DecodeError(detail=decode_detail)

    try:
        parsed = GenerateContentResponse.model_validate(payload)
    except ValidationError as e:
        logger.debug("Response did not match schema: %s", e)
        return DecodeError(detail=str(e))

    return interpret_response(parsed)


def interpret_response(response: GenerateContentResponse) -> FetchResult:
    """Turn a decoded success envelope into an outcome."""
    text = response.first_text()
    if text:
        return Recommendation(text=text)

    block_reason = response.block_reason()
    if block_reason is not None:
        logger.info("Prompt feedback received: blockReason=%s", block_reason)
        return Blocked(reason=block_reason)

    finish_reason = response.finish_reason() or "N/A"
    logger.info("No usable content; finish reason %s", finish_reason)
    if finish_reason == "MAX_TOKENS":
        return Truncated()
    if finish_reason == "SAFETY":
        return SafetyBlocked()
    return Empty(finish_reason=finish_reason)
