"""Wire schemas and outcome types for recommendation requests.

The wire models mirror the provider's JSON field names through aliases so
the rest of the code can use snake_case. Outcome models are what callers
see: exactly one per fetch, never an exception.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Request schema
# ---------------------------------------------------------------------------


class GenerationConfig(BaseModel):
    """Fixed sampling parameters sent with every request."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    top_k: int = Field(default=40, alias="topK", gt=0)
    top_p: float = Field(default=0.95, alias="topP", gt=0.0, le=1.0)
    max_output_tokens: int = Field(default=1536, alias="maxOutputTokens", gt=0)


class Part(BaseModel):
    text: str | None = None


class Content(BaseModel):
    parts: list[Part] | None = None
    role: str | None = None


class GenerateContentRequest(BaseModel):
    """Body of a ``generateContent`` call."""

    model_config = ConfigDict(populate_by_name=True)

    contents: list[Content]
    generation_config: GenerationConfig = Field(
        default_factory=GenerationConfig,
        alias="generationConfig"
    )

    @classmethod
    def from_prompt(
        cls,
        prompt: str,
        generation_config: GenerationConfig | None = None
    ) -> "GenerateContentRequest":
        return cls(
            contents=[Content(parts=[Part(text=prompt)])],
            generation_config=generation_config or GenerationConfig(),
        )

    def to_payload(self) -> dict:
        """Serialize with the provider's field names, omitting unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Response schema
# ---------------------------------------------------------------------------


class SafetyRating(BaseModel):
    category: str | None = None
    probability: str | None = None


class Candidate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content: Content | None = None
    finish_reason: str | None = Field(default=None, alias="finishReason")
    index: int | None = None
    safety_ratings: list[SafetyRating] | None = Field(default=None, alias="safetyRatings")


class PromptFeedback(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    block_reason: str | None = Field(default=None, alias="blockReason")
    safety_ratings: list[SafetyRating] | None = Field(default=None, alias="safetyRatings")


class GenerateContentResponse(BaseModel):
    """Success envelope. Every field is optional on the wire."""

    model_config = ConfigDict(populate_by_name=True)

    candidates: list[Candidate] | None = None
    prompt_feedback: PromptFeedback | None = Field(default=None, alias="promptFeedback")

    def first_text(self) -> str | None:
        """Text of the first part of the first candidate, if any."""
        if not self.candidates:
            return None
        content = self.candidates[0].content
        if content is None or not content.parts:
            return None
        return content.parts[0].text

    def finish_reason(self) -> str | None:
        if not self.candidates:
            return None
        return self.candidates[0].finish_reason

    def block_reason(self) -> str | None:
        if self.prompt_feedback is None:
            return None
        return self.prompt_feedback.block_reason


class ErrorDetail(BaseModel):
    code: int | None = None
    message: str | None = None
    status: str | None = None


class ErrorEnvelope(BaseModel):
    """Structured provider error: ``{"error": {code, message, status}}``."""

    error: ErrorDetail


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------


class FetchOutcome(BaseModel, ABC):
    """Base class for the terminal result of one fetch."""

    model_config = ConfigDict(frozen=True)

    @property
    def ok(self) -> bool:
        """True only for a populated recommendation."""
        return False

    @property
    @abstractmethod
    def chat_text(self) -> str:
        """User-facing text to show in the chat."""


class Recommendation(FetchOutcome):
    kind: Literal["recommendation"] = "recommendation"
    text: str

    @property
    def ok(self) -> bool:
        return True

    @property
    def chat_text(self) -> str:
        return self.text


class Blocked(FetchOutcome):
    """The prompt was rejected; ``reason`` is the provider's block reason."""

    kind: Literal["blocked"] = "blocked"
    reason: str

    @property
    def chat_text(self) -> str:
        return (
            "Could not get recommendations. The request might have been blocked "
            f"(Reason: {self.reason}). Please try different phrasing."
        )


class Truncated(FetchOutcome):
    kind: Literal["truncated"] = "truncated"

    @property
    def chat_text(self) -> str:
        return (
            "The response was too long and got cut off. "
            "I can try again with a shorter request if you'd like."
        )


class SafetyBlocked(FetchOutcome):
    kind: Literal["safety_blocked"] = "safety_blocked"

    @property
    def chat_text(self) -> str:
        return "Could not get recommendations due to safety filters. Please try different phrasing."


class Empty(FetchOutcome):
    kind: Literal["empty"] = "empty"
    finish_reason: str = "N/A"

    @property
    def chat_text(self) -> str:
        return (
            "Sorry, I couldn't find recommendations matching your criteria, "
            f"or the response was empty (Finish Reason: {self.finish_reason})."
        )


class TransportErrorKind(str, Enum):
    OFFLINE = "offline"
    TIMEOUT = "timeout"
    NETWORK = "network"


class TransportError(FetchOutcome):
    """The request never produced an HTTP response."""

    kind: Literal["transport_error"] = "transport_error"
    error_kind: TransportErrorKind
    detail: str = ""

    @property
    def chat_text(self) -> str:
        if self.error_kind is TransportErrorKind.OFFLINE:
            return "Network connection appears to be offline. Please check your connection."
        if self.error_kind is TransportErrorKind.TIMEOUT:
            return "The request timed out. Please try again."
        return f"Network Error: {self.detail or 'unknown error'}"


class ApiError(FetchOutcome):
    """Provider-reported failure."""

    kind: Literal["api_error"] = "api_error"
    code: int | None = None
    message: str | None = None
    status: str | None = None

    @property
    def chat_text(self) -> str:
        detail = self.message or "Unknown API issue."
        return f"API Error ({self.code or 0}): {detail}"


class DecodeError(FetchOutcome):
    """A success response whose body could not be understood."""

    kind: Literal["decode_error"] = "decode_error"
    detail: str = ""

    @property
    def chat_text(self) -> str:
        return "Error processing response. Please try again."


FetchResult = (
    Recommendation
    | Blocked
    | Truncated
    | SafetyBlocked
    | Empty
    | TransportError
    | ApiError
    | DecodeError
)
