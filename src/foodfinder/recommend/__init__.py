from .base import RecommendationClient
from .factory import create_recommendation_client
from .gemini import GeminiRecommendationClient, parse_response
from .models import (
    ApiError,
    Blocked,
    DecodeError,
    Empty,
    FetchOutcome,
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

__all__ = [
    "RecommendationClient",
    "create_recommendation_client",
    "GeminiRecommendationClient",
    "parse_response",
    "ApiError",
    "Blocked",
    "DecodeError",
    "Empty",
    "FetchOutcome",
    "FetchResult",
    "GenerateContentRequest",
    "GenerateContentResponse",
    "GenerationConfig",
    "Recommendation",
    "SafetyBlocked",
    "TransportError",
    "TransportErrorKind",
    "Truncated",
]
