from typing import Any

from .base import RecommendationClient
from .gemini import GeminiRecommendationClient


def create_recommendation_client(provider: str = "gemini", **config: Any) -> RecommendationClient:
    """Create a recommendation client instance.

    This factory function hides the instantiation logic for different providers.

    Args:
        provider: Provider type (currently only 'gemini')
        **config: Provider-specific configuration
            For Gemini:
                - api_key: str (required)
                - model: str (default: 'gemini-1.5-pro-latest')
                - base_url: str (default: 'https://generativelanguage.googleapis.com')
                - api_version: str (default: 'v1beta')
                - generation_config: GenerationConfig | None
                - timeout: float (default: 60.0)

    Returns:
        Initialized recommendation client

    Raises:
        ValueError: If provider type is not supported
        TypeError: If required configuration is missing

    Examples:
        >>> client = create_recommendation_client(
        ...     "gemini",
        ...     api_key="...",
        ...     model="gemini-1.5-pro-latest"
        ... )
    """
    provider_lower = provider.lower()

    if provider_lower == "gemini":
        if "api_key" not in config:
            raise TypeError("Gemini provider requires 'api_key' in config")
        return GeminiRecommendationClient(**config)

    raise ValueError(
        f"Unsupported provider: {provider}. "
        f"Supported providers: 'gemini'"
    )
