from abc import ABC, abstractmethod
from typing import Any

from .models import FetchResult


class RecommendationClient(ABC):
    """Abstract base class for recommendation providers.

    This module hides the design decision of which hosted model produces the
    recommendations. Implementations must handle provider-specific details:
    - Endpoint and authentication
    - Request/response format conversion
    - Mapping every failure onto a FetchResult instead of raising

    A fetch is a single attempt: no retries, no cancellation once sent.

    Supports async context manager protocol for proper resource cleanup:
        async with client:
            result = await client.fetch(prompt)
    """

    @abstractmethod
    async def fetch(self, prompt: str) -> FetchResult:
        """Send one prompt and return exactly one terminal result.

        Args:
            prompt: Fully composed natural-language prompt

        Returns:
            One of the FetchResult variants
        """
        pass

    @property
    @abstractmethod
    def model(self) -> str:
        """Name of the model requests are sent to."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        pass

    async def __aenter__(self) -> "RecommendationClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
