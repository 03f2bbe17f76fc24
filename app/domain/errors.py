"""Failure kinds absorbed by the recommendation resolver.

None of these reach HTTP callers: each one only decides which fallback
step runs next.
"""

from typing import Any, Dict, Optional


class RecommendationError(Exception):
    """Base class for resolver collaborator failures."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationMissingError(RecommendationError):
    """A provider credential is absent or still a placeholder."""

    def __init__(self, provider: str):
        super().__init__(
            f"{provider} is not configured",
            details={"provider": provider},
        )


class CollaboratorUnreachableError(RecommendationError):
    """A catalog, order, wishlist or AI call failed."""

    def __init__(self, collaborator: str, error: Exception):
        super().__init__(
            f"{collaborator} unreachable: {error}",
            details={
                "collaborator": collaborator,
                "error": str(error),
                "error_type": type(error).__name__,
            },
        )


class MalformedResponseError(RecommendationError):
    """The model answered with text that holds no usable product ids."""

    def __init__(self, raw: str):
        preview = raw if len(raw) <= 200 else raw[:200] + "…"
        super().__init__(
            "AI response contains no product ids",
            details={"raw": preview},
        )
