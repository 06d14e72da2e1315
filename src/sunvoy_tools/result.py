"""Success/failure values returned at fetch boundaries."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .session import SunvoyError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Success:
    value: Any


@dataclass(frozen=True)
class Failure:
    error: Exception
    operation: str


FetchResult = Success | Failure


def attempt(operation: str, fetch: Callable, *args) -> FetchResult:
    """Run fetch(*args), capturing Sunvoy failures as a Failure."""
    try:
        return Success(fetch(*args))
    except SunvoyError as e:
        logger.error(f"Skipping {operation} due to error: {e}")
        return Failure(e, operation)


def value_or(result: FetchResult, default):
    """Unwrap a Success, or substitute default for a Failure."""
    if isinstance(result, Success):
        return result.value
    return default
