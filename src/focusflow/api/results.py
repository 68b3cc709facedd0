"""Discriminated results for backend calls.

Backend operations that feed background work, such as session logging,
return ``Ok`` or ``Err`` instead of raising, so callers must look at the
outcome before touching the payload.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from focusflow.errors import FocusFlowError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful call carrying the decoded payload."""

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """Failed call carrying the typed error."""

    error: FocusFlowError

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]
