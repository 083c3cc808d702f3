"""
Result markers shared by the builders.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Unsupported:
    """
    Returned by builders whose construction is reserved but not available.

    Falsy, so ``if not result`` catches it, and never a valid shape.
    """
    feature: str
    reason: str = "not implemented"

    def __bool__(self) -> bool:
        return False


def is_supported(result: Any) -> bool:
    """Whether a builder result is a real shape rather than ``Unsupported``."""
    return not isinstance(result, Unsupported)
