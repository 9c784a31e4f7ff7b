"""
Exceptions for the GitResume relevance engine.

The engine has a single failure mode: input that claims to be a number
(or a timestamp, or a policy) but is not a valid one. Everything else
(missing text, empty collections, zero counts) is scored, not rejected.
"""

from typing import Any, Optional


class RelevanceEngineError(Exception):
    """Base exception for relevance engine errors."""


class InvalidInputError(RelevanceEngineError):
    """A field was present but held a value the engine cannot use."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None
    ):
        super().__init__(message)
        self.field = field
        self.value = value

    def to_dict(self) -> dict:
        return {
            'error': 'invalid_input',
            'message': str(self),
            'field': self.field,
            'value': repr(self.value),
        }
