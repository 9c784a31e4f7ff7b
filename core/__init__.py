"""
Core configuration, error types and logging for the GitResume relevance engine.
"""

from .config import DEFAULT_POLICY, RelevancePolicy, load_policy
from .exceptions import InvalidInputError, RelevanceEngineError

__all__ = [
    'DEFAULT_POLICY',
    'RelevancePolicy',
    'load_policy',
    'InvalidInputError',
    'RelevanceEngineError',
]
