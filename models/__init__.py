"""
Data models for the GitResume relevance engine.
"""

from .repository import (
    RepositoryRecord,
    ScoreBreakdown,
    ScoredRepository,
    parse_timestamp,
)

__all__ = [
    'RepositoryRecord',
    'ScoreBreakdown',
    'ScoredRepository',
    'parse_timestamp',
]
