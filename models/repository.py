"""
Repository data models for the GitResume relevance engine.

RepositoryRecord is the immutable input unit: one repository's metadata as
supplied by whatever fetched it from GitHub. ScoredRepository and
ScoreBreakdown are derived per request and never persisted.

Usage:
    from models import RepositoryRecord

    record = RepositoryRecord.from_dict(github_payload)
    print(record.identifier, record.star_count)
"""

import math
import numbers
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Tuple

from core.exceptions import InvalidInputError


NUMERIC_FIELDS = ('star_count', 'fork_count', 'size_kilobytes')

# GitHub REST key -> record field
GITHUB_FIELD_MAP = {
    'id': 'identifier',
    'stargazers_count': 'star_count',
    'forks_count': 'fork_count',
    'size': 'size_kilobytes',
    'language': 'primary_language',
    'updated_at': 'last_updated_at',
}


def parse_timestamp(value: Any, field_name: str = 'last_updated_at') -> Optional[datetime]:
    """
    Normalize a timestamp to an aware UTC-compatible datetime.

    Accepts datetimes (naive values are taken as UTC), ISO-8601 strings
    (a trailing 'Z' means UTC) and None/empty string (no timestamp).

    Raises:
        InvalidInputError: If the value cannot be read as a timestamp
    """
    if value is None or value == '':
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith('Z') or text.endswith('z'):
            text = text[:-1] + '+00:00'
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as e:
            raise InvalidInputError(
                f"{field_name} is not an ISO-8601 timestamp: {value!r}",
                field=field_name, value=value
            ) from e
    else:
        raise InvalidInputError(
            f"{field_name} must be a datetime or ISO-8601 string, got {type(value).__name__}",
            field=field_name, value=value
        )

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _validate_count(field_name: str, value: Any):
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidInputError(
            f"{field_name} must be a non-negative number, got {value!r}",
            field=field_name, value=value
        )
    if not math.isfinite(value) or value < 0:
        raise InvalidInputError(
            f"{field_name} must be a non-negative number, got {value!r}",
            field=field_name, value=value
        )
    return value


def _normalize_topics(topics: Any) -> Tuple[str, ...]:
    """Topics as a tuple of strings; None entries are dropped."""
    if not topics:
        return ()
    if isinstance(topics, str):
        return (topics,)
    normalized = []
    for topic in topics:
        if topic is None:
            continue
        if not isinstance(topic, str):
            raise InvalidInputError(
                f"topics must only contain strings, got {topic!r}",
                field='topics', value=topics
            )
        normalized.append(topic)
    return tuple(normalized)


@dataclass(frozen=True)
class RepositoryRecord:
    """
    Metadata for a single repository.

    Numeric fields are validated on construction; None counts as zero.
    Timestamps are stored as aware datetimes.
    """
    identifier: Any
    name: str
    description: Optional[str] = None
    primary_language: Optional[str] = None
    star_count: int = 0
    fork_count: int = 0
    size_kilobytes: int = 0
    last_updated_at: Optional[datetime] = None
    topics: Tuple[str, ...] = ()
    full_name: Optional[str] = None
    html_url: Optional[str] = None

    def __post_init__(self):
        # Ranking and search deduplicate on identifier
        if self.identifier is None:
            raise InvalidInputError(
                f"Repository {self.name!r} has no identifier",
                field='identifier', value=None
            )
        for name in NUMERIC_FIELDS:
            object.__setattr__(self, name, _validate_count(name, getattr(self, name)))
        object.__setattr__(self, 'last_updated_at', parse_timestamp(self.last_updated_at))
        object.__setattr__(self, 'topics', _normalize_topics(self.topics))

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> 'RepositoryRecord':
        """
        Build a record from a GitHub REST payload or a normalized dict.

        GitHub keys (stargazers_count, forks_count, size, language,
        updated_at) are mapped onto record fields; pushed_at stands in
        when updated_at is missing. Unrelated keys are ignored.
        """
        data: Dict[str, Any] = {}
        for key, value in payload.items():
            data[GITHUB_FIELD_MAP.get(key, key)] = value

        if data.get('last_updated_at') in (None, '') and payload.get('pushed_at'):
            data['last_updated_at'] = payload['pushed_at']

        identifier = data.get('identifier')
        if identifier is None:
            identifier = data.get('full_name') or data.get('name')

        return cls(
            identifier=identifier,
            name=data.get('name') or '',
            description=data.get('description'),
            primary_language=data.get('primary_language'),
            star_count=data.get('star_count'),
            fork_count=data.get('fork_count'),
            size_kilobytes=data.get('size_kilobytes'),
            last_updated_at=data.get('last_updated_at'),
            topics=data.get('topics') or (),
            full_name=data.get('full_name'),
            html_url=data.get('html_url'),
        )

    def to_dict(self) -> dict:
        return {
            'identifier': self.identifier,
            'name': self.name,
            'full_name': self.full_name,
            'description': self.description,
            'primary_language': self.primary_language,
            'star_count': self.star_count,
            'fork_count': self.fork_count,
            'size_kilobytes': self.size_kilobytes,
            'last_updated_at': self.last_updated_at.isoformat() if self.last_updated_at else None,
            'topics': list(self.topics),
            'html_url': self.html_url,
        }


@dataclass
class ScoreBreakdown:
    """Per-signal contributions behind a relevance score."""
    popularity: float
    reach: float
    scale: float
    ecosystem: float
    recency: float
    presentation: float
    factors: List[str] = field(default_factory=list)

    @property
    def total(self) -> float:
        return (
            self.popularity + self.reach + self.scale +
            self.ecosystem + self.recency + self.presentation
        )

    def to_dict(self) -> dict:
        return {
            'total': self.total,
            'popularity': self.popularity,
            'reach': self.reach,
            'scale': self.scale,
            'ecosystem': self.ecosystem,
            'recency': self.recency,
            'presentation': self.presentation,
            'factors': self.factors,
        }


@dataclass
class ScoredRepository:
    """A repository record paired with its computed relevance score."""
    record: RepositoryRecord
    relevance_score: float
    breakdown: Optional[ScoreBreakdown] = None

    @property
    def identifier(self) -> Any:
        return self.record.identifier

    def to_dict(self) -> dict:
        result = self.record.to_dict()
        result['relevance_score'] = self.relevance_score
        if self.breakdown is not None:
            result['breakdown'] = self.breakdown.to_dict()
        return result
