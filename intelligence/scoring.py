"""
GitResume Repository Scoring

Scores a single repository on six independently capped signals so that
no one signal dominates the result:

- Popularity (0-30): stars, 2 points each
- Reach (0-20): forks, 3 points each
- Scale (0-15): one point per 1000 KB on disk
- Ecosystem (0/10): primary language is in the popular-language set
- Recency (0-15): tiered by days since the last update
- Presentation (0/10): description longer than 20 characters

Overall Score: unweighted sum of the signals (0-100)

Usage:
    from intelligence.scoring import RepositoryScorer

    scorer = RepositoryScorer()
    score = scorer.score(record, now)
    breakdown = scorer.breakdown(record, now)

    print(f"Overall: {breakdown.total}")
    print(f"Recency: {breakdown.recency}")
"""

import logging
from datetime import datetime
from typing import Optional, Tuple

from core.config import DEFAULT_POLICY, RelevancePolicy
from models.repository import RepositoryRecord, ScoreBreakdown, parse_timestamp

logger = logging.getLogger(__name__)


class RepositoryScorer:
    """
    Score repositories for portfolio relevance.

    Pure heuristics over record metadata; the current time is always
    passed in so that scores are reproducible.
    """

    # (points per unit, cap)
    STAR_POINTS = (2, 30)
    FORK_POINTS = (3, 20)
    SIZE_KB_PER_POINT = 1000
    SIZE_CAP = 15

    ECOSYSTEM_BONUS = 10

    # (max days since update, points), checked in order
    RECENCY_TIERS = (
        (30, 15),
        (90, 10),
        (180, 5),
    )

    DESCRIPTION_MIN_LENGTH = 20
    PRESENTATION_BONUS = 10

    def __init__(self, policy: Optional[RelevancePolicy] = None):
        """
        Initialize scorer.

        Args:
            policy: Lookup tables to score against (default policy if None)
        """
        self.policy = policy or DEFAULT_POLICY

    def score(self, record: RepositoryRecord, now: datetime) -> float:
        """
        Relevance score of a repository at time `now`.

        Args:
            record: Repository to score
            now: Reference time for the recency signal

        Returns:
            Score between 0 and 100
        """
        return self.breakdown(record, now).total

    def breakdown(self, record: RepositoryRecord, now: datetime) -> ScoreBreakdown:
        """
        Score a repository and report each signal's contribution.

        Args:
            record: Repository to score
            now: Reference time for the recency signal

        Returns:
            ScoreBreakdown whose total is the relevance score
        """
        now = parse_timestamp(now, 'now')
        factors = []

        popularity, factor = self._score_popularity(record)
        if factor:
            factors.append(factor)

        reach, factor = self._score_reach(record)
        if factor:
            factors.append(factor)

        scale, factor = self._score_scale(record)
        if factor:
            factors.append(factor)

        ecosystem, factor = self._score_ecosystem(record)
        if factor:
            factors.append(factor)

        recency, factor = self._score_recency(record, now)
        if factor:
            factors.append(factor)

        presentation, factor = self._score_presentation(record)
        if factor:
            factors.append(factor)

        return ScoreBreakdown(
            popularity=popularity,
            reach=reach,
            scale=scale,
            ecosystem=ecosystem,
            recency=recency,
            presentation=presentation,
            factors=factors,
        )

    def _score_popularity(self, record: RepositoryRecord) -> Tuple[float, Optional[str]]:
        """Score stars."""
        per_star, cap = self.STAR_POINTS
        points = min(record.star_count * per_star, cap)
        if points >= cap:
            return points, "Widely starred"
        if points > 0:
            return points, f"{record.star_count} stars"
        return points, None

    def _score_reach(self, record: RepositoryRecord) -> Tuple[float, Optional[str]]:
        """Score forks."""
        per_fork, cap = self.FORK_POINTS
        points = min(record.fork_count * per_fork, cap)
        if points >= cap:
            return points, "Frequently forked"
        if points > 0:
            return points, f"{record.fork_count} forks"
        return points, None

    def _score_scale(self, record: RepositoryRecord) -> Tuple[float, Optional[str]]:
        """Score repository size."""
        points = min(record.size_kilobytes / self.SIZE_KB_PER_POINT, self.SIZE_CAP)
        if points >= self.SIZE_CAP:
            return points, "Substantial codebase"
        return points, None

    def _score_ecosystem(self, record: RepositoryRecord) -> Tuple[float, Optional[str]]:
        """Score language popularity."""
        if record.primary_language and record.primary_language in self.policy.popular_languages:
            return self.ECOSYSTEM_BONUS, f"Popular language ({record.primary_language})"
        return 0, None

    def _score_recency(
        self,
        record: RepositoryRecord,
        now: datetime
    ) -> Tuple[float, Optional[str]]:
        """Score how recently the repository was updated."""
        if record.last_updated_at is None:
            return 0, None

        days_since_update = (now - record.last_updated_at).total_seconds() / 86400

        for max_days, points in self.RECENCY_TIERS:
            if days_since_update < max_days:
                return points, f"Updated within {max_days} days"
        return 0, None

    def _score_presentation(self, record: RepositoryRecord) -> Tuple[float, Optional[str]]:
        """Score description quality."""
        if record.description and len(record.description) > self.DESCRIPTION_MIN_LENGTH:
            return self.PRESENTATION_BONUS, "Descriptive summary"
        return 0, None


def score_repository(
    record: RepositoryRecord,
    now: datetime,
    policy: Optional[RelevancePolicy] = None
) -> float:
    """Score one repository with a throwaway scorer."""
    return RepositoryScorer(policy).score(record, now)
