"""
Portfolio summary for GitResume.

Aggregates scores across all of a user's repositories: distribution
statistics, per-repository percentile, language mix, detected skills and
the featured top-N.

Usage:
    from intelligence.portfolio import summarize_portfolio

    summary = summarize_portfolio(records, now)
    print(f"Average: {summary.mean_score:.1f}")
    print(summary.language_distribution)
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

import numpy as np

from core.config import RelevancePolicy
from models.repository import RepositoryRecord, ScoredRepository

from .ranking import rank_repositories, score_repositories
from .skills import SkillExtractor, SkillProfile

logger = logging.getLogger(__name__)


@dataclass
class PortfolioSummary:
    """Aggregate view of a scored repository set."""
    repository_count: int = 0
    mean_score: float = 0.0
    median_score: float = 0.0
    max_score: float = 0.0
    percentiles: Dict[Any, float] = field(default_factory=dict)
    language_distribution: Dict[str, int] = field(default_factory=dict)
    skills: SkillProfile = field(default_factory=SkillProfile)
    top_repositories: List[ScoredRepository] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'repository_count': self.repository_count,
            'mean_score': self.mean_score,
            'median_score': self.median_score,
            'max_score': self.max_score,
            'percentiles': {str(k): v for k, v in self.percentiles.items()},
            'language_distribution': self.language_distribution,
            'skills': self.skills.to_dict(),
            'top_repositories': [r.to_dict() for r in self.top_repositories],
        }


def summarize_portfolio(
    records: Iterable[RepositoryRecord],
    now: datetime,
    policy: Optional[RelevancePolicy] = None
) -> PortfolioSummary:
    """
    Summarize a user's repositories.

    Percentile rank follows "share of repositories scoring at or below the
    first occurrence of this score", so the single best repository is at
    100 and ties share the lower rank.

    Args:
        records: All repositories of the user
        now: Reference time for the recency signal
        policy: Relevance policy (default if None)

    Returns:
        PortfolioSummary (zeros and empty collections for no records)
    """
    records = list(records)
    scored = score_repositories(records, now, policy)
    skills = SkillExtractor(policy).extract(records)

    if not scored:
        return PortfolioSummary(skills=skills)

    scores = np.array([s.relevance_score for s in scored], dtype=float)
    sorted_scores = np.sort(scores)
    ranks = np.searchsorted(sorted_scores, scores, side='left') + 1
    percentile_values = ranks / len(scores) * 100

    percentiles = {}
    for item, value in zip(scored, percentile_values):
        percentiles.setdefault(item.identifier, float(value))

    languages = Counter(
        r.primary_language for r in records if r.primary_language
    )

    summary = PortfolioSummary(
        repository_count=len(scored),
        mean_score=float(np.mean(scores)),
        median_score=float(np.median(scores)),
        max_score=float(np.max(scores)),
        percentiles=percentiles,
        language_distribution=dict(languages.most_common()),
        skills=skills,
        top_repositories=rank_repositories(records, now, policy=policy),
    )

    logger.debug(
        f"Summarized {summary.repository_count} repositories "
        f"(mean {summary.mean_score:.1f})"
    )
    return summary
