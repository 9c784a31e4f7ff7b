"""
Repository ranking.

Orders a user's repositories by relevance score and keeps the top few,
which is what the resume report presents as "featured projects".

Usage:
    from intelligence.ranking import rank_repositories

    top = rank_repositories(records, now)
    for scored in top:
        print(f"{scored.relevance_score:.1f} - {scored.record.name}")
"""

import logging
from datetime import datetime
from typing import Iterable, List, Optional

from core.config import RelevancePolicy
from core.exceptions import InvalidInputError
from core.logging_config import log_performance
from models.repository import RepositoryRecord, ScoredRepository

from .scoring import RepositoryScorer

logger = logging.getLogger(__name__)


def score_repositories(
    records: Iterable[RepositoryRecord],
    now: datetime,
    policy: Optional[RelevancePolicy] = None
) -> List[ScoredRepository]:
    """
    Score every record, keeping input order.

    Args:
        records: Repositories to score
        now: Reference time for the recency signal
        policy: Relevance policy (default if None)

    Returns:
        One ScoredRepository per input record
    """
    scorer = RepositoryScorer(policy)
    results = []
    for record in records:
        breakdown = scorer.breakdown(record, now)
        results.append(ScoredRepository(
            record=record,
            relevance_score=breakdown.total,
            breakdown=breakdown,
        ))
    return results


@log_performance('gitresume.ranking')
def rank_repositories(
    records: Iterable[RepositoryRecord],
    now: datetime,
    k: Optional[int] = None,
    policy: Optional[RelevancePolicy] = None
) -> List[ScoredRepository]:
    """
    Rank repositories by descending relevance score.

    Equal scores keep their input order. Fewer than `k` records are all
    returned; no records gives an empty list.

    Args:
        records: Repositories to rank
        now: Reference time for the recency signal
        k: Maximum results (default: policy.result_limit, i.e. 8)
        policy: Relevance policy (default if None)

    Returns:
        Up to `k` ScoredRepository objects, best first

    Raises:
        InvalidInputError: If k is negative or not an integer
    """
    scorer = RepositoryScorer(policy)
    if k is None:
        k = scorer.policy.result_limit
    if isinstance(k, bool) or not isinstance(k, int) or k < 0:
        raise InvalidInputError(
            f"k must be a non-negative integer, got {k!r}", field='k', value=k
        )

    scored = score_repositories(records, now, scorer.policy)

    # sorted() is stable, also with reverse=True
    ranked = sorted(scored, key=lambda s: s.relevance_score, reverse=True)[:k]

    logger.debug(f"Ranked {len(scored)} repositories, kept {len(ranked)}")
    return ranked
