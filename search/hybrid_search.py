"""
Hybrid Search for GitResume

Answers a free-text query over a user's repositories by blending exact
text matches with the relevance ranking:

1. Text matches: the lower-cased query is a substring of the name, the
   description or any topic. Input order, at most 4.
2. Ranking: the top 8 repositories by relevance score, computed over
   the whole input.
3. Merge: text matches first, then ranked repositories not already
   present, until 8 results.

An empty query is a substring of everything, so it matches the first 4
repositories and the ranking fills the rest.

Usage:
    from search.hybrid_search import HybridSearcher

    searcher = HybridSearcher()
    results = searcher.search(records, "react hooks", now)

    for result in results:
        print(f"{result.score:.1f} [{result.match_type}] {result.record.name}")
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from core.config import DEFAULT_POLICY, RelevancePolicy
from core.logging_config import log_performance
from intelligence.ranking import rank_repositories
from intelligence.scoring import RepositoryScorer
from models.repository import RepositoryRecord

logger = logging.getLogger(__name__)

MATCH_TEXT = 'text'
MATCH_RANKED = 'ranked'


@dataclass
class SearchResult:
    """A search hit with the reason it was included."""
    record: RepositoryRecord
    score: float
    match_type: str
    matched_fields: List[str] = field(default_factory=list)

    @property
    def identifier(self):
        return self.record.identifier

    def to_dict(self) -> dict:
        result = self.record.to_dict()
        result.update({
            'relevance_score': self.score,
            'match_type': self.match_type,
            'matched_fields': self.matched_fields,
        })
        return result


class HybridSearcher:
    """
    Hybrid search combining substring matching and relevance ranking.

    Text matches are not re-ordered by score; they keep input order and
    always come first.
    """

    def __init__(self, policy: Optional[RelevancePolicy] = None):
        """
        Initialize hybrid searcher.

        Args:
            policy: Relevance policy providing caps and scoring tables
        """
        self.policy = policy or DEFAULT_POLICY
        self.scorer = RepositoryScorer(self.policy)

    def search(
        self,
        records: Iterable[RepositoryRecord],
        query: str,
        now: datetime
    ) -> List[SearchResult]:
        """
        Search repositories using the hybrid text + ranking approach.

        Args:
            records: Repositories to search
            query: Free-text query (case-insensitive; None acts as "")
            now: Reference time for relevance scoring

        Returns:
            Up to policy.result_limit SearchResults, unique by identifier
        """
        records = list(records)
        if not records:
            return []

        limit = self.policy.result_limit
        results: List[SearchResult] = []
        seen = set()

        for record, matched_fields in self._text_matches(records, query or ''):
            if record.identifier in seen:
                continue
            if len(results) >= self.policy.text_match_limit:
                break
            seen.add(record.identifier)
            results.append(SearchResult(
                record=record,
                score=self.scorer.score(record, now),
                match_type=MATCH_TEXT,
                matched_fields=matched_fields,
            ))

        text_count = len(results)
        ranked = rank_repositories(records, now, k=limit, policy=self.policy)

        for scored in ranked:
            if len(results) >= limit:
                break
            if scored.identifier in seen:
                continue
            seen.add(scored.identifier)
            results.append(SearchResult(
                record=scored.record,
                score=scored.relevance_score,
                match_type=MATCH_RANKED,
            ))

        logger.debug(
            f"Hybrid search over {len(records)} repositories: "
            f"{text_count} text matches, {len(results) - text_count} ranked"
        )
        return results[:limit]

    def _text_matches(
        self,
        records: List[RepositoryRecord],
        query: str
    ) -> Iterable[Tuple[RepositoryRecord, List[str]]]:
        """Yield records the query matches, with the fields it matched."""
        needle = query.lower()

        for record in records:
            matched_fields = self._matched_fields(record, needle)
            if matched_fields:
                yield record, matched_fields

    @staticmethod
    def _matched_fields(record: RepositoryRecord, needle: str) -> List[str]:
        matched = []
        if needle in (record.name or '').lower():
            matched.append('name')
        if record.description is not None and needle in record.description.lower():
            matched.append('description')
        if any(needle in topic.lower() for topic in record.topics):
            matched.append('topics')
        return matched


@log_performance('gitresume.search')
def hybrid_search(
    records: Iterable[RepositoryRecord],
    query: str,
    now: datetime,
    policy: Optional[RelevancePolicy] = None
) -> List[SearchResult]:
    """
    Convenience function for one-off searches.

    Args:
        records: Repositories to search
        query: Free-text query
        now: Reference time for relevance scoring
        policy: Relevance policy (default if None)

    Returns:
        List of SearchResult objects
    """
    return HybridSearcher(policy).search(records, query, now)
