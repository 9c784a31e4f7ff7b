"""
GitResume Intelligence Layer

Deterministic analytics over a user's repositories:
- Relevance scoring with per-signal breakdown
- Top-N ranking
- Keyword-based skill extraction
- Portfolio summary statistics

Every function takes the current time explicitly; nothing reads the clock.
"""

from .scoring import RepositoryScorer, score_repository
from .ranking import rank_repositories, score_repositories
from .skills import SkillExtractor, SkillProfile, extract_skills
from .portfolio import PortfolioSummary, summarize_portfolio

__all__ = [
    'RepositoryScorer',
    'score_repository',
    'rank_repositories',
    'score_repositories',
    'SkillExtractor',
    'SkillProfile',
    'extract_skills',
    'PortfolioSummary',
    'summarize_portfolio',
]
