"""
Search System for GitResume

Provides hybrid search over a user's repositories: substring matches on
name, description and topics first, topped up from the relevance ranking.

Usage:
    from search import HybridSearcher

    searcher = HybridSearcher()
    results = searcher.search(records, "machine learning", now)
"""

from .hybrid_search import HybridSearcher, SearchResult, hybrid_search

__all__ = [
    'HybridSearcher',
    'SearchResult',
    'hybrid_search',
]
