"""
Skill extraction for GitResume.

Infers the languages, frameworks and tools a portfolio demonstrates from
repository names, descriptions, topics and detected languages. Keyword
maps come from the relevance policy so they can be extended per product.

Matching is token based: "ml-classifier" yields the tokens "ml" and
"classifier", so the keyword "ml" hits but "go" does not hit "google".

Usage:
    from intelligence.skills import SkillExtractor

    profile = SkillExtractor().extract(records)
    print(profile.languages, profile.frameworks, profile.tools)
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Tuple

from core.config import DEFAULT_POLICY, RelevancePolicy
from models.repository import RepositoryRecord

TOKEN_SPLIT = re.compile(r'[^a-z0-9+#]+')


@dataclass
class SkillProfile:
    """Skills detected across a set of repositories."""
    languages: List[str] = field(default_factory=list)
    frameworks: List[str] = field(default_factory=list)
    tools: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'languages': self.languages,
            'frameworks': self.frameworks,
            'tools': self.tools,
        }


class SkillExtractor:
    """Keyword-based skill detection over repository metadata."""

    MAX_LANGUAGES = 6
    MAX_FRAMEWORKS = 5
    MAX_TOOLS = 8

    def __init__(self, policy: Optional[RelevancePolicy] = None):
        self.policy = policy or DEFAULT_POLICY

    def extract(self, records: Iterable[RepositoryRecord]) -> SkillProfile:
        """
        Detect skills across repositories.

        Labels are listed in order of first detection and capped per
        category. Tools always start with the policy's baseline tools.

        Args:
            records: Repositories to inspect

        Returns:
            SkillProfile
        """
        languages: List[str] = []
        frameworks: List[str] = []
        tools: List[str] = list(self.policy.baseline_tools)

        for record in records:
            tokens = self.tokenize(record)

            if record.primary_language:
                _add_unique(languages, record.primary_language)

            for label in self._match(tokens, self.policy.language_keywords):
                _add_unique(languages, label)
            for label in self._match(tokens, self.policy.framework_keywords):
                _add_unique(frameworks, label)
            for label in self._match(tokens, self.policy.tool_keywords):
                _add_unique(tools, label)

        return SkillProfile(
            languages=languages[:self.MAX_LANGUAGES],
            frameworks=frameworks[:self.MAX_FRAMEWORKS],
            tools=tools[:self.MAX_TOOLS],
        )

    @staticmethod
    def tokenize(record: RepositoryRecord) -> Set[str]:
        """Lower-cased word tokens from name, description and topics."""
        parts = [record.name or '', record.description or '']
        parts.extend(record.topics)

        tokens: Set[str] = set()
        for part in parts:
            tokens.update(t for t in TOKEN_SPLIT.split(part.lower()) if t)
        # Keep whole topics too, so a keyword like "machine-learning" can match
        tokens.update(topic.lower() for topic in record.topics)
        return tokens

    @staticmethod
    def _match(
        tokens: Set[str],
        keyword_map: Dict[str, Tuple[str, ...]]
    ) -> List[str]:
        return [
            label for label, keywords in keyword_map.items()
            if any(keyword in tokens for keyword in keywords)
        ]


def _add_unique(items: List[str], value: str):
    if value not in items:
        items.append(value)


def extract_skills(
    records: Iterable[RepositoryRecord],
    policy: Optional[RelevancePolicy] = None
) -> SkillProfile:
    """Extract skills with a throwaway extractor."""
    return SkillExtractor(policy).extract(records)
