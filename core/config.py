"""
Relevance policy configuration.

The scoring formulas are fixed; the lookup tables they consult are not.
`RelevancePolicy` carries the popular-language set, the result caps and
the keyword maps used for skill extraction, so they can be tuned from a
YAML file or swapped out in tests without touching the algorithms.

Usage:
    from core.config import DEFAULT_POLICY, load_policy

    policy = load_policy("config/relevance.yaml")
    scorer = RepositoryScorer(policy)

Example YAML:
    popular_languages: [Python, Rust, Go]
    result_limit: 8
    text_match_limit: 4
    framework_keywords:
      FastAPI: [fastapi]
"""

import logging
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, FrozenSet, Mapping, Tuple, Union

import yaml

from .exceptions import InvalidInputError

logger = logging.getLogger(__name__)


# =============================================================================
# Defaults
# =============================================================================

POPULAR_LANGUAGES = frozenset({
    'JavaScript', 'TypeScript', 'Python', 'Java', 'Go', 'Rust',
})

LANGUAGE_KEYWORDS = {
    'JavaScript': ('javascript', 'js', 'react', 'node', 'nodejs'),
    'TypeScript': ('typescript', 'ts'),
    'Python': ('python', 'py', 'django', 'flask'),
    'Java': ('java',),
    'C++': ('cpp', 'c++'),
    'Rust': ('rust',),
    'Go': ('go', 'golang'),
    'PHP': ('php',),
    'Ruby': ('ruby',),
    'Swift': ('swift',),
    'Kotlin': ('kotlin',),
    'Dart': ('dart', 'flutter'),
}

FRAMEWORK_KEYWORDS = {
    'React': ('react',),
    'Next.js': ('next', 'nextjs'),
    'Vue.js': ('vue', 'vuejs'),
    'Angular': ('angular',),
    'Node.js': ('node', 'nodejs', 'express'),
    'Django': ('django',),
    'Flask': ('flask',),
    'Spring Boot': ('spring',),
    'Laravel': ('laravel',),
    'Ruby on Rails': ('rails',),
    'Flutter': ('flutter',),
    'Unity': ('unity',),
    'TensorFlow': ('tensorflow', 'ml'),
    'PyTorch': ('pytorch',),
}

TOOL_KEYWORDS = {
    'Docker': ('docker',),
    'Kubernetes': ('kubernetes', 'k8s'),
    'AWS': ('aws',),
    'Azure': ('azure',),
    'Google Cloud': ('gcp', 'google'),
    'PostgreSQL': ('postgres', 'postgresql'),
    'MongoDB': ('mongo', 'mongodb'),
    'Redis': ('redis',),
    'GraphQL': ('graphql',),
    'REST APIs': ('api',),
    'Testing Frameworks': ('test', 'tests', 'testing'),
    'CI/CD': ('ci', 'cd'),
    'Build Tools': ('webpack', 'vite'),
}

BASELINE_TOOLS = ('Git', 'GitHub')


# =============================================================================
# Validation helpers
# =============================================================================

def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _string_list(key: str, value: Any) -> list:
    if isinstance(value, str) or not isinstance(value, (list, tuple, set, frozenset)):
        raise InvalidInputError(
            f"{key} must be a list of strings", field=key, value=value
        )
    if not all(isinstance(item, str) for item in value):
        raise InvalidInputError(
            f"{key} must only contain strings", field=key, value=value
        )
    return list(value)


def _keyword_map(key: str, value: Any) -> Mapping[str, Tuple[str, ...]]:
    """Validate a label -> keywords map and return a read-only, lower-cased copy."""
    if not isinstance(value, Mapping):
        raise InvalidInputError(
            f"{key} must map labels to keyword lists", field=key, value=value
        )
    return MappingProxyType({
        str(label): tuple(kw.lower() for kw in _string_list(f"{key}.{label}", keywords))
        for label, keywords in value.items()
    })


# =============================================================================
# Policy
# =============================================================================

KEYWORD_FIELDS = ('language_keywords', 'framework_keywords', 'tool_keywords')


@dataclass(frozen=True)
class RelevancePolicy:
    """
    Tunable lookup tables and caps for ranking, search and skill extraction.

    Every construction path normalizes the tables: keyword maps become
    read-only with lower-cased keywords, popular_languages a frozenset and
    baseline_tools a tuple. Policies are therefore hashable and safe to
    share between threads.

    Attributes:
        popular_languages: Languages that earn the ecosystem bonus
        result_limit: Maximum size of ranked and search result sets
        text_match_limit: Maximum text matches placed ahead of the ranking
        language_keywords: Language label -> keywords that signal it
        framework_keywords: Framework label -> keywords that signal it
        tool_keywords: Tool label -> keywords that signal it
        baseline_tools: Tools every portfolio is credited with
    """
    popular_languages: FrozenSet[str] = POPULAR_LANGUAGES
    result_limit: int = 8
    text_match_limit: int = 4
    language_keywords: Mapping[str, Tuple[str, ...]] = field(
        default_factory=lambda: LANGUAGE_KEYWORDS
    )
    framework_keywords: Mapping[str, Tuple[str, ...]] = field(
        default_factory=lambda: FRAMEWORK_KEYWORDS
    )
    tool_keywords: Mapping[str, Tuple[str, ...]] = field(
        default_factory=lambda: TOOL_KEYWORDS
    )
    baseline_tools: Tuple[str, ...] = BASELINE_TOOLS

    def __post_init__(self):
        if not _is_int(self.result_limit) or self.result_limit < 0:
            raise InvalidInputError(
                f"result_limit must be a non-negative integer, got {self.result_limit!r}",
                field='result_limit', value=self.result_limit
            )
        if not _is_int(self.text_match_limit) or self.text_match_limit < 0:
            raise InvalidInputError(
                f"text_match_limit must be a non-negative integer, got {self.text_match_limit!r}",
                field='text_match_limit', value=self.text_match_limit
            )
        if self.text_match_limit > self.result_limit:
            raise InvalidInputError(
                "text_match_limit cannot exceed result_limit",
                field='text_match_limit', value=self.text_match_limit
            )

        object.__setattr__(self, 'popular_languages', frozenset(
            _string_list('popular_languages', self.popular_languages)
        ))
        object.__setattr__(self, 'baseline_tools', tuple(
            _string_list('baseline_tools', self.baseline_tools)
        ))
        for name in KEYWORD_FIELDS:
            object.__setattr__(self, name, _keyword_map(name, getattr(self, name)))

    def __hash__(self):
        return hash((
            self.popular_languages,
            self.result_limit,
            self.text_match_limit,
            *(frozenset(getattr(self, name).items()) for name in KEYWORD_FIELDS),
            self.baseline_tools,
        ))

    # Immutable, so copies can share the instance.
    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'RelevancePolicy':
        """
        Build a policy from a plain mapping (e.g. parsed YAML).

        Missing keys keep their defaults. Keyword maps given in `data`
        replace the default map for that category entirely.

        Raises:
            InvalidInputError: On unknown keys or wrongly shaped values
        """
        if not isinstance(data, Mapping):
            raise InvalidInputError(
                f"Policy must be a mapping, got {type(data).__name__}",
                field=None, value=data
            )

        known = {f.name for f in fields(cls)}
        unknown = [key for key in data if key not in known]
        if unknown:
            raise InvalidInputError(
                f"Unknown policy keys: {', '.join(map(str, unknown))}",
                field=unknown[0], value=data[unknown[0]]
            )

        return replace(cls(), **data)

    def to_dict(self) -> dict:
        return {
            'popular_languages': sorted(self.popular_languages),
            'result_limit': self.result_limit,
            'text_match_limit': self.text_match_limit,
            'language_keywords': {k: list(v) for k, v in self.language_keywords.items()},
            'framework_keywords': {k: list(v) for k, v in self.framework_keywords.items()},
            'tool_keywords': {k: list(v) for k, v in self.tool_keywords.items()},
            'baseline_tools': list(self.baseline_tools),
        }


DEFAULT_POLICY = RelevancePolicy()


def load_policy(config_path: Union[str, Path]) -> RelevancePolicy:
    """
    Load a relevance policy from a YAML file.

    Args:
        config_path: Path to the YAML file

    Returns:
        Configured RelevancePolicy (defaults for an empty file)

    Raises:
        FileNotFoundError: If the file does not exist
        InvalidInputError: If the YAML is malformed or has the wrong shape
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        try:
            config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise InvalidInputError(
                f"Malformed policy file {config_path}: {e}",
                field=None, value=str(config_path)
            ) from e

    if config is None:
        logger.debug(f"Empty policy file {config_path}, using defaults")
        return RelevancePolicy()

    policy = RelevancePolicy.from_dict(config)
    logger.debug(f"Loaded relevance policy from {config_path}")
    return policy

