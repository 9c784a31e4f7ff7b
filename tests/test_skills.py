"""
Tests for skill extraction

Tests keyword matching, ordering, caps and policy-supplied keyword maps.
"""

import pytest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import RelevancePolicy
from intelligence.skills import SkillExtractor, extract_skills
from tests.fixtures.sample_data import demo_records, make_record


class TestSkillExtractor:
    """Tests for SkillExtractor."""

    @pytest.fixture
    def extractor(self):
        return SkillExtractor()

    def test_demo_portfolio(self, extractor):
        profile = extractor.extract(demo_records())

        assert profile.languages == ["TypeScript", "JavaScript", "Python", "Solidity", "Rust", "Shell"]
        assert profile.frameworks == ["React", "Next.js", "TensorFlow"]
        assert profile.tools == ["Git", "GitHub", "REST APIs"]

    def test_empty_input_has_only_baseline_tools(self, extractor):
        profile = extractor.extract([])

        assert profile.languages == []
        assert profile.frameworks == []
        assert profile.tools == ["Git", "GitHub"]

    def test_token_matching_avoids_partial_words(self, extractor):
        """Test short keywords only match whole tokens."""
        profile = extractor.extract([make_record("a", name="google-photos-backup")])

        assert "Go" not in profile.languages
        assert "Google Cloud" in profile.tools

    def test_topics_and_description_used(self, extractor):
        record = make_record(
            "a", name="service",
            description="Deployed with Docker on Kubernetes",
            topics=["flask", "redis"]
        )

        profile = extractor.extract([record])

        assert profile.languages == ["Python"]
        assert profile.frameworks == ["Flask"]
        assert profile.tools == ["Git", "GitHub", "Docker", "Kubernetes", "Redis"]

    def test_java_not_confused_with_javascript(self, extractor):
        profile = extractor.extract([make_record("a", name="javascript-utils")])

        assert "JavaScript" in profile.languages
        assert "Java" not in profile.languages

    def test_caps(self, extractor):
        records = [
            make_record(i, primary_language=lang)
            for i, lang in enumerate(["A", "B", "C", "D", "E", "F", "G", "H"])
        ]
        records.append(make_record(
            "fw", name="react vue angular django flask rails unity pytorch"
        ))
        records.append(make_record(
            "tools", name="docker k8s aws azure gcp postgres mongo redis graphql"
        ))

        profile = extractor.extract(records)

        assert len(profile.languages) == SkillExtractor.MAX_LANGUAGES
        assert len(profile.frameworks) == SkillExtractor.MAX_FRAMEWORKS
        assert len(profile.tools) == SkillExtractor.MAX_TOOLS
        assert profile.tools[:2] == ["Git", "GitHub"]

    def test_custom_keyword_map(self):
        policy = RelevancePolicy(
            framework_keywords={"FastAPI": ("fastapi",)},
            baseline_tools=(),
        )

        profile = extract_skills([make_record("a", topics=["fastapi", "react"])], policy)

        assert profile.frameworks == ["FastAPI"]
        assert profile.tools == []

    def test_keywords_lowercased_on_direct_construction(self):
        policy = RelevancePolicy(framework_keywords={"FastAPI": ("FastAPI",)})

        profile = extract_skills([make_record("a", topics=["fastapi"])], policy)

        assert profile.frameworks == ["FastAPI"]

    def test_null_topic_ignored(self, extractor):
        profile = extractor.extract([make_record("a", topics=[None, "docker"])])
        assert "Docker" in profile.tools

    def test_to_dict(self, extractor):
        data = extractor.extract([make_record("a", primary_language="Go")]).to_dict()
        assert data == {"languages": ["Go"], "frameworks": [], "tools": ["Git", "GitHub"]}
