"""
Tests for relevance policy configuration

Tests defaults, validation and YAML loading.
"""

import copy
import pytest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import DEFAULT_POLICY, RelevancePolicy, load_policy
from core.exceptions import InvalidInputError


class TestRelevancePolicy:
    """Tests for RelevancePolicy."""

    def test_defaults(self):
        assert DEFAULT_POLICY.popular_languages == frozenset({
            "JavaScript", "TypeScript", "Python", "Java", "Go", "Rust"
        })
        assert DEFAULT_POLICY.result_limit == 8
        assert DEFAULT_POLICY.text_match_limit == 4
        assert DEFAULT_POLICY.baseline_tools == ("Git", "GitHub")

    def test_text_limit_cannot_exceed_result_limit(self):
        with pytest.raises(InvalidInputError):
            RelevancePolicy(result_limit=3, text_match_limit=4)

    @pytest.mark.parametrize("value", [-1, "8", 2.0, None])
    def test_invalid_result_limit(self, value):
        with pytest.raises(InvalidInputError):
            RelevancePolicy(result_limit=value)

    def test_from_dict_overrides(self):
        policy = RelevancePolicy.from_dict({
            "popular_languages": ["Elixir"],
            "result_limit": 5,
            "tool_keywords": {"Terraform": ["Terraform", "tf"]},
        })

        assert policy.popular_languages == frozenset({"Elixir"})
        assert policy.result_limit == 5
        assert policy.text_match_limit == 4
        assert policy.tool_keywords == {"Terraform": ("terraform", "tf")}
        assert policy.framework_keywords == DEFAULT_POLICY.framework_keywords

    def test_from_dict_unknown_key(self):
        with pytest.raises(InvalidInputError) as exc_info:
            RelevancePolicy.from_dict({"popular_langs": ["Go"]})

        assert exc_info.value.field == "popular_langs"

    @pytest.mark.parametrize("data", [
        {"popular_languages": "Python"},
        {"popular_languages": [1, 2]},
        {"language_keywords": ["python"]},
        {"framework_keywords": {"React": "react"}},
        ["not", "a", "mapping"],
    ])
    def test_from_dict_bad_shapes(self, data):
        with pytest.raises(InvalidInputError):
            RelevancePolicy.from_dict(data)

    def test_to_dict_round_trips_through_from_dict(self):
        assert RelevancePolicy.from_dict(DEFAULT_POLICY.to_dict()) == DEFAULT_POLICY

    def test_direct_keywords_lowercased(self):
        policy = RelevancePolicy(tool_keywords={"Terraform": ["Terraform", "TF"]})
        assert policy.tool_keywords == {"Terraform": ("terraform", "tf")}

    def test_direct_bad_keyword_map(self):
        with pytest.raises(InvalidInputError) as exc_info:
            RelevancePolicy(language_keywords={"Python": "python"})

        assert exc_info.value.field == "language_keywords.Python"

    def test_hashable(self):
        """Test policies can key caches and sets."""
        assert hash(DEFAULT_POLICY) == hash(RelevancePolicy())
        cache = {DEFAULT_POLICY: "default"}
        assert cache[RelevancePolicy()] == "default"
        assert hash(RelevancePolicy(result_limit=5)) != hash(DEFAULT_POLICY)

    def test_keyword_maps_are_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_POLICY.tool_keywords["Terraform"] = ("tf",)

        assert "Terraform" not in RelevancePolicy().tool_keywords

    def test_copy_returns_same_policy(self):
        assert copy.deepcopy(DEFAULT_POLICY) is DEFAULT_POLICY
        assert copy.copy(DEFAULT_POLICY) is DEFAULT_POLICY


class TestLoadPolicy:
    """Tests for YAML loading."""

    def test_load_yaml(self, tmp_path):
        config_path = tmp_path / "relevance.yaml"
        config_path.write_text(
            "popular_languages: [Python, Rust]\n"
            "text_match_limit: 2\n"
            "framework_keywords:\n"
            "  FastAPI: [fastapi]\n"
        )

        policy = load_policy(config_path)

        assert policy.popular_languages == frozenset({"Python", "Rust"})
        assert policy.text_match_limit == 2
        assert policy.framework_keywords == {"FastAPI": ("fastapi",)}

    def test_empty_file_gives_defaults(self, tmp_path):
        config_path = tmp_path / "empty.yaml"
        config_path.write_text("")

        assert load_policy(config_path) == DEFAULT_POLICY

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_policy(tmp_path / "nope.yaml")

    def test_malformed_yaml(self, tmp_path):
        config_path = tmp_path / "broken.yaml"
        config_path.write_text("popular_languages: [Python\n")

        with pytest.raises(InvalidInputError):
            load_policy(config_path)

    def test_string_path(self, tmp_path):
        config_path = tmp_path / "limits.yaml"
        config_path.write_text("result_limit: 10\n")

        assert load_policy(str(config_path)).result_limit == 10
