"""Tests for import path helpers."""

import pytest

from src.importer_survey.paths import is_hosted, owner_repo, repo_identifier, repo_root


class TestRepoRoot:
    """Test project root derivation."""

    def test_strips_sub_packages(self):
        assert repo_root("github.com/orgX/proj1/sub/pkg") == "github.com/orgX/proj1"

    def test_repository_path_unchanged(self):
        assert repo_root("github.com/orgX/proj1") == "github.com/orgX/proj1"

    def test_non_hosted_path_is_whole_identifier(self):
        """Paths outside the hosting domain keep their full path."""
        assert repo_root("other.example.com/lib/sub") == "other.example.com/lib/sub"

    def test_lookalike_domain_not_hosted(self):
        assert repo_root("github.company.io/a/b/c") == "github.company.io/a/b/c"

    def test_custom_domain(self):
        assert repo_root("gitlab.com/a/b/c", domain="gitlab.com") == "gitlab.com/a/b"


class TestOwnerRepo:
    """Test owner/repo splitting."""

    def test_split(self):
        assert owner_repo("github.com/hashicorp/terraform/helper") == (
            "hashicorp",
            "terraform",
        )

    def test_non_hosted_raises(self):
        with pytest.raises(ValueError, match="Not a github.com path"):
            owner_repo("gopkg.in/yaml.v2")

    def test_missing_repo_segment_raises(self):
        with pytest.raises(ValueError, match="Cannot derive owner/repo"):
            owner_repo("github.com/onlyowner")


class TestHelpers:
    """Test small helpers."""

    def test_is_hosted(self):
        assert is_hosted("github.com/a/b")
        assert not is_hosted("example.com/github.com/a")

    def test_repo_identifier(self):
        assert repo_identifier("owner/repo") == "github.com/owner/repo"
