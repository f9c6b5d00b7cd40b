"""Unit tests for GitHub identifier and JSON document validators."""

import pytest

from ghmcp.domain.validators import (
    sanitize_branch_name,
    validate_branch_name,
    validate_github_username,
    validate_json_document,
    validate_repository,
)


@pytest.mark.unit
class TestValidateGithubUsername:
    """Test GitHub username rules."""

    @pytest.mark.parametrize("username", ["octocat", "octo-cat", "a", "A1", "x" * 39])
    def test_valid_usernames(self, username):
        assert validate_github_username(username) == username

    @pytest.mark.parametrize(
        "username",
        ["", "-octocat", "octocat-", "octo_cat", "octo.cat", "x" * 40, "ünïcode"],
    )
    def test_invalid_usernames(self, username):
        with pytest.raises(ValueError, match="Invalid GitHub username"):
            validate_github_username(username)


@pytest.mark.unit
class TestValidateRepository:
    """Test owner/name repository references."""

    @pytest.mark.parametrize(
        "repository", ["octocat/hello-world", "my-org/repo.name", "a/b_c"]
    )
    def test_valid_repositories(self, repository):
        assert validate_repository(repository) == repository

    def test_missing_slash_rejected(self):
        with pytest.raises(ValueError, match="owner/name"):
            validate_repository("hello-world")

    def test_invalid_owner_rejected(self):
        with pytest.raises(ValueError, match="Invalid GitHub username"):
            validate_repository("-bad/repo")

    @pytest.mark.parametrize("repository", ["octocat/", "octocat/..", "octocat/a b"])
    def test_invalid_name_rejected(self, repository):
        with pytest.raises(ValueError, match="Invalid repository name"):
            validate_repository(repository)


@pytest.mark.unit
class TestBranchNames:
    """Test branch sanitization and validation."""

    def test_sanitize_removes_unsafe_characters(self):
        assert sanitize_branch_name("feature/login; rm -rf") == "feature/loginrm-rf"

    def test_sanitize_trims_dots(self):
        assert sanitize_branch_name("..release.") == "release"

    @pytest.mark.parametrize("branch", ["main", "feature/login", "release-1.2", "a_b"])
    def test_valid_branches(self, branch):
        assert validate_branch_name(branch) == branch

    @pytest.mark.parametrize("branch", ["", "feat ure", "main;", ".hidden", "x$(y)"])
    def test_invalid_branches(self, branch):
        with pytest.raises(ValueError, match="Invalid branch name"):
            validate_branch_name(branch)


@pytest.mark.unit
class TestValidateJsonDocument:
    """Test that only plain JSON documents pass."""

    def test_nested_document_accepted(self):
        doc = {"status": "start", "files": ["a.py", {"lines": 3}], "ok": True, "x": None}

        assert validate_json_document(doc) is doc

    def test_not_a_mapping(self):
        with pytest.raises(ValueError, match="JSON object"):
            validate_json_document(["a", "b"])

    @pytest.mark.parametrize(
        ("doc", "message"),
        [
            ({"files": ("a.py",)}, r"tuple at \$\.files"),
            ({"nested": {"tags": {"x"}}}, r"set at \$\.nested\.tags"),
            ({"items": [1, float("inf")]}, r"Non-finite number at \$\.items\[1\]"),
            ({2: "two"}, "Non-string key"),
        ],
    )
    def test_non_json_values_rejected(self, doc, message):
        with pytest.raises(ValueError, match=message):
            validate_json_document(doc)
