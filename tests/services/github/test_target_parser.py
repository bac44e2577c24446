# ABOUTME: Tests for parsing issue/PR targets from short form and URLs
# ABOUTME: Covers accepted shapes, length limits and rejection messages

import pytest

from gh_ccimg.services.github import GitHubTarget, TargetParseError, parse_target


class TestParseTarget:
    @pytest.mark.parametrize(
        "text",
        [
            "octo-org/hello.world#42",
            "  octo-org/hello.world#42  ",
            "https://github.com/octo-org/hello.world/issues/42",
            "https://github.com/octo-org/hello.world/pull/42",
            "https://github.com/octo-org/hello.world/pull/42/files",
            "https://github.com/octo-org/hello.world/issues/42#issuecomment-1",
            "https://github.com/octo-org/hello.world/issues/42?q=1",
        ],
    )
    def test_accepted_forms(self, text):
        assert parse_target(text) == GitHubTarget(owner="octo-org", repo="hello.world", number=42)

    def test_api_path_and_str(self):
        target = parse_target("a/b#7")

        assert target.api_path == "repos/a/b/issues/7"
        assert str(target) == "a/b#7"

    @pytest.mark.parametrize(
        "text",
        [
            "octo/repo",
            "octo/repo#abc",
            "http://github.com/octo/repo/issues/1",
            "https://gitlab.com/octo/repo/issues/1",
            "https://github.com/octo/repo/discussions/1",
            "-octo/repo#1",
        ],
    )
    def test_rejected_forms(self, text):
        with pytest.raises(TargetParseError, match="invalid target format"):
            parse_target(text)

    def test_empty(self):
        with pytest.raises(TargetParseError, match="cannot be empty"):
            parse_target("   ")

    def test_number_must_be_positive(self):
        with pytest.raises(TargetParseError, match="must be positive"):
            parse_target("octo/repo#0")

    def test_repo_length_limit(self):
        with pytest.raises(TargetParseError, match="repository name too long"):
            parse_target(f"octo/{'r' * 101}#1")

    def test_owner_length_limit(self):
        """Owners over 39 characters never match the owner pattern."""
        with pytest.raises(TargetParseError):
            parse_target(f"{'o' * 40}/repo#1")
