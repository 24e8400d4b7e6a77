"""
Tests for compiled glob patterns.

Tests cover:
- ** matching zero or more directories
- Single * never crossing a path separator
- Nested literal patterns (bare file names)
- Case-insensitive matching and path normalization
"""

from hybrid_selector.services.glob_pattern import (
    DoubleStar,
    GlobPattern,
    Literal,
    Wildcard,
    glob_match,
    matches_any,
)


class TestGlobCompilation:
    """Tests for pattern parsing."""

    def test_segments_are_typed(self) -> None:
        """Each path segment compiles to its own segment kind."""
        pattern = GlobPattern.compile("dbt/**/*.sql")

        assert isinstance(pattern.segments[0], Literal)
        assert isinstance(pattern.segments[1], DoubleStar)
        assert isinstance(pattern.segments[2], Wildcard)
        assert pattern.nested_literal is False

    def test_consecutive_double_stars_collapse(self) -> None:
        """Repeated ** segments behave like a single one."""
        pattern = GlobPattern.compile("a/**/**/b.py")

        assert len(pattern.segments) == 3
        assert pattern.matches("a/b.py")
        assert pattern.matches("a/x/y/b.py")

    def test_bare_name_is_nested_literal(self) -> None:
        """A pattern without wildcards is a nested literal."""
        assert GlobPattern.compile("Dockerfile").nested_literal is True


class TestDoubleStar:
    """Tests for ** semantics."""

    def test_matches_nested_directories(self) -> None:
        """** spans several directories."""
        assert glob_match("dbt/**/*.sql", "dbt/models/staging/stg_orders.sql")

    def test_matches_zero_directories(self) -> None:
        """** may match no directory at all."""
        assert glob_match("dbt/**/*.yml", "dbt/dbt_project.yml")

    def test_extension_still_checked(self) -> None:
        """The trailing segment must still match."""
        assert not glob_match("dbt/**/*.sql", "dbt/models/staging/readme.md")

    def test_leading_double_star(self) -> None:
        """A leading ** matches at the root and below."""
        assert glob_match("**/*transform*.py", "transform_data.py")
        assert glob_match("**/*transform*.py", "src/etl/transform_data.py")


class TestSingleStar:
    """Tests for * semantics."""

    def test_star_stays_within_segment(self) -> None:
        """* does not cross a /."""
        assert glob_match("src/*.py", "src/main.py")
        assert not glob_match("src/*.py", "src/app/main.py")

    def test_star_in_middle_of_name(self) -> None:
        """* may appear anywhere inside a segment."""
        assert glob_match("train*.py", "train_model.py")
        assert not glob_match("train*.py", "pretrain.py")


class TestNestedLiteral:
    """Tests for bare-name patterns."""

    def test_matches_at_root_and_nested(self) -> None:
        """A bare name matches the root file and the same name in any subdirectory."""
        assert glob_match("Dockerfile", "Dockerfile")
        assert glob_match("Dockerfile", "backend/Dockerfile")

    def test_does_not_match_longer_names(self) -> None:
        """A bare name is not a prefix match."""
        assert not glob_match("Dockerfile", "Dockerfile.dev")
        assert not glob_match("requirements.txt", "dev-requirements.txt")

    def test_nested_literal_path(self) -> None:
        """A literal with directories matches that suffix."""
        assert glob_match(".github/workflows/ci.yml", "repo/.github/workflows/ci.yml")


class TestNormalization:
    """Tests for case and separator handling."""

    def test_case_insensitive(self) -> None:
        """Matching ignores case on both sides."""
        assert glob_match("README.md", "readme.MD")
        assert glob_match("*.SQL", "query.sql")

    def test_leading_dot_slash_and_backslashes(self) -> None:
        """./ prefixes and Windows separators are normalized."""
        assert glob_match("src/*.py", "./src/main.py")
        assert glob_match("src/*.py", "src\\main.py")

    def test_matches_any(self) -> None:
        """matches_any is true when one pattern matches."""
        patterns = ["terraform/**/*.tf", "Makefile"]

        assert matches_any(patterns, "terraform/modules/gcs/main.tf")
        assert matches_any(patterns, "Makefile")
        assert not matches_any(patterns, "main.py")
