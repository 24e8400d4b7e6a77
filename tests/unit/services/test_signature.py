"""
Tests for repository signatures.

Tests cover:
- Exclusion of VCS metadata, caches and build output
- Directory, technology and file type extraction
- Size buckets and the deterministic pattern hash
- Weighted similarity and matched features
"""

import pytest

from hybrid_selector.services.signature import (
    SignatureGenerator,
    categorize_size,
    jaccard,
    pattern_hash,
)


class TestFiltering:
    """Tests for SignatureGenerator.filter_files."""

    def setup_method(self) -> None:
        """Set up test fixtures."""
        self.generator = SignatureGenerator()

    def test_excludes_whole_segments(self) -> None:
        """Excluded names match whole path segments only."""
        files = [
            "src/main.py",
            "node_modules/react/index.js",
            ".git/config",
            "venv/lib/site.py",
            "environment.yml",
            "src/env/loader.py",
        ]

        assert self.generator.filter_files(files) == ["src/main.py", "environment.yml"]

    def test_excludes_basename_globs(self) -> None:
        """Glob exclusions apply to the file name."""
        files = ["logs/app.log", "scratch.tmp", "catalog.py"]

        assert self.generator.filter_files(files) == ["catalog.py"]

    def test_extra_patterns(self) -> None:
        """Caller patterns extend the defaults."""
        files = ["src/main.py", "data/raw.csv"]

        assert self.generator.filter_files(files, ["data"]) == ["src/main.py"]


class TestGenerate:
    """Tests for signature generation."""

    def setup_method(self) -> None:
        """Set up test fixtures."""
        self.generator = SignatureGenerator()

    def test_directory_prefixes(self) -> None:
        """Every directory prefix is recorded once, sorted."""
        signature = self.generator.generate(["a/b/c.py", "a/d.py", "top.py"])

        assert signature.directory_structure == ("a", "a/b")

    def test_max_depth(self) -> None:
        """max_depth limits prefix depth."""
        signature = self.generator.generate(["a/b/c.py"], max_depth=1)

        assert signature.directory_structure == ("a",)

    def test_technologies(self) -> None:
        """Technologies come from extensions, file names and directories."""
        signature = self.generator.generate(
            ["main.py", "requirements.txt", "Dockerfile", "dbt/dbt_project.yml", "dags/etl.py"]
        )

        assert {"python", "docker", "dbt", "airflow", "yaml"} <= signature.technologies

    def test_file_types(self) -> None:
        """Extensions are counted; extension-less files are grouped."""
        signature = self.generator.generate(["a.py", "b.py", "Dockerfile"])

        assert signature.file_types == {"py": 2, "no_extension": 1}

    def test_excluded_files_do_not_count(self) -> None:
        """Excluded paths affect neither size nor hash."""
        base = ["README.md", "main.py"]
        noisy = base + ["node_modules/x/index.js", ".git/HEAD"]

        assert self.generator.generate(noisy) == self.generator.generate(base)


class TestHashAndSize:
    """Tests for pattern_hash and categorize_size."""

    def test_hash_is_order_independent(self) -> None:
        """The hash is computed over sorted paths."""
        assert pattern_hash(["b.py", "a.py"]) == pattern_hash(["a.py", "b.py"])

    def test_hash_format(self) -> None:
        """Hashes are at least eight lowercase hex characters."""
        value = pattern_hash(["README.md", "src/main.py"])

        assert len(value) >= 8
        assert all(c in "0123456789abcdef" for c in value)

    def test_hash_differs_for_different_listings(self) -> None:
        """Different listings produce different hashes."""
        assert pattern_hash(["a.py"]) != pattern_hash(["b.py"])

    def test_size_buckets(self) -> None:
        """Under 20 is small, under 100 medium, otherwise large."""
        assert categorize_size(0) == "small"
        assert categorize_size(19) == "small"
        assert categorize_size(20) == "medium"
        assert categorize_size(99) == "medium"
        assert categorize_size(100) == "large"


class TestSimilarity:
    """Tests for similarity scoring."""

    def setup_method(self) -> None:
        """Set up test fixtures."""
        self.generator = SignatureGenerator()

    def test_identical_listings(self) -> None:
        """Identical listings are fully similar with every feature matched."""
        files = ["README.md", "src/main.py", "requirements.txt"]
        a = self.generator.generate(files)
        b = self.generator.generate(list(reversed(files)))

        assert self.generator.similarity(a, b) == pytest.approx(1.0)
        assert set(self.generator.matched_features(a, b)) == {
            "pattern_hash",
            "size_category",
            "technologies",
            "directory_structure",
        }

    def test_same_shape_different_hash(self) -> None:
        """Same technologies and directories without the hash score 0.6."""
        a = self.generator.generate(["README.md", "src/utils.py"])
        b = self.generator.generate(["README.md", "src/helpers.py"])

        assert self.generator.similarity(a, b) == pytest.approx(0.6)
        assert "pattern_hash" not in self.generator.matched_features(a, b)

    def test_unrelated_listings(self) -> None:
        """Disjoint repositories fall well below the cache threshold."""
        a = self.generator.generate(["terraform/main.tf", "dbt/models/a.sql"])
        b = self.generator.generate([f"web/page_{i}.html" for i in range(30)])

        assert self.generator.similarity(a, b) < 0.5

    def test_jaccard(self) -> None:
        """Jaccard treats two empty sets as identical."""
        assert jaccard(set(), set()) == 1.0
        assert jaccard({"a"}, set()) == 0.0
        assert jaccard({"a", "b"}, {"b", "c"}) == 1 / 3
