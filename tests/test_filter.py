"""Tests for argument filtering."""

from __future__ import annotations

from pathlib import Path

import pytest

from safe_rm.config import load_registry
from safe_rm.core.filter import ArgumentFilter, Classification, FilterResult
from safe_rm.safety.protected import ProtectedPathRegistry


class TestArgumentFilter:
    """Tests for ArgumentFilter."""

    def test_empty_input(self):
        result = ArgumentFilter(ProtectedPathRegistry(["/data"])).filter([])
        assert result == FilterResult(allowed=[], skipped=[])

    def test_blocked_reported_by_original_spelling(self, protected_structure: Path):
        registry = ProtectedPathRegistry([str(protected_structure / "secrets")])
        raw = str(protected_structure / "secrets") + "//"

        result = ArgumentFilter(registry).filter([raw])

        assert result.skipped == [raw]
        assert result.allowed == []
        assert result.blocked_count == 1

    def test_allowed_forwarded_normalized(self, protected_structure: Path):
        registry = ProtectedPathRegistry(["/nothing"])
        raw = f"{protected_structure}/secrets/../secrets/key.pem"

        result = ArgumentFilter(registry).filter([raw])

        assert result.allowed == [str(protected_structure / "secrets" / "key.pem")]
        assert result.skipped == []

    def test_order_preserved(self, temp_dir: Path):
        registry = ProtectedPathRegistry([f"{temp_dir}/b", f"{temp_dir}/d"])
        args = [f"{temp_dir}/{name}" for name in ("a", "b", "c", "d", "e")]

        result = ArgumentFilter(registry).filter(args)

        assert result.allowed == [f"{temp_dir}/a", f"{temp_dir}/c", f"{temp_dir}/e"]
        assert result.skipped == [f"{temp_dir}/b", f"{temp_dir}/d"]

    def test_repeated_arguments_kept_once_each(self, temp_dir: Path):
        registry = ProtectedPathRegistry(["/nothing"])
        path = f"{temp_dir}/x"
        result = ArgumentFilter(registry).filter([path, path])
        assert result.allowed == [path, path]

    def test_trailing_separator_equivalence(self):
        registry = ProtectedPathRegistry(["/etc"])
        argument_filter = ArgumentFilter(registry)
        assert argument_filter.classify("/etc/")[0] is Classification.BLOCKED
        assert argument_filter.classify("/etc")[0] is Classification.BLOCKED

    def test_symlink_blocked_by_own_path(self, protected_structure: Path, temp_dir: Path):
        link = protected_structure / "link"
        registry = ProtectedPathRegistry([str(link)])

        result = ArgumentFilter(registry).filter([str(link), str(temp_dir / "elsewhere")])

        assert result.skipped == [str(link)]
        assert result.allowed == [str(temp_dir / "elsewhere")]

    def test_symlink_to_protected_target_not_followed(self, protected_structure: Path, temp_dir: Path):
        registry = ProtectedPathRegistry([str(temp_dir / "elsewhere")])
        link = str(protected_structure / "link")

        result = ArgumentFilter(registry).filter([link])

        assert result.allowed == [link]

    def test_flags_pass_through(self):
        registry = ProtectedPathRegistry(["/etc"])
        result = ArgumentFilter(registry).filter(["-rf", "--no-preserve-root", "/etc"])
        assert result.allowed == ["-rf", "--no-preserve-root"]
        assert result.skipped == ["/etc"]

    def test_empty_argument_forwarded_unchanged(self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.chdir(temp_dir)
        result = ArgumentFilter(ProtectedPathRegistry(["/nothing"])).filter(["-rf", ""])
        assert result.allowed == ["-rf", ""]
        assert result.skipped == []

    def test_custom_normalizer(self):
        registry = ProtectedPathRegistry(["/DATA"])
        result = ArgumentFilter(registry, normalizer=str.upper).filter(["/data", "/tmp"])
        assert result.skipped == ["/data"]
        assert result.allowed == ["/TMP"]


class TestScenarios:
    """End-to-end filtering against loaded configuration."""

    def test_configured_glob(self, temp_dir: Path, protected_structure: Path):
        conf = temp_dir / "safe-rm.conf"
        conf.write_text(f"{protected_structure}/*\n")
        registry = load_registry([str(conf)])
        other = str(temp_dir / "file")

        result = ArgumentFilter(registry).filter([str(protected_structure / "secrets"), other])

        assert result.allowed == [other]
        assert result.skipped == [str(protected_structure / "secrets")]
        assert "/etc" not in registry

    def test_defaults_block_etc(self, temp_dir: Path):
        registry = load_registry([str(temp_dir / "missing.conf")])

        result = ArgumentFilter(registry).filter(["/etc/passwd", "/etc/", str(temp_dir / "file")])

        assert result.skipped == ["/etc/passwd", "/etc/"]
        assert result.allowed == [str(temp_dir / "file")]
