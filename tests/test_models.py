"""
Tests for domain models: requests, results, snapshots, blocks.
"""

import pytest
from pydantic import ValidationError

from shellenv.core.models import (
    EnvironmentSnapshot,
    MarkedBlock,
    ProvisionRequest,
    ProvisionResult,
    ShellDialect,
)


class TestProvisionRequest:
    """Tests for the ProvisionRequest model."""

    def test_defaults(self):
        """Defaults: one placeholder, label from the name."""
        req = ProvisionRequest(variable_name="A")
        assert req.placeholder_values == frozenset({"<API_KEY>"})
        assert req.marker_label == "A"
        assert req.lookup_settings() is None

    @pytest.mark.parametrize("raw,expected", [
        (None, None),
        ("", None),
        ("   ", None),
        ("<API_KEY>", None),
        (" <API_KEY> ", None),
        (" abc ", "abc"),
    ])
    def test_normalize(self, raw, expected):
        """Blank and placeholder values normalize to None."""
        assert ProvisionRequest(variable_name="A").normalize(raw) == expected

    def test_lookup_is_normalized(self):
        """Settings values go through the same normalization."""
        req = ProvisionRequest(variable_name="A", settings_lookup=lambda: " <API_KEY> ")
        assert req.lookup_settings() is None

    def test_frozen(self):
        req = ProvisionRequest(variable_name="A")
        with pytest.raises(ValidationError):
            req.desired_value = "x"

    def test_lookup_excluded_from_dump(self):
        """The lookup callable is not serialized."""
        req = ProvisionRequest(variable_name="A", settings_lookup=lambda: "x")
        assert "settings_lookup" not in req.model_dump()


class TestProvisionResult:
    """Tests for ProvisionResult constructors."""

    def test_updated(self, tmp_path):
        """Updated results carry the reload hint in the message."""
        r = ProvisionResult.updated("A", path=tmp_path / ".zshrc", reload_hint="source ~/.zshrc")
        assert r.ok and r.changed and not r.failed
        assert r.message == "Run: source ~/.zshrc"

    def test_skipped(self):
        """Skips are ok but not changes."""
        r = ProvisionResult.skipped("A", "A already set in environment")
        assert r.ok and not r.changed
        assert r.path is None

    def test_failure(self):
        """Failures are not ok."""
        r = ProvisionResult.failure("A", "boom", dialect=ShellDialect.UNKNOWN)
        assert r.failed and not r.ok
        assert r.to_dict()["dialect"] == "unknown"


class TestEnvironmentSnapshot:
    """Tests for EnvironmentSnapshot."""

    def test_capture(self, monkeypatch):
        """capture() reads the live process environment."""
        monkeypatch.setenv("SHELLENV_TEST_MARKER", "1")
        snap = EnvironmentSnapshot.capture()
        assert snap.get("SHELLENV_TEST_MARKER") == "1"

    def test_capture_is_a_copy(self, monkeypatch):
        """Later changes to the process do not leak in."""
        snap = EnvironmentSnapshot.capture()
        monkeypatch.setenv("SHELLENV_TEST_LATE", "1")
        assert snap.get("SHELLENV_TEST_LATE") is None

    def test_get_ignores_case_on_windows(self, tmp_path):
        """Windows lookups fold case."""
        snap = EnvironmentSnapshot(platform="win32", environ={"PSMODULEPATH": "C:\\M"}, home=tmp_path)
        assert snap.get("PSModulePath") == "C:\\M"
        assert snap.get("psmodulepath") == "C:\\M"

    def test_get_is_case_sensitive_elsewhere(self, tmp_path):
        """POSIX lookups keep case."""
        snap = EnvironmentSnapshot(platform="linux", environ={"SHELL": "/bin/zsh"}, home=tmp_path)
        assert snap.get("shell") is None
        assert snap.get("shell", "x") == "x"

    def test_is_windows(self, tmp_path):
        assert EnvironmentSnapshot(platform="win32", home=tmp_path).is_windows is True
        assert EnvironmentSnapshot(platform="darwin", home=tmp_path).is_windows is False


class TestMarkedBlock:
    """Tests for MarkedBlock."""

    def test_text(self):
        """The block text is three lines."""
        b = MarkedBlock(start_marker="# s", end_marker="# e", body_line="export A=\"1\"")
        assert b.text == "# s\nexport A=\"1\"\n# e"
