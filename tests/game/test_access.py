"""Unit tests for password gating."""

import pytest

from game.access import attempt_unlock, is_gated
from game.exceptions import AccessDeniedError, PathNotFoundError
from game.nodes import FileNode


class TestIsGated:
    def test_password_gates(self):
        assert is_gated(FileNode.directory("d", password="x")) is True

    def test_empty_password_does_not_gate(self):
        assert is_gated(FileNode.directory("d", password="")) is False
        assert is_gated(FileNode.directory("d")) is False


class TestAttemptUnlock:
    """Test attempt_unlock() outcomes."""

    def test_correct_secret_clears_password(self, small_fs):
        attempt_unlock(small_fs, ("vault",), "correctpass")

        vault = small_fs.lookup(("vault",))
        assert vault.password is None
        assert vault.is_locked is False

    def test_unlock_persists(self, small_fs):
        """Test a second attempt without a secret passes once unlocked."""
        attempt_unlock(small_fs, ("vault",), "correctpass")
        attempt_unlock(small_fs, ("vault",), None)

    def test_wrong_secret_denied(self, small_fs):
        before = small_fs.root

        with pytest.raises(AccessDeniedError) as exc_info:
            attempt_unlock(small_fs, ("vault",), "wrong")

        assert "password" in exc_info.value.message
        assert small_fs.root is before
        assert small_fs.lookup(("vault",)).is_locked is True

    def test_missing_secret_denied(self, small_fs):
        with pytest.raises(AccessDeniedError):
            attempt_unlock(small_fs, ("vault",), None)

    def test_ungated_node_passes_unchanged(self, small_fs):
        revision = small_fs.revision

        attempt_unlock(small_fs, ("docs",), "anything")

        assert small_fs.revision == revision

    def test_missing_node(self, small_fs):
        with pytest.raises(PathNotFoundError):
            attempt_unlock(small_fs, ("nowhere",), "x")
