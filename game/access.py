"""Password gating for filesystem nodes."""

import logging

from game.exceptions import AccessDeniedError, PathNotFoundError
from game.filesystem import FileSystemModel
from game.nodes import FileNode
from game.paths import NodePath, to_display

logger = logging.getLogger(__name__)


def is_gated(node: FileNode) -> bool:
    """A node is gated while it carries a non-empty password."""
    return bool(node.password)


def attempt_unlock(fs: FileSystemModel, path: NodePath, secret: str | None) -> None:
    """Try to open the gated node at ``path`` with ``secret``.

    On a match the password is cleared through FileSystemModel.mutate(), so
    the node stays open for the rest of the session. Ungated nodes pass
    without any change.

    Args:
        fs: The filesystem that owns the node.
        path: Absolute path of the node.
        secret: The secret supplied by the player (may be None).

    Raises:
        PathNotFoundError: If nothing exists at ``path``.
        AccessDeniedError: If the secret does not match. The node is unchanged.
    """
    node = fs.lookup(path)
    if node is None:
        raise PathNotFoundError(f"Directory not found: {to_display(path)}")

    if not is_gated(node):
        return

    if secret != node.password:
        logger.debug(f"Unlock rejected for {to_display(path)}")
        raise AccessDeniedError(
            f"Access denied: a password is required to open {node.name}"
        )

    fs.mutate(path, {"password": None})
    logger.info(f"Unlocked {to_display(path)}")
