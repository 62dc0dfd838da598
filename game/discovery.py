"""Tracks which directories the player has listed."""

from typing import Any, Iterable, Optional

from game.nodes import FileNode
from game.paths import ROOT, NodePath, join, to_display


class DiscoveryTracker:
    """Set of display-form paths that have been listed with ``ls``.

    Discovery is per directory: listing ``/a`` exposes the children of ``/a``
    but not the children of ``/a/b``. Entering a directory never discovers it.

    Args:
        paths: Initially discovered display paths.
    """

    def __init__(self, paths: Optional[Iterable[str]] = None) -> None:
        self._paths: set[str] = set(paths) if paths is not None else {to_display(ROOT)}

    def mark(self, path: NodePath) -> bool:
        """Mark ``path`` as discovered.

        Returns:
            True if the path was not discovered before.
        """
        display = to_display(path)
        if display in self._paths:
            return False
        self._paths.add(display)
        return True

    def is_discovered(self, path: NodePath) -> bool:
        return to_display(path) in self._paths

    def paths(self) -> list[str]:
        """Discovered paths, sorted for stable serialization."""
        return sorted(self._paths)

    def reset(self, paths: Iterable[str]) -> None:
        self._paths = set(paths)

    def exposed_tree(self, root: FileNode) -> dict[str, Any]:
        """Build the tree view a sidebar renderer is allowed to show.

        Every node carries ``name``, ``type``, ``path`` and ``isLocked``.
        Directories carry ``children`` only when their own path is discovered,
        and hidden children are never included.

        Args:
            root: Root of the current filesystem tree.

        Returns:
            Nested dictionary suitable for JSON responses.
        """
        return self._expose(root, ROOT)

    def _expose(self, node: FileNode, path: NodePath) -> dict[str, Any]:
        view: dict[str, Any] = {
            "name": node.name,
            "type": node.kind.value,
            "path": to_display(path),
            "isLocked": node.is_locked,
        }
        if node.is_directory:
            view["discovered"] = self.is_discovered(path)
            if view["discovered"]:
                view["children"] = [
                    self._expose(child, join(path, child.name))
                    for child in node.visible_children()
                ]
        return view
