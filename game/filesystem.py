"""FileSystemModel - sole owner of the virtual filesystem tree."""

import logging
from typing import Any, Callable, Optional

from game.nodes import FileNode, NodeKind
from game.paths import NodePath, to_display

logger = logging.getLogger(__name__)

# Fields a patch may touch. Structure (children) changes go through
# add_child()/delete_child() so sibling-name uniqueness is always checked.
PATCHABLE_FIELDS = frozenset(
    {"content", "is_hidden", "password", "is_evidence", "script_action"}
)


class FileSystemModel:
    """Holds the root directory and exposes lookup and mutation.

    Every mutation replaces the root with a new value. Only the mutated node
    and its ancestors are copied; every other subtree is shared with the
    previous version, so renderers that key on object identity see untouched
    branches as unchanged.

    Resolution happens before any copy is made, so a mutation on a path that
    does not resolve leaves the tree exactly as it was.

    Attributes:
        root: The current root directory node.
        revision: Number of committed mutations.
    """

    def __init__(self, root: FileNode) -> None:
        if root.kind != NodeKind.DIRECTORY:
            raise ValueError("Filesystem root must be a directory")
        self._root = root
        self.revision = 0

    @property
    def root(self) -> FileNode:
        return self._root

    def lookup(self, path: NodePath) -> Optional[FileNode]:
        """Return the node at ``path``, or None if nothing is there.

        Args:
            path: Absolute path (tuple of segments).

        Returns:
            The node, or None when any segment is missing or a non-directory
            is traversed.
        """
        current = self._root
        for segment in path:
            if current.kind != NodeKind.DIRECTORY:
                return None
            current = current.get_child(segment)
            if current is None:
                return None
        return current

    def child(self, path: NodePath, name: str) -> Optional[FileNode]:
        """Return the child ``name`` of the directory at ``path``, hidden or not."""
        parent = self.lookup(path)
        if parent is None or parent.kind != NodeKind.DIRECTORY:
            return None
        return parent.get_child(name)

    def exists(self, path: NodePath) -> bool:
        return self.lookup(path) is not None

    def mutate(self, path: NodePath, patch: dict[str, Any]) -> bool:
        """Apply a partial update to the node at ``path``.

        Args:
            path: Absolute path of the node to update.
            patch: Field names mapped to new values.

        Returns:
            True if the node was updated, False if the path does not resolve.

        Raises:
            ValueError: If the patch touches a non-patchable field or the
                result violates node invariants. The tree is left unchanged.
        """
        unknown = set(patch) - PATCHABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot patch fields: {sorted(unknown)}")

        target = self.lookup(path)
        if target is None:
            return False

        updated = target.model_copy(update=patch)
        problems = updated.validate_node()
        if problems:
            raise ValueError(f"Invalid patch for {to_display(path)}: {problems}")

        self._commit(path, lambda _node: updated)
        logger.debug(f"Patched {to_display(path)} with {sorted(patch)}")
        return True

    def add_child(self, parent_path: NodePath, node: FileNode) -> bool:
        """Append ``node`` to the directory at ``parent_path``.

        Returns:
            True if added; False if the parent is missing, is not a
            directory, or already has a child with that name.
        """
        parent = self.lookup(parent_path)
        if parent is None or parent.kind != NodeKind.DIRECTORY:
            return False
        if parent.get_child(node.name) is not None:
            return False

        self._commit(
            parent_path,
            lambda current: current.model_copy(
                update={"children": current.children + (node,)}
            ),
        )
        logger.debug(f"Added {node.name} under {to_display(parent_path)}")
        return True

    def delete_child(self, parent_path: NodePath, name: str) -> bool:
        """Remove the child ``name`` from the directory at ``parent_path``.

        Returns:
            True if removed, False if the parent or child does not exist.
        """
        parent = self.lookup(parent_path)
        if parent is None or parent.kind != NodeKind.DIRECTORY:
            return False
        index = parent.child_index(name)
        if index < 0:
            return False

        self._commit(
            parent_path,
            lambda current: current.model_copy(
                update={"children": current.children[:index] + current.children[index + 1:]}
            ),
        )
        logger.debug(f"Deleted {name} from {to_display(parent_path)}")
        return True

    def replace_root(self, root: FileNode) -> None:
        """Swap in a whole new tree (used when loading a save or checkpoint)."""
        if root.kind != NodeKind.DIRECTORY:
            raise ValueError("Filesystem root must be a directory")
        self._root = root
        self.revision += 1

    def validate(self) -> list[str]:
        """Check invariants across the whole tree.

        Returns:
            List of problems with their paths (empty if valid).
        """
        errors = []
        stack: list[tuple[NodePath, FileNode]] = [((), self._root)]
        while stack:
            path, node = stack.pop()
            for problem in node.validate_node():
                errors.append(f"{to_display(path)}: {problem}")
            for child in node.children:
                stack.append((path + (child.name,), child))
        return errors

    def _commit(self, path: NodePath, change: Callable[[FileNode], FileNode]) -> None:
        """Rebuild the ancestor chain of ``path`` around the changed node.

        The caller has already checked that ``path`` resolves.
        """
        self._root = self._rebuild(self._root, path, change)
        self.revision += 1

    def _rebuild(
        self,
        node: FileNode,
        path: NodePath,
        change: Callable[[FileNode], FileNode],
    ) -> FileNode:
        if not path:
            return change(node)

        index = node.child_index(path[0])
        new_child = self._rebuild(node.children[index], path[1:], change)
        children = node.children[:index] + (new_child,) + node.children[index + 1:]
        return node.model_copy(update={"children": children})
