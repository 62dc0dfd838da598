"""Path resolution for the virtual filesystem.

A path is a tuple of segment names from the root; the root is the empty
tuple. Resolution is purely syntactic and never consults the tree, so it
always succeeds. Whether anything exists at the result is a separate
question answered by FileSystemModel.lookup().
"""

NodePath = tuple[str, ...]

ROOT: NodePath = ()


def resolve(token: str, current: NodePath) -> NodePath:
    """Turn a command-line target into an absolute path.

    Rules, in priority order:
        - ``/`` is the root.
        - ``..`` is the parent of ``current`` (the root is its own parent).
        - A token starting with ``/`` is absolute; empty segments are dropped.
        - Anything else is appended to ``current`` as a single segment.

    Args:
        token: The target as typed by the player.
        current: The current directory.

    Returns:
        The resolved absolute path.
    """
    if token == "/":
        return ROOT
    if token == "..":
        return tuple(current[:-1])
    if token.startswith("/"):
        return from_display(token)
    return tuple(current) + (token,)


def from_display(text: str) -> NodePath:
    """Parse a display-form path (``/a/b``) into segments."""
    return tuple(segment for segment in text.split("/") if segment)


def to_display(path: NodePath) -> str:
    """Render a path for display; the root renders as ``/``."""
    segments = [segment for segment in path if segment]
    return "/" + "/".join(segments)


def parent(path: NodePath) -> NodePath:
    """Return the parent path (the root's parent is the root)."""
    return tuple(path[:-1])


def join(path: NodePath, name: str) -> NodePath:
    """Return the path of a child named ``name`` under ``path``."""
    return tuple(path) + (name,)
