"""Virtual filesystem node model."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, computed_field, model_validator
from pydantic.alias_generators import to_camel


class NodeKind(str, Enum):
    """Kind of a filesystem node."""

    FILE = "FILE"
    DIRECTORY = "DIRECTORY"


class ScriptAction(str, Enum):
    """Scripted behavior attached to a file."""

    ALARM = "ALARM_SCRIPT"
    CRACK = "CRACK_SCRIPT"
    DISGUISE = "DISGUISE_SCRIPT"


class FileNode(BaseModel):
    """A node in the virtual filesystem tree.

    Nodes are immutable. FileSystemModel produces updated copies with
    ``model_copy`` and rebuilds only the ancestor chain of a mutated node, so
    untouched subtrees keep their identity between tree versions.

    Args:
        name: Node name, unique among its siblings.
        kind: FILE or DIRECTORY (serialized as ``type``).
        content: Text content, meaningful only for files.
        children: Ordered child nodes, meaningful only for directories.
        is_hidden: Whether listing and enumeration skip this node.
        password: If non-empty, the node is gated behind this secret.
        is_evidence: Whether reading this file collects it as evidence.
        script_action: Scripted behavior triggered by reading or running it.
    """

    name: str = Field(description="Node name, unique among siblings")
    kind: NodeKind = Field(alias="type", description="FILE or DIRECTORY")
    content: Optional[str] = Field(default=None, description="File text content")
    children: tuple["FileNode", ...] = Field(
        default=(), description="Ordered child nodes (directories only)"
    )
    is_hidden: bool = Field(default=False, description="Hidden until revealed")
    password: Optional[str] = Field(
        default=None, description="Secret required to open the node"
    )
    is_evidence: bool = Field(default=False, description="Collectible story evidence")
    script_action: Optional[ScriptAction] = Field(
        default=None, description="Scripted behavior tag"
    )

    class Config:
        frozen = True
        alias_generator = to_camel
        populate_by_name = True

    @computed_field
    @property
    def is_locked(self) -> bool:
        """Whether the node is currently gated (mirrors ``password``)."""
        return bool(self.password)

    @model_validator(mode="after")
    def check_structure(self) -> "FileNode":
        """Reject files with children and duplicate sibling names."""
        problems = self.validate_node()
        if problems:
            raise ValueError("; ".join(problems))
        return self

    @classmethod
    def file(cls, name: str, content: Optional[str] = None, **fields: Any) -> "FileNode":
        """Build a FILE node."""
        return cls(name=name, kind=NodeKind.FILE, content=content, **fields)

    @classmethod
    def directory(
        cls, name: str, children: Optional[list["FileNode"]] = None, **fields: Any
    ) -> "FileNode":
        """Build a DIRECTORY node."""
        return cls(
            name=name,
            kind=NodeKind.DIRECTORY,
            children=tuple(children or ()),
            **fields,
        )

    @property
    def is_directory(self) -> bool:
        return self.kind == NodeKind.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.kind == NodeKind.FILE

    def get_child(self, name: str) -> Optional["FileNode"]:
        """Return the child with this exact name, hidden or not."""
        for child in self.children:
            if child.name == name:
                return child
        return None

    def child_index(self, name: str) -> int:
        """Return the position of a child by name, or -1."""
        for index, child in enumerate(self.children):
            if child.name == name:
                return index
        return -1

    def visible_children(self) -> list["FileNode"]:
        """Children that are not hidden, in order."""
        return [child for child in self.children if not child.is_hidden]

    def validate_node(self) -> list[str]:
        """Check this node's own structural invariants.

        Returns:
            List of problems (empty if the node is valid).
        """
        errors = []

        if self.kind == NodeKind.FILE and self.children:
            errors.append(f"File '{self.name}' cannot have children")

        seen = set()
        for child in self.children:
            if child.name in seen:
                errors.append(
                    f"Directory '{self.name}' has duplicate child name '{child.name}'"
                )
            seen.add(child.name)

        return errors
