"""Unit tests for FileSystemModel lookup and copy-on-write mutation."""

import pytest

from game.filesystem import FileSystemModel
from game.nodes import FileNode


class TestLookup:
    """Test lookup() and child()."""

    def test_root(self, small_fs):
        assert small_fs.lookup(()) is small_fs.root

    def test_nested(self, small_fs):
        node = small_fs.lookup(("vault", "inner", "deep.txt"))
        assert node.content == "deep"

    def test_missing_segment(self, small_fs):
        assert small_fs.lookup(("vault", "nope")) is None

    def test_through_a_file(self, small_fs):
        assert small_fs.lookup(("readme.txt", "x")) is None

    def test_hidden_nodes_are_found(self, small_fs):
        assert small_fs.lookup(("docs", "secret.txt")) is not None

    def test_child(self, small_fs):
        assert small_fs.child(("docs",), "guide.txt").content == "Read the manual."
        assert small_fs.child(("readme.txt",), "x") is None

    def test_root_must_be_a_directory(self):
        with pytest.raises(ValueError):
            FileSystemModel(FileNode.file("x"))


class TestMutate:
    """Test mutate() semantics."""

    def test_applies_patch(self, small_fs):
        assert small_fs.mutate(("docs", "secret.txt"), {"is_hidden": False}) is True
        assert small_fs.lookup(("docs", "secret.txt")).is_hidden is False

    def test_missing_path_changes_nothing(self, small_fs):
        before = small_fs.root
        revision = small_fs.revision

        assert small_fs.mutate(("docs", "missing.txt"), {"is_hidden": False}) is False
        assert small_fs.root is before
        assert small_fs.revision == revision

    def test_unknown_field_rejected(self, small_fs):
        before = small_fs.root

        with pytest.raises(ValueError, match="Cannot patch"):
            small_fs.mutate(("readme.txt",), {"name": "other.txt"})
        assert small_fs.root is before

    def test_structure_fields_rejected(self, small_fs):
        """Test children cannot be changed through a patch."""
        before = small_fs.root
        with pytest.raises(ValueError, match="Cannot patch"):
            small_fs.mutate(("readme.txt",), {"children": (FileNode.file("x"),)})
        assert small_fs.root is before

    def test_copy_on_write_keeps_sibling_identity(self, small_fs):
        """Test only the ancestor chain of a mutated node is rebuilt."""
        old_root = small_fs.root
        old_docs = old_root.get_child("docs")
        old_vault = old_root.get_child("vault")
        old_tools = old_root.get_child("tools")
        old_guide = old_docs.get_child("guide.txt")

        small_fs.mutate(("docs", "secret.txt"), {"is_hidden": False})

        new_root = small_fs.root
        assert new_root is not old_root
        assert new_root.get_child("docs") is not old_docs
        assert new_root.get_child("vault") is old_vault
        assert new_root.get_child("tools") is old_tools
        assert new_root.get_child("docs").get_child("guide.txt") is old_guide

    def test_previous_version_is_untouched(self, small_fs):
        old_root = small_fs.root
        small_fs.mutate(("vault",), {"password": None})

        assert old_root.get_child("vault").password == "correctpass"
        assert small_fs.lookup(("vault",)).password is None


class TestStructureChanges:
    """Test add_child() and delete_child()."""

    def test_add_child(self, small_fs):
        assert small_fs.add_child(("home", "user"), FileNode.file("a.txt")) is True
        assert small_fs.child(("home", "user"), "a.txt") is not None

    def test_add_child_refuses_duplicates(self, small_fs):
        assert small_fs.add_child(("docs",), FileNode.file("guide.txt")) is False

    def test_add_child_refuses_file_parent(self, small_fs):
        assert small_fs.add_child(("readme.txt",), FileNode.file("x")) is False

    def test_add_child_refuses_missing_parent(self, small_fs):
        assert small_fs.add_child(("nope",), FileNode.file("x")) is False

    def test_delete_child(self, small_fs):
        assert small_fs.delete_child(("docs",), "guide.txt") is True
        assert small_fs.child(("docs",), "guide.txt") is None

    def test_delete_missing_child(self, small_fs):
        assert small_fs.delete_child(("docs",), "nope") is False

    def test_replace_root(self, small_fs):
        new_root = FileNode.directory("/", [FileNode.file("only.txt")])
        small_fs.replace_root(new_root)

        assert small_fs.root is new_root
        assert small_fs.validate() == []
