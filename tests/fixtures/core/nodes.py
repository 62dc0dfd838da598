"""Fixtures for filesystem trees."""

import pytest

from game.filesystem import FileSystemModel
from game.nodes import FileNode, ScriptAction


def create_small_tree() -> FileNode:
    """Build a compact tree covering every node feature.

    Layout::

        /
        ├── readme.txt
        ├── home/user/                 (evidence intake, empty)
        ├── docs/
        │   ├── guide.txt
        │   ├── secret.txt             hidden, evidence
        │   ├── private/               hidden directory
        │   │   └── note.txt
        │   ├── strongbox/             hidden, password "box"
        │   └── seconddemo.sh          hidden, CRACK script
        ├── vault/                     password "correctpass"
        │   ├── treasure.txt           evidence
        │   └── inner/deep.txt
        ├── empty/
        └── tools/
            ├── alarm.sh               ALARM script
            ├── disguise.sh            DISGUISE script
            └── sealed.txt             file with an (inert) password
    """
    return FileNode.directory(
        "/",
        [
            FileNode.file("readme.txt", "Welcome aboard."),
            FileNode.directory("home", [FileNode.directory("user")]),
            FileNode.directory(
                "docs",
                [
                    FileNode.file("guide.txt", "Read the manual."),
                    FileNode.file(
                        "secret.txt", "the secret", is_hidden=True, is_evidence=True
                    ),
                    FileNode.directory(
                        "private",
                        [FileNode.file("note.txt", "private note")],
                        is_hidden=True,
                    ),
                    FileNode.directory("strongbox", is_hidden=True, password="box"),
                    FileNode.file(
                        "seconddemo.sh",
                        "crack helper",
                        is_hidden=True,
                        script_action=ScriptAction.CRACK,
                    ),
                ],
            ),
            FileNode.directory(
                "vault",
                [
                    FileNode.file("treasure.txt", "gold", is_evidence=True),
                    FileNode.directory("inner", [FileNode.file("deep.txt", "deep")]),
                ],
                password="correctpass",
            ),
            FileNode.directory("empty"),
            FileNode.directory(
                "tools",
                [
                    FileNode.file("alarm.sh", "dial out", script_action=ScriptAction.ALARM),
                    FileNode.file(
                        "disguise.sh", "pack it", script_action=ScriptAction.DISGUISE
                    ),
                    FileNode.file("sealed.txt", "not really sealed", password="nope"),
                ],
            ),
        ],
    )


@pytest.fixture
def small_tree() -> FileNode:
    """Provide the compact test tree."""
    return create_small_tree()


@pytest.fixture
def small_fs(small_tree) -> FileSystemModel:
    """Provide a FileSystemModel over the compact test tree."""
    return FileSystemModel(small_tree)
