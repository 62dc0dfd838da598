"""Story content and fixed game constants.

The default tree itself is data (``data/default_tree.json``); this module
only loads it and names the constants the rules depend on.
"""

from pathlib import Path
from typing import Optional

from game.nodes import FileNode
from game.paths import NodePath

DEFAULT_TREE_PATH = Path(__file__).parent / "data" / "default_tree.json"

# Directory that collected evidence is cloned into, and the only place rm works.
EVIDENCE_INTAKE_PATH: NodePath = ("home", "user")

REQUIRED_EVIDENCE = (
    "evidence_1.txt",
    "chen_bing-liu_qingyuan",
    "evidence_3.txt",
    "evidence_5.txt",
    "evidence_6.txt",
    "evidence_8.txt",
)
FORBIDDEN_EVIDENCE = ("evidence_4.txt", "evidence_7.txt")
MIN_EVIDENCE_FOR_DISGUISE = 6

# Only these literal names are runnable with ./<name>.
SCRIPT_FILENAMES = ("disguise.sh", "alarm.sh", "seconddemo.sh")

CRACK_SECRET = "fygr5673o"

BOOT_STEPS = (
    "Initializing Kernel...",
    "Loading Drivers...",
    "Mounting File System...",
    "Checking Memory...",
    "System OK.",
    "Welcome to Linux Terminal OS v0.9.2",
)
BOOT_STEP_DELAY_RANGE = (0.3, 0.8)
BOOT_COMPLETE_DELAY = 0.8
BOOT_READY_MESSAGE = "Connection established. Type 'help' to see available commands."

ALARM_DELAY = 1.0
CRACK_DELAY = 1.5
DISGUISE_DELAY = 2.0

HELP_TEXT = """Available commands:
  help                    show this list
  ls                      list files in the current directory
  cd <dir> [password]     enter a directory (encrypted folders need a password)
  cd ..                   go up one level
  cat <file>              show a file's contents
  search <name>           look for a hidden file in the current directory
  rm <file>               delete a file (only works in /home/user)
  ./<script>.sh           run a script file"""


def load_default_tree(path: Optional[Path] = None) -> FileNode:
    """Load the starting filesystem tree.

    Args:
        path: Alternate JSON file (defaults to the bundled tree).

    Returns:
        Root directory node.

    Raises:
        OSError: If the file cannot be read.
        pydantic.ValidationError: If the JSON is not a valid tree.
    """
    source = path or DEFAULT_TREE_PATH
    return FileNode.model_validate_json(source.read_text(encoding="utf-8"))
