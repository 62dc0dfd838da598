"""Command tokenizing into a closed set of verbs."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from game.content import SCRIPT_FILENAMES

SCRIPT_PREFIX = "./"


class Verb(str, Enum):
    """Every command the interpreter knows, plus UNKNOWN."""

    HELP = "help"
    LIST = "ls"
    ENTER = "cd"
    READ = "cat"
    FIND = "search"
    REMOVE = "rm"
    RUN = "run"
    UNKNOWN = "unknown"


_VERBS_BY_NAME = {
    verb.value: verb for verb in Verb if verb not in (Verb.RUN, Verb.UNKNOWN)
}


class Command(BaseModel):
    """A tokenized command line.

    Args:
        verb: The recognized verb (UNKNOWN if not recognized).
        name: The first token exactly as typed.
        args: Remaining whitespace-separated tokens.
        raw: The whole line, stripped.
    """

    verb: Verb = Field(description="Recognized verb")
    name: str = Field(description="First token as typed")
    args: list[str] = Field(default_factory=list, description="Remaining tokens")
    raw: str = Field(description="The stripped input line")

    class Config:
        frozen = True

    @property
    def script_name(self) -> Optional[str]:
        """File name for RUN commands (``./alarm.sh`` -> ``alarm.sh``)."""
        if self.verb != Verb.RUN:
            return None
        return self.name[len(SCRIPT_PREFIX):]

    def arg(self, index: int) -> Optional[str]:
        """Argument at ``index``, or None if absent."""
        return self.args[index] if index < len(self.args) else None


def parse_command(line: str) -> Optional[Command]:
    """Split a line on whitespace into a Command.

    ``./<name>`` is only a RUN command for the fixed set of script file
    names; any other ``./`` token is UNKNOWN.

    Returns:
        The command, or None for a blank line.
    """
    tokens = line.split()
    if not tokens:
        return None

    name, args = tokens[0], tokens[1:]

    if name.startswith(SCRIPT_PREFIX) and name[len(SCRIPT_PREFIX):] in SCRIPT_FILENAMES:
        verb = Verb.RUN
    else:
        verb = _VERBS_BY_NAME.get(name, Verb.UNKNOWN)

    return Command(verb=verb, name=name, args=args, raw=line.strip())
