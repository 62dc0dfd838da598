"""Command interpreter: one handler per verb.

Handlers share one signature, ``handler(command) -> list[OutputLine]``. They
read and change session state through the FileSystemModel and the trackers,
and report failures by raising ShellError subclasses. execute() turns those
errors into a single output line, so nothing a player types can raise past
the interpreter.
"""

import logging
from typing import TYPE_CHECKING, Callable

from game.access import attempt_unlock, is_gated
from game.commands import Command, Verb, parse_command
from game.content import EVIDENCE_INTAKE_PATH, HELP_TEXT
from game.exceptions import (
    AccessDeniedError,
    CommandNotFoundError,
    InvalidArgumentError,
    PathNotFoundError,
    ShellError,
)
from game.nodes import FileNode
from game.paths import ROOT, join, resolve, to_display
from game.transcript import EntryKind, OutputLine, TranscriptEntry

if TYPE_CHECKING:
    from game.session import GameSession

logger = logging.getLogger(__name__)

Handler = Callable[[Command], list[OutputLine]]


class CommandInterpreter:
    """Parses input lines and dispatches them to verb handlers.

    Args:
        session: The session whose state the handlers act on.
    """

    def __init__(self, session: "GameSession") -> None:
        self.session = session
        self._handlers: dict[Verb, Handler] = {
            Verb.HELP: self._help,
            Verb.LIST: self._list,
            Verb.ENTER: self._enter,
            Verb.READ: self._read,
            Verb.FIND: self._find,
            Verb.REMOVE: self._remove,
            Verb.RUN: self._run,
            Verb.UNKNOWN: self._unknown,
        }

    def execute(self, line: str) -> list[TranscriptEntry]:
        """Run one input line and record it in the transcript.

        Returns:
            The transcript entries added: the input echo first, then output.
            Empty for a blank line.
        """
        command = parse_command(line)
        if command is None:
            return []

        transcript = self.session.transcript
        entries = [
            transcript.append(
                EntryKind.INPUT,
                command.raw,
                path=to_display(self.session.current_path),
            )
        ]

        try:
            lines = self._handlers[command.verb](command)
        except ShellError as e:
            logger.debug(f"{command.name}: {type(e).__name__}: {e.message}")
            lines = [(EntryKind.OUTPUT, e.message)]

        entries.extend(transcript.extend(lines))
        return entries

    # ===== Handlers =====

    def _help(self, command: Command) -> list[OutputLine]:
        return [(EntryKind.OUTPUT, HELP_TEXT)]

    def _list(self, command: Command) -> list[OutputLine]:
        cwd = self.session.current_path
        node = self.session.fs.lookup(cwd)
        if node is None or not node.is_directory:
            return []

        self.session.discovery.mark(cwd)

        visible = [
            f"[DIR] {child.name}" if child.is_directory else child.name
            for child in node.visible_children()
        ]
        if not visible:
            return [(EntryKind.OUTPUT, "(empty directory)")]
        return [(EntryKind.OUTPUT, "\n".join(visible))]

    def _enter(self, command: Command) -> list[OutputLine]:
        target_arg = command.arg(0)
        if target_arg is None:
            self.session.current_path = ROOT
            return []

        target = resolve(target_arg, self.session.current_path)
        node = self.session.fs.lookup(target)
        if node is None or not node.is_directory:
            raise PathNotFoundError(f"Directory not found: {target_arg}")

        # Hidden directories can still be entered by anyone who knows the path.
        attempt_unlock(self.session.fs, target, command.arg(1))
        self.session.current_path = target
        return []

    def _read(self, command: Command) -> list[OutputLine]:
        name = command.arg(0)
        if name is None:
            raise InvalidArgumentError("Usage: cat <filename>")

        fs = self.session.fs
        cwd = self.session.current_path
        node = fs.lookup(resolve(name, cwd))
        if node is None or not node.is_file:
            node = fs.child(cwd, name)

        if node is None or not node.is_file:
            raise PathNotFoundError(f"File not found: {name}")
        if node.is_hidden:
            raise PathNotFoundError(f"File not found: {name} (it may be hidden)")

        # A password on a file does not gate reading; only directories are gated.
        lines = self._collect_evidence(node)
        if node.script_action is not None:
            lines.extend(self.session.scripts.trigger(node.script_action))
        else:
            lines.append((EntryKind.OUTPUT, node.content or ""))
        return lines

    def _find(self, command: Command) -> list[OutputLine]:
        name = command.arg(0)
        if name is None:
            raise InvalidArgumentError("Usage: search <filename>")

        fs = self.session.fs
        cwd = self.session.current_path
        found = fs.child(cwd, name)
        if found is None:
            return [(EntryKind.OUTPUT, "No hidden file with that name")]
        if not found.is_hidden:
            return [(EntryKind.OUTPUT, f"File {found.name} already exists")]

        child_path = join(cwd, found.name)
        fs.mutate(child_path, {"is_hidden": False})
        found = fs.lookup(child_path)
        lines: list[OutputLine] = [(EntryKind.SYSTEM, f"Found hidden file: {found.name}")]

        if is_gated(found):
            action = "enter" if found.is_directory else "open"
            lines.append(
                (EntryKind.OUTPUT, f"A password is required to {action} {found.name}")
            )
        elif found.is_directory:
            self.session.current_path = child_path
            lines.append((EntryKind.SYSTEM, f"Entered: {found.name}"))
        elif found.script_action is not None:
            lines.append(
                (
                    EntryKind.OUTPUT,
                    f"Found script file: {found.name}\n"
                    f"Content: {found.content or '(script)'}\n"
                    f"Run it with ./{found.name}",
                )
            )
        else:
            lines.append((EntryKind.OUTPUT, found.content or ""))
            lines.extend(self._collect_evidence(found))
        return lines

    def _remove(self, command: Command) -> list[OutputLine]:
        name = command.arg(0)
        if name is None:
            raise InvalidArgumentError("Usage: rm <filename>")

        cwd = self.session.current_path
        if tuple(cwd) != EVIDENCE_INTAKE_PATH:
            raise AccessDeniedError(
                f"Permission denied: rm only works in {to_display(EVIDENCE_INTAKE_PATH)}, "
                "where evidence is managed."
            )

        if not self.session.fs.delete_child(cwd, name):
            raise PathNotFoundError(f"File not found: {name}")

        self.session.evidence.remove(name)
        return [(EntryKind.OUTPUT, f"File {name} deleted.")]

    def _run(self, command: Command) -> list[OutputLine]:
        script_name = command.script_name
        node = self.session.fs.child(self.session.current_path, script_name)
        if node is None or node.script_action is None:
            raise PathNotFoundError(f"Script not found: {script_name}")
        return self.session.scripts.trigger(node.script_action)

    def _unknown(self, command: Command) -> list[OutputLine]:
        raise CommandNotFoundError(f"Command not found: {command.name}")

    # ===== Helpers =====

    def _collect_evidence(self, node: FileNode) -> list[OutputLine]:
        """Record evidence on first read and clone it into the intake directory."""
        if not node.is_evidence or not self.session.evidence.collect(node.name):
            return []

        intake = self.session.fs.lookup(EVIDENCE_INTAKE_PATH)
        if intake is not None and intake.get_child(node.name) is None:
            clone = node.model_copy(update={"is_evidence": False, "is_hidden": False})
            self.session.fs.add_child(EVIDENCE_INTAKE_PATH, clone)

        logger.info(f"Evidence collected: {node.name}")
        return [
            (
                EntryKind.SYSTEM,
                f"Evidence collected: {node.name} saved to {to_display(EVIDENCE_INTAKE_PATH)}/",
            )
        ]
