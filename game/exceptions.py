"""Exception hierarchy for the terminal game core.

Shell errors are raised by command handlers and converted by the
CommandInterpreter into a single transcript line; they never escape it.
PersistenceError is raised by storage backends and swallowed (with a log
line) by PersistenceManager. GameStateError is the only error that reaches
callers of GameSession, and the API maps it to HTTP 409.
"""


class ShellError(Exception):
    """Base class for errors reported to the player as a transcript line.

    Args:
        message: The line printed to the terminal.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class PathNotFoundError(ShellError):
    """No node at the resolved path, or the node has the wrong kind."""


class AccessDeniedError(ShellError):
    """Wrong password, or an operation not permitted at the current path."""


class InvalidArgumentError(ShellError):
    """A required command argument is missing."""


class CommandNotFoundError(ShellError):
    """The verb is not recognized."""


class PersistenceError(Exception):
    """Durable storage could not be read or written.

    Args:
        message: Description of the failed operation.
        key: Storage key involved, if any.
    """

    def __init__(self, message: str, key: str | None = None):
        self.message = message
        self.key = key
        super().__init__(message)


class GameStateError(RuntimeError):
    """Operation not allowed in the current game phase.

    Args:
        message: Description of the rejected operation.
        phase: The phase the game was in.
    """

    def __init__(self, message: str, phase: str | None = None):
        self.message = message
        self.phase = phase
        super().__init__(message)
