"""Terminal endpoints: run commands and read what the terminal shows.

These are the only endpoints that feed player input into the game.
"""

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from api.dependencies import GameSessionDep
from api.models import TreeNodeView
from game.paths import to_display
from game.transcript import TranscriptEntry

router = APIRouter(
    prefix="/terminal",
    tags=["terminal"],
)


# Request/Response Models


class CommandRequest(BaseModel):
    """Request model for running one command line.

    Attributes:
        line: The text typed at the prompt.
    """

    line: str = Field(..., max_length=4096, description="Command line as typed")


class CommandResponse(BaseModel):
    """Response model for a command.

    Attributes:
        entries: Transcript entries the command added (input echo first).
        game_state: Phase after the command.
        current_path: Prompt path after the command.
    """

    entries: list[TranscriptEntry]
    game_state: str
    current_path: str


class HistoryResponse(BaseModel):
    """Response model for transcript reads.

    Attributes:
        entries: Entries from ``since`` onward.
        total: Total number of entries in the transcript.
    """

    entries: list[TranscriptEntry]
    total: int


# Route Handlers


@router.post("/command", response_model=CommandResponse)
async def run_command(request: CommandRequest, session: GameSessionDep):
    """Execute one command line.

    Shell errors (unknown command, wrong password, missing file) are
    reported as transcript lines with a 200 response. Submitting while the
    game is not PLAYING is rejected with 409.
    """
    entries = session.submit(request.line)
    return CommandResponse(
        entries=entries,
        game_state=session.phase.value,
        current_path=to_display(session.current_path),
    )


@router.get("/history", response_model=HistoryResponse)
async def get_history(
    session: GameSessionDep,
    since: int = Query(default=0, ge=0, description="Index of the first entry to return"),
):
    """Get transcript entries, optionally only those after an index.

    Clients poll this with ``since`` set to the total they last saw, to pick
    up lines added by delayed script resolutions.
    """
    entries = session.history(since)
    return HistoryResponse(entries=entries, total=len(session.transcript))


@router.get("/tree", response_model=TreeNodeView, response_model_exclude_none=True)
async def get_tree(session: GameSessionDep):
    """Get the file tree as far as the player has discovered it.

    Children appear only for directories that have been listed, and hidden
    nodes are never included.
    """
    return TreeNodeView.from_view(session.exposed_tree())
