from fastapi import APIRouter, Depends

from ..commands import execute_command
from ..dependencies import get_store
from ..schemas.command import CommandContext, CommandRequest, CommandResult
from ..store import EntityStore

router = APIRouter()


@router.post("/commands", response_model=CommandResult)
def run_command(request: CommandRequest, store: EntityStore = Depends(get_store)):
    """Execute one chat widget command line.

    The caller keeps the active project and sends it with every request;
    ``data.project`` from ``switch`` / ``new project`` is what it adopts.
    """
    context = CommandContext(current_project_id=request.current_project_id)
    return execute_command(request.input, context, store)
