from pydantic import BaseModel
from typing import Any, Dict, Optional

class CommandContext(BaseModel):
    """Per-session state sent by the caller with every command."""
    current_project_id: Optional[str] = None

class CommandRequest(BaseModel):
    input: str
    current_project_id: Optional[str] = None

class CommandResult(BaseModel):
    """Outcome of one command line.

    ``data`` carries JSON-ready payloads such as ``project``, ``task`` or the
    UI signals ``celebrate`` and ``clear``.
    """
    success: bool
    message: str
    data: Optional[Dict[str, Any]] = None
