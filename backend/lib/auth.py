"""
Workspace resolution and route guards
"""
from functools import partial

from fastapi import Depends, HTTPException

from career_advisor.advisor import CareerAdvisor, Workspace
from career_advisor.career_ai import CareerAI
from career_advisor.config import AdvisorSettings
from .supabase_client import supabase_backend

_advisor: CareerAdvisor = None


def get_settings() -> AdvisorSettings:
    return AdvisorSettings.from_env()


def get_advisor() -> CareerAdvisor:
    """Get or create the CareerAdvisor singleton"""
    global _advisor

    if _advisor is None:
        settings = get_settings()
        _advisor = CareerAdvisor(
            ai=CareerAI(settings),
            backend_factory=partial(supabase_backend, settings),
            max_workspaces=settings.max_workspaces,
            idle_minutes=settings.workspace_idle_minutes,
        )

    return _advisor


async def shutdown_advisor():
    """Close the workspaces of the singleton, if it was ever created"""
    if _advisor is not None:
        await _advisor.shutdown()


async def create_workspace(advisor: CareerAdvisor = Depends(get_advisor)) -> Workspace:
    """
    Open a workspace for a new browser session

    Raises:
        HTTPException: 503 if the data store is not configured
    """
    try:
        return await advisor.create_workspace()
    except ValueError as e:
        raise HTTPException(status_code=503, detail=str(e))


async def get_workspace(session_id: str, advisor: CareerAdvisor = Depends(get_advisor)) -> Workspace:
    """
    Resolve the workspace of the browser session in the request path

    Raises:
        HTTPException: 404 if the session id was never issued or has expired
    """
    workspace = await advisor.get_workspace(session_id)
    if workspace is None:
        raise HTTPException(status_code=404, detail="Unknown or expired session")
    return workspace


async def require_user(workspace: Workspace = Depends(get_workspace)) -> Workspace:
    """
    Guard for pages that need a signed-in user

    Raises:
        HTTPException: 503 while the session is still being restored,
            401 when nobody is signed in
    """
    if workspace.session.loading:
        raise HTTPException(status_code=503, detail="Session is still loading")

    if workspace.session.user is None:
        raise HTTPException(status_code=401, detail="Sign in required")

    return workspace
