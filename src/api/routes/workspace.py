"""API routes for opening and creating contest workspaces."""

from pathlib import Path

from litestar import Controller, get, post
from litestar.di import Provide
from litestar.status_codes import HTTP_200_OK, HTTP_201_CREATED
from loguru import logger

from api.dependencies import provide_workspace_manager
from api.schemas.workspace import (
    CreateWorkspaceRequest,
    OpenWorkspaceRequest,
    WorkspaceResponse,
)
from infrastructure.parsers import URLParser
from services import ContestSession, ContestWorkspaceManager


def _describe(session: ContestSession | None) -> WorkspaceResponse:
    if session is None:
        return WorkspaceResponse(open=False)
    return WorkspaceResponse(
        open=True,
        folder=str(session.folder),
        contest_id=session.contest_id,
        problem_count=len(session.problems),
    )


class WorkspaceController(Controller):
    """Controller for the current workspace."""

    path = "/workspace"
    dependencies = {"manager": Provide(provide_workspace_manager, sync_to_thread=False)}

    @get("/", status_code=HTTP_200_OK)
    async def get_workspace(self, manager: ContestWorkspaceManager) -> WorkspaceResponse:
        return _describe(manager.session)

    @post("/", status_code=HTTP_201_CREATED)
    async def create_workspace(
        self, manager: ContestWorkspaceManager, data: CreateWorkspaceRequest
    ) -> WorkspaceResponse:
        """
        Create a workspace (overwriting any existing config) and make it current.

        Body:
        - contest: contest id (e.g. "114514") or contest URL
        - folder: workspace folder, created when missing
        """
        contest_id = URLParser.parse_contest_id(data.contest)
        logger.debug(f"API request to create workspace: contest={contest_id} folder={data.folder}")
        session = await manager.create_workspace(contest_id, Path(data.folder))
        return _describe(session)

    @post("/open", status_code=HTTP_200_OK)
    async def open_workspace(
        self, manager: ContestWorkspaceManager, data: OpenWorkspaceRequest
    ) -> WorkspaceResponse:
        logger.debug(f"API request to open workspace: {data.folder}")
        session = await manager.open_workspace(Path(data.folder))
        return _describe(session)
