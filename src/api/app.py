"""Litestar application exposing the current contest workspace."""

from typing import Optional

from litestar import Litestar, Request, Response
from litestar.datastructures import State
from litestar.status_codes import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_502_BAD_GATEWAY,
)
from loguru import logger

from api.dependencies import build_workspace_manager, connect_cache
from api.routes import (
    ContestController,
    ProblemController,
    RankController,
    SubmissionController,
    WorkspaceController,
)
from domain.exceptions import (
    ContestSessionError,
    InvalidConfigError,
    MissingCompilerError,
    NoActiveWorkspaceError,
    ProblemNotFoundError,
)
from infrastructure.parsers import URLParsingError
from infrastructure.settings import Settings, configure_logging
from services import ContestWorkspaceManager


def _error_handler(status_code: int):
    def handler(request: Request, exc: Exception) -> Response:
        logger.warning(f"{request.method} {request.url.path} failed: {exc}")
        return Response(
            content={"status_code": status_code, "detail": str(exc)},
            status_code=status_code,
        )

    return handler


EXCEPTION_STATUS = {
    NoActiveWorkspaceError: HTTP_409_CONFLICT,
    ProblemNotFoundError: HTTP_404_NOT_FOUND,
    ContestSessionError: HTTP_502_BAD_GATEWAY,
    InvalidConfigError: HTTP_400_BAD_REQUEST,
    MissingCompilerError: HTTP_400_BAD_REQUEST,
    URLParsingError: HTTP_400_BAD_REQUEST,
}


def create_app(
    manager: Optional[ContestWorkspaceManager] = None,
    settings: Optional[Settings] = None,
) -> Litestar:
    """
    Create the API application.

    When ``manager`` is omitted it is built on start-up from ``settings``
    (read from the environment by default), connecting the optional Redis
    cache and opening ``NOWCODER_WORKSPACE`` if configured.
    """
    settings = settings or Settings.from_env()

    async def on_startup(app: Litestar) -> None:
        if app.state.workspace_manager is None:
            app.state.cache = await connect_cache(settings)
            app.state.workspace_manager = await build_workspace_manager(
                settings, cache=app.state.cache
            )
        logger.info("NowCoder contest API started")

    async def on_shutdown(app: Litestar) -> None:
        current = app.state.workspace_manager
        if current is not None:
            await current.shutdown()
        if app.state.cache is not None:
            await app.state.cache.close()
        logger.info("NowCoder contest API stopped")

    return Litestar(
        route_handlers=[
            WorkspaceController,
            ContestController,
            ProblemController,
            SubmissionController,
            RankController,
        ],
        state=State({"workspace_manager": manager, "cache": None}),
        exception_handlers={
            exc_type: _error_handler(status) for exc_type, status in EXCEPTION_STATUS.items()
        },
        on_startup=[on_startup],
        on_shutdown=[on_shutdown],
    )


def create_default_app() -> Litestar:
    """Application factory reading settings and log level from the environment."""
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    return create_app(settings=settings)
