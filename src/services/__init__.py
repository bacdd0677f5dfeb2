from typing import Optional

from infrastructure.cache_redis import AsyncRedisCache
from infrastructure.nowcoder_client import NowcoderApiClient
from infrastructure.settings import Settings

from .contest import CONFIG_FILE_NAME, ContestSession
from .cph import CphService
from .documents import create_code_file, render_problem_document, write_problem_document
from .events import EventEmitter
from .submission import SubmissionOrchestrator
from .workspace import ContestWorkspaceManager, SessionEventRelay


def create_api_client(settings: Settings) -> NowcoderApiClient:
    """Factory function to create the judge client with its transport and parsers."""
    from infrastructure.http_client import AsyncHTTPClient
    from infrastructure.parsers import ContestPageParser, ProblemPageParser

    http_client = AsyncHTTPClient(token=settings.token, timeout=settings.http_timeout)
    return NowcoderApiClient(
        http_client,
        problem_parser=ProblemPageParser(),
        contest_parser=ContestPageParser(),
        base_url=settings.base_url,
    )


def create_workspace_manager(
    settings: Settings,
    api_client: Optional[NowcoderApiClient] = None,
    cache: Optional[AsyncRedisCache] = None,
) -> ContestWorkspaceManager:
    """Factory function to create the workspace manager with all session dependencies."""
    api_client = api_client or create_api_client(settings)
    orchestrator = SubmissionOrchestrator(
        api_client,
        max_polls=settings.max_polls,
        poll_interval=settings.poll_interval,
    )
    return ContestWorkspaceManager(api_client=api_client, orchestrator=orchestrator, cache=cache)


__all__ = [
    "CONFIG_FILE_NAME",
    "ContestSession",
    "ContestWorkspaceManager",
    "CphService",
    "EventEmitter",
    "SessionEventRelay",
    "SubmissionOrchestrator",
    "create_api_client",
    "create_code_file",
    "create_workspace_manager",
    "render_problem_document",
    "write_problem_document",
]
