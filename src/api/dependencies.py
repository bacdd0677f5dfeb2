from litestar.datastructures import State
from loguru import logger

from infrastructure.cache_redis import AsyncRedisCache
from infrastructure.settings import Settings
from services import ContestSession, ContestWorkspaceManager, create_workspace_manager


def provide_workspace_manager(state: State) -> ContestWorkspaceManager:
    return state.workspace_manager


def provide_contest_session(state: State) -> ContestSession:
    """Current session; raises NoActiveWorkspaceError when no workspace is open."""
    return provide_workspace_manager(state).require_session()


async def connect_cache(settings: Settings) -> AsyncRedisCache | None:
    if not settings.redis_url:
        return None

    client = AsyncRedisCache(settings.redis_url, ttl=settings.redis_ttl)
    try:
        await client.connect()
        logger.debug("Connected to Redis for problem cache")
        return client
    except Exception as e:
        logger.warning(f"Failed to connect to Redis, caching disabled: {e}")
        await client.close()
        return None


async def build_workspace_manager(
    settings: Settings, cache: AsyncRedisCache | None = None
) -> ContestWorkspaceManager:
    """Create the manager and open the configured start-up workspace, if any."""
    manager = create_workspace_manager(settings, cache=cache)
    if settings.workspace is not None:
        try:
            await manager.open_workspace(settings.workspace)
        except Exception as e:
            logger.warning(f"Failed to open workspace {settings.workspace}: {e}")
    return manager
