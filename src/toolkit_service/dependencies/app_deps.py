from pathlib import Path

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..config import settings
from ..crud.tools import ToolMutations, ToolQueries
from ..db import get_session_factory


def get_tool_queries(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> ToolQueries:
    """Query layer bound to the request's session factory."""
    return ToolQueries(session_factory)


def get_tool_mutations(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> ToolMutations:
    """Mutation layer bound to the request's session factory."""
    return ToolMutations(session_factory)


def get_docs_dir() -> Path:
    """Root of the markdown documentation tree."""
    return Path(settings.DOCS_DIR)
