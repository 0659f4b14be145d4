"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory async database, no-op retry sleep, vector search result factory
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import pytest


async def _no_sleep(_seconds: float) -> None:
    return None


@pytest.fixture
def no_sleep():
    """Retry sleep replacement that returns immediately."""
    return _no_sleep


@pytest.fixture
async def test_engine():
    """
    Create in-memory SQLite async engine with all tables.

    Yields:
        AsyncEngine: Engine shared by every session of one test
    """
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool

    from pdfchat.boundary.db.base import Base
    from pdfchat.boundary.db.models import DocumentModel  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def test_session_factory(test_engine):
    """Session factory bound to the in-memory engine."""
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_async_db(test_session_factory):
    """
    Create in-memory SQLite async database session for testing.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    async with test_session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def make_search_result():
    """Factory for VectorSearchResult instances."""
    from pdfchat.boundary.vdb.vector_schemas import VectorMetadata, VectorSearchResult

    def _make(
        doc_id: str = "doc-1",
        page_start: int = 1,
        page_end: int = 1,
        chunk_index: int = 0,
        text: str = "Some text",
        score: float = 0.9,
    ) -> VectorSearchResult:
        return VectorSearchResult(
            id=f"{doc_id}-{page_start}-{page_end}-{chunk_index}",
            metadata=VectorMetadata(
                doc_id=doc_id,
                page_start=page_start,
                page_end=page_end,
                chunk_index=chunk_index,
                text=text,
            ),
            score=score,
        )

    return _make
