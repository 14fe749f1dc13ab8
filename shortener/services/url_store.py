import asyncio
from nanoid import generate
from sqlalchemy import func, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from shortener.core.exceptions import NotFoundError, PersistenceError
from shortener.db.sql.models import ID_LENGTH, UrlMapping

# Single statement so concurrent submissions of the same URL collapse onto one row.
# The no-op update makes RETURNING yield the existing id on conflict.
UPSERT_URL = text("""
    INSERT INTO urls (id, url)
    VALUES (:id, :url)
    ON CONFLICT (url) DO UPDATE SET url = excluded.url
    RETURNING id
""")


class URLStore:
    """
    Persistent mapping from short identifier to target URL.

    Holds no state besides the session factory, so one instance is shared by
    every request. Each operation checks out its own session from the pool.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        max_attempts: int = 1000,
    ):
        self._session_factory = session_factory
        self.max_attempts = max_attempts

    def _generate_id(self) -> str:
        return generate(size=ID_LENGTH)

    async def _id_exists(self, session: AsyncSession, short_id: str) -> bool:
        result = await session.execute(
            select(func.count(UrlMapping.id)).where(UrlMapping.id == short_id)
        )
        return result.scalar_one() != 0

    async def _find_free_id(self, session: AsyncSession) -> str:
        for _ in range(self.max_attempts):
            candidate = self._generate_id()
            if not await self._id_exists(session, candidate):
                return candidate
        raise PersistenceError(f"No free id found after {self.max_attempts} attempts")

    async def shorten(self, url: str) -> str:
        """
        Return the short identifier for `url`, creating the mapping if needed.

        A URL that is already stored keeps its identifier; the freshly
        generated candidate is discarded in that case.

        Raises:
            PersistenceError: the database could not be reached or rejected the write
        """
        try:
            async with self._session_factory() as session:
                candidate = await self._find_free_id(session)
                result = await session.execute(UPSERT_URL, {"id": candidate, "url": url})
                short_id = result.scalar_one()
                await session.commit()
                return short_id
        except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
            raise PersistenceError(f"Error storing URL: {e}") from e

    async def resolve(self, short_id: str) -> str:
        """
        Return the URL stored under `short_id`.

        Raises:
            NotFoundError: no mapping has this identifier
            PersistenceError: the database could not be queried
        """
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(UrlMapping.url).where(UrlMapping.id == short_id)
                )
                url = result.scalar_one_or_none()
        except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
            raise PersistenceError(f"Error looking up {short_id!r}: {e}") from e

        if url is None:
            raise NotFoundError(short_id)
        return url
