import asyncpg
from pathlib import Path
from typing import Optional

SCHEMA_PATH = Path(__file__).with_name("schema.sql")


class DatabasePool:
    """Manages the asyncpg connection pool lifecycle."""

    def __init__(self):
        self._pool: Optional[asyncpg.Pool] = None

    async def initialize(self, dsn: str, *, min_size: int = 2, max_size: int = 10) -> None:
        """Create the connection pool from a PostgreSQL DSN. Call once at app startup."""
        if self._pool is not None:
            return
        self._pool = await asyncpg.create_pool(dsn=dsn, min_size=min_size, max_size=max_size)

    async def initialize_schema(self, schema_path: Optional[Path] = None) -> None:
        """Create the bookings schema, tables and change triggers."""
        path = Path(schema_path or SCHEMA_PATH)
        sql_text = path.read_text(encoding="utf-8")
        async with self.pool.acquire() as conn:
            await conn.execute(sql_text)

    async def close(self) -> None:
        """Close all connections. Call at app shutdown."""
        if self._pool:
            await self._pool.close()
            self._pool = None

    @property
    def pool(self) -> asyncpg.Pool:
        """Get the pool, raising if not initialized."""
        if self._pool is None:
            raise RuntimeError(
                "Database pool not initialized. Call await db.initialize(dsn) first."
            )
        return self._pool

    async def health_check(self) -> bool:
        """Test connectivity with SELECT 1."""
        try:
            async with self.pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
            return True
        except (OSError, RuntimeError, asyncpg.PostgresError, asyncpg.InterfaceError):
            return False


# Module-level singleton for convenience
db = DatabasePool()
