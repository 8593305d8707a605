"""CRUD operations for the bookings.tee_times table."""

import asyncpg
from typing import List, Optional
from uuid import UUID

from models import TeeTime
from database.converters import tee_time_from_row, tee_time_to_row
from database.exceptions import CapacityError, IntegrityError, NotFoundError


def _parse_id(tee_time_id: str) -> Optional[UUID]:
    try:
        return UUID(str(tee_time_id))
    except ValueError:
        return None


class TeeTimeRepositoryDB:
    """Async CRUD for tee times within one app namespace."""

    def __init__(self, pool: asyncpg.Pool, app_id: str):
        self._pool = pool
        self._app_id = app_id

    # ================================================================
    # Read
    # ================================================================

    async def list_tee_times(self) -> List[TeeTime]:
        """All tee times, earliest first."""
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """SELECT * FROM bookings.tee_times
                   WHERE app_id = $1
                   ORDER BY tee_date, tee_time, created_at""",
                self._app_id,
            )
            return [tee_time_from_row(r) for r in rows]

    async def get_tee_time(self, tee_time_id: str) -> Optional[TeeTime]:
        """Get a single tee time by ID."""
        key = _parse_id(tee_time_id)
        if key is None:
            return None
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM bookings.tee_times WHERE id = $1 AND app_id = $2",
                key, self._app_id,
            )
            return tee_time_from_row(row) if row else None

    # ================================================================
    # Create
    # ================================================================

    async def create_tee_time(self, tee_time: TeeTime) -> TeeTime:
        """Insert a tee time. Returns it with the store-assigned id and created_at."""
        data = tee_time_to_row(tee_time)
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    """INSERT INTO bookings.tee_times
                       (app_id, course, tee_date, tee_time, total_spots, players, creator_id)
                       VALUES ($1, $2, $3, $4, $5, $6, $7)
                       RETURNING *""",
                    self._app_id, data["course"], data["tee_date"], data["tee_time"],
                    data["total_spots"], data["players"], data["creator_id"],
                )
                return tee_time_from_row(row)
        except asyncpg.CheckViolationError as e:
            raise IntegrityError(str(e)) from e

    # ================================================================
    # Update
    # ================================================================

    async def claim_spot(self, tee_time_id: str, user_id: str) -> TeeTime:
        """Append a user to the players list.

        The membership and capacity checks live in the UPDATE's WHERE clause,
        so two claims racing for the last spot cannot both succeed. A user who
        already holds a spot gets the record back unchanged.

        Raises NotFoundError if the tee time does not exist and CapacityError
        if it is full.
        """
        key = _parse_id(tee_time_id)
        if key is None:
            raise NotFoundError(f"TeeTime {tee_time_id} not found")

        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                """UPDATE bookings.tee_times
                   SET players = array_append(players, $3)
                   WHERE id = $1 AND app_id = $2
                     AND NOT ($3 = ANY(players))
                     AND cardinality(players) < total_spots
                   RETURNING *""",
                key, self._app_id, user_id,
            )
            if row:
                return tee_time_from_row(row)

            # Nothing updated: find out why.
            row = await conn.fetchrow(
                "SELECT * FROM bookings.tee_times WHERE id = $1 AND app_id = $2",
                key, self._app_id,
            )
            if not row:
                raise NotFoundError(f"TeeTime {tee_time_id} not found")
            current = tee_time_from_row(row)
            if current.has_joined(user_id):
                return current
            raise CapacityError(f"TeeTime {tee_time_id} is full")
