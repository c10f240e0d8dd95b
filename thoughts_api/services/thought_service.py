"""
Happy Thoughts API — Thought Service (Business Logic)
=======================================================

What:  Every thought operation: list, get, create, like, update, delete.
How:   Each method parses the id, validates input, then issues exactly one
       database statement. Outcomes are translated into the typed errors
       from thoughts_api.exceptions; routes never inspect database errors.
Who:   Called by the /thoughts route handlers.

Statement per operation:
    list    SELECT ... ORDER BY created_at DESC LIMIT :limit
    get     SELECT ... WHERE id = :id
    create  INSERT ...
    like    UPDATE ... SET hearts = hearts + 1 WHERE id = :id RETURNING ...
    update  UPDATE ... SET message = :message WHERE id = :id RETURNING ...
    delete  DELETE ... WHERE id = :id RETURNING ...

Likes are a single atomic UPDATE, so concurrent likes on the same thought
never lose an increment. Update and delete rely on statement atomicity only;
there is no optimistic-concurrency check.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, List

from sqlalchemy import delete, desc, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from thoughts_api.config import settings
from thoughts_api.exceptions import (
    MalformedIdError,
    StorageError,
    ThoughtNotFoundError,
    ThoughtValidationError,
)
from thoughts_api.models.thought import Thought
from thoughts_api.schemas.thought import ThoughtDeleteResponse, ThoughtResponse
from thoughts_api.validation import normalize_message, validate_thought

logger = logging.getLogger(__name__)

# Errors that mean "the database failed", as opposed to a bug in our code
DATABASE_ERRORS = (SQLAlchemyError, OSError)


def parse_thought_id(thought_id: str) -> uuid.UUID:
    """
    Parse a client-supplied id into the table's UUID key.

    Raises:
        MalformedIdError: The string is not a UUID (→ 400, distinct from 404)
    """
    try:
        return uuid.UUID(str(thought_id))
    except ValueError:
        raise MalformedIdError(thought_id=str(thought_id))


def _require_valid_message(message: Any) -> str:
    result = validate_thought({"message": message})
    if not result.valid:
        raise ThoughtValidationError(result.errors)
    return normalize_message(message)


class ThoughtService:
    """
    Business logic layer for thought operations.

    Stateless: the session is passed into every call, so one instance is
    shared by all requests.
    """

    async def list_thoughts(
        self, db: AsyncSession, limit: int | None = None
    ) -> List[ThoughtResponse]:
        """
        The newest thoughts first, at most `limit` (default 20).

        Raises:
            StorageError: Query failed (→ 500 "Could not fetch thoughts")
        """
        limit = limit or settings.thoughts_list_limit
        try:
            result = await db.execute(
                select(Thought).order_by(desc(Thought.created_at)).limit(limit)
            )
            thoughts = result.scalars().all()
        except DATABASE_ERRORS as e:
            logger.error("Database error listing thoughts: %s", str(e), exc_info=True)
            raise StorageError(
                label="Could not fetch thoughts",
                message=str(e),
                context={"error_type": type(e).__name__},
            )

        return [ThoughtResponse.model_validate(thought) for thought in thoughts]

    async def get_thought(self, db: AsyncSession, thought_id: str) -> ThoughtResponse:
        """
        A single thought by id.

        Raises:
            MalformedIdError: Id is not a UUID (→ 400)
            ThoughtNotFoundError: No thought has this id (→ 404)
            StorageError: Query failed (→ 500)
        """
        tid = parse_thought_id(thought_id)
        try:
            result = await db.execute(select(Thought).where(Thought.id == tid))
            thought = result.scalar_one_or_none()
        except DATABASE_ERRORS as e:
            logger.error("Database error fetching thought %s: %s", tid, str(e))
            raise StorageError(label="Could not fetch thought", message=str(e))

        if thought is None:
            raise ThoughtNotFoundError(thought_id=str(tid))
        return ThoughtResponse.model_validate(thought)

    async def create_thought(self, db: AsyncSession, message: Any) -> ThoughtResponse:
        """
        Validate and insert a new thought with hearts=0 and createdAt=now.

        Raises:
            ThoughtValidationError: Message failed one or more rules (→ 400)
            StorageError: Insert failed (→ 500 "Could not create thought")
        """
        text = _require_valid_message(message)
        thought = Thought(
            message=text,
            hearts=0,
            created_at=datetime.now(timezone.utc),
        )
        try:
            db.add(thought)
            # Flush assigns the id and surfaces constraint errors here,
            # the commit itself happens in get_db_session
            await db.flush()
        except DATABASE_ERRORS as e:
            logger.error("Database error creating thought: %s", str(e), exc_info=True)
            raise StorageError(label="Could not create thought", message=str(e))

        logger.info("Thought created: %s", thought.id)
        return ThoughtResponse.model_validate(thought)

    async def like_thought(self, db: AsyncSession, thought_id: str) -> ThoughtResponse:
        """
        Atomically add one heart and return the post-increment thought.

        Raises:
            MalformedIdError: Id is not a UUID (→ 400)
            ThoughtNotFoundError: No thought has this id (→ 404)
            StorageError: Update failed (→ 500)
        """
        tid = parse_thought_id(thought_id)
        stmt = (
            update(Thought)
            .where(Thought.id == tid)
            .values(hearts=Thought.hearts + 1)
            .returning(Thought)
        )
        thought = await self._execute_returning(db, stmt, tid, label="Could not like thought")
        logger.info("Thought %s liked: hearts=%d", tid, thought.hearts)
        return ThoughtResponse.model_validate(thought)

    async def update_thought(
        self, db: AsyncSession, thought_id: str, message: Any
    ) -> ThoughtResponse:
        """
        Replace the message of a thought; hearts and createdAt are untouched.

        Raises:
            MalformedIdError: Id is not a UUID (→ 400)
            ThoughtValidationError: New message failed one or more rules (→ 400)
            ThoughtNotFoundError: No thought has this id (→ 404)
            StorageError: Update failed (→ 400 "Could not update thought")
        """
        tid = parse_thought_id(thought_id)
        text = _require_valid_message(message)
        stmt = (
            update(Thought)
            .where(Thought.id == tid)
            .values(message=text)
            .returning(Thought)
        )
        thought = await self._execute_returning(
            db, stmt, tid, label="Could not update thought", status_code=400
        )
        logger.info("Thought %s updated", tid)
        return ThoughtResponse.model_validate(thought)

    async def delete_thought(self, db: AsyncSession, thought_id: str) -> ThoughtDeleteResponse:
        """
        Permanently remove a thought and return its last state.

        Raises:
            MalformedIdError: Id is not a UUID (→ 400)
            ThoughtNotFoundError: No thought has this id (→ 404)
            StorageError: Delete failed (→ 500)
        """
        tid = parse_thought_id(thought_id)
        stmt = delete(Thought).where(Thought.id == tid).returning(Thought)
        thought = await self._execute_returning(db, stmt, tid, label="Could not delete thought")
        logger.info("Thought %s deleted", tid)
        return ThoughtDeleteResponse(deleted_thought=ThoughtResponse.model_validate(thought))

    async def _execute_returning(
        self,
        db: AsyncSession,
        stmt: Any,
        tid: uuid.UUID,
        label: str,
        status_code: int = 500,
    ) -> Thought:
        """Run an UPDATE/DELETE ... RETURNING and map "no row" to not-found."""
        try:
            result = await db.execute(stmt)
            thought = result.scalar_one_or_none()
        except DATABASE_ERRORS as e:
            logger.error("Database error on thought %s: %s", tid, str(e))
            raise StorageError(
                label=label,
                message=str(e),
                status_code=status_code,
                context={"thought_id": str(tid)},
            )

        if thought is None:
            raise ThoughtNotFoundError(thought_id=str(tid))
        return thought


# ── Singleton Instance ────────────────────────────────────────────────────
thought_service = ThoughtService()
