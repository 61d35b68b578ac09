"""
Scorekeeper Backend — Persistence Gateway
===========================================

What:  Generic CRUD gateway over one ORM model, used by every domain service.
How:   Builds SQLAlchemy 2.0 statements from small filter/order/data
       descriptions and runs them on the request's AsyncSession.
Who:   UserService, RoomService and PlayerService; never the routes.

Operations:
    find_unique(db, id)              SELECT ... WHERE id = :id
    find_many(db, where, order_by)   SELECT ... WHERE ... ORDER BY ...
    find_first(db, where, order_by)  same, LIMIT 1
    create(db, data)                 INSERT (flushed, id populated)
    update(db, id, data)             UPDATE one row; NotFoundError if none
    update_many(db, where, data)     UPDATE ... WHERE ...; returns rowcount
    delete(db, id)                   DELETE one row; NotFoundError if none
    delete_many(db, where)           DELETE ... WHERE ...; returns rowcount

Filters:
    where={"room_id": rid, "name": "Bob"}  → room_id = :rid AND name = 'Bob'
    where={"room_id": [r1, r2]}            → room_id IN (:r1, :r2)

Atomic operators:
    data={"points": Increment(5)}  → SET points = points + 5
    data={"points": Decrement(3)}  → SET points = points - 3
    data={"points": 12}            → SET points = 12

    The operators are rendered into the UPDATE statement itself, so the
    database applies them against the current row value. Concurrent
    increments never lose updates.

Error translation:
    IntegrityError   → session rolled back, ConflictError
    DataError        → session rolled back, ValidationError (e.g. BIGINT overflow)
    SQLAlchemyError  → DatabaseError (details logged, never returned)
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import (
    Any,
    AsyncIterator,
    Dict,
    Generic,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Type,
    TypeVar,
    Union,
)

from sqlalchemy import delete, select, update
from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from scorekeeper.database import Base
from scorekeeper.models import Player, Room, User
from scorekeeper.exceptions import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    ScorekeeperError,
    ValidationError,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

Where = Optional[Mapping[str, Any]]
OrderBy = Optional[Union[str, Sequence[str]]]


@dataclass(frozen=True)
class Increment:
    """Relative update: add ``amount`` to the stored value."""
    amount: int


@dataclass(frozen=True)
class Decrement:
    """Relative update: subtract ``amount`` from the stored value."""
    amount: int


class Repository(Generic[ModelT]):
    """
    Stateless gateway for one mapped model.

    One instance per model lives at module level (see bottom of file).
    Every method takes the caller's session, so a single request's
    reads and writes share one transaction.
    """

    def __init__(self, model: Type[ModelT], resource: str):
        self.model = model
        self.resource = resource

    # ── Statement builders ────────────────────────────────────────────────

    def _column(self, name: str):
        if name not in self.model.__mapper__.columns:
            raise ValueError(f"{self.model.__name__} has no column '{name}'")
        return getattr(self.model, name)

    def _conditions(self, where: Where) -> List[Any]:
        conditions = []
        for name, value in (where or {}).items():
            column = self._column(name)
            if isinstance(value, (list, tuple, set, frozenset)):
                conditions.append(column.in_(list(value)))
            else:
                conditions.append(column == value)
        return conditions

    def _ordering(self, order_by: OrderBy) -> List[Any]:
        if not order_by:
            return []
        names = [order_by] if isinstance(order_by, str) else list(order_by)
        clauses = []
        for name in names:
            if name.startswith("-"):
                clauses.append(self._column(name[1:]).desc())
            else:
                clauses.append(self._column(name).asc())
        return clauses

    def _values(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        values = {}
        for name, value in data.items():
            column = self._column(name)
            if isinstance(value, Increment):
                values[name] = column + value.amount
            elif isinstance(value, Decrement):
                values[name] = column - value.amount
            else:
                values[name] = value
        return values

    def _select(self, where: Where, order_by: OrderBy, include: Iterable[str]):
        stmt = (
            select(self.model)
            .where(*self._conditions(where))
            .order_by(*self._ordering(order_by))
            # Bulk UPDATEs run earlier in the same session must be visible
            .execution_options(populate_existing=True)
        )
        for relationship_name in include:
            stmt = stmt.options(selectinload(getattr(self.model, relationship_name)))
        return stmt

    # ── Error translation ─────────────────────────────────────────────────

    @asynccontextmanager
    async def _translate_errors(self, db: AsyncSession, operation: str) -> AsyncIterator[None]:
        try:
            yield
        except ScorekeeperError:
            raise
        except IntegrityError as e:
            await db.rollback()
            logger.warning(
                "Integrity violation on %s.%s: %s",
                self.model.__tablename__, operation, e.orig,
            )
            raise ConflictError(
                message=f"{self.resource.capitalize()} conflicts with an existing record",
                context={"resource": self.resource, "operation": operation},
            ) from e
        except DataError as e:
            await db.rollback()
            logger.warning(
                "Value out of range on %s.%s: %s",
                self.model.__tablename__, operation, e.orig,
            )
            raise ValidationError(
                message=f"{self.resource.capitalize()} value is out of range",
            ) from e
        except SQLAlchemyError as e:
            logger.error(
                "Database error on %s.%s: %s",
                self.model.__tablename__, operation, str(e), exc_info=True,
            )
            raise DatabaseError(
                context={
                    "resource": self.resource,
                    "operation": operation,
                    "error_type": type(e).__name__,
                },
            ) from e

    # ── Reads ─────────────────────────────────────────────────────────────

    async def find_unique(
        self,
        db: AsyncSession,
        id: Any,
        include: Iterable[str] = (),
    ) -> Optional[ModelT]:
        async with self._translate_errors(db, "find_unique"):
            result = await db.execute(self._select({"id": id}, None, include))
            return result.scalar_one_or_none()

    async def find_many(
        self,
        db: AsyncSession,
        where: Where = None,
        order_by: OrderBy = None,
        include: Iterable[str] = (),
    ) -> List[ModelT]:
        async with self._translate_errors(db, "find_many"):
            result = await db.execute(self._select(where, order_by, include))
            return list(result.scalars().all())

    async def find_first(
        self,
        db: AsyncSession,
        where: Where = None,
        order_by: OrderBy = None,
    ) -> Optional[ModelT]:
        async with self._translate_errors(db, "find_first"):
            result = await db.execute(self._select(where, order_by, ()).limit(1))
            return result.scalars().first()

    # ── Writes ────────────────────────────────────────────────────────────

    async def create(self, db: AsyncSession, data: Mapping[str, Any]) -> ModelT:
        async with self._translate_errors(db, "create"):
            instance = self.model(**data)
            db.add(instance)
            await db.flush()
            return instance

    async def update(
        self,
        db: AsyncSession,
        id: Any,
        data: Mapping[str, Any],
        where: Where = None,
    ) -> None:
        """
        Update exactly one row by id.

        ``where`` narrows the match further (e.g. a player id must also
        belong to the room in the URL). Raises NotFoundError if no row
        matched.
        """
        scope = {"id": id, **(where or {})}
        async with self._translate_errors(db, "update"):
            result = await db.execute(
                update(self.model)
                .where(*self._conditions(scope))
                .values(**self._values(data))
            )
        if result.rowcount == 0:
            raise NotFoundError(resource=self.resource, resource_id=str(id))

    async def update_many(
        self,
        db: AsyncSession,
        where: Where,
        data: Mapping[str, Any],
    ) -> int:
        async with self._translate_errors(db, "update_many"):
            result = await db.execute(
                update(self.model)
                .where(*self._conditions(where))
                .values(**self._values(data))
            )
        return result.rowcount

    async def delete(self, db: AsyncSession, id: Any, where: Where = None) -> None:
        scope = {"id": id, **(where or {})}
        async with self._translate_errors(db, "delete"):
            result = await db.execute(
                delete(self.model).where(*self._conditions(scope))
            )
        if result.rowcount == 0:
            raise NotFoundError(resource=self.resource, resource_id=str(id))

    async def delete_many(self, db: AsyncSession, where: Where) -> int:
        async with self._translate_errors(db, "delete_many"):
            result = await db.execute(
                delete(self.model).where(*self._conditions(where))
            )
        return result.rowcount


# ── Gateway Instances ─────────────────────────────────────────────────────

users = Repository(User, "user")
rooms = Repository(Room, "room")
players = Repository(Player, "player")
