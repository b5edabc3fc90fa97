"""
Base Repository.

Base class for repositories of owner-scoped rows. Every query and
every write carries an ``owner_id`` predicate in the SQL statement
itself, so a row owned by someone else is indistinguishable from a row
that does not exist.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.backend.core.exceptions import NotFoundError
from notekeeper.backend.core.logging import get_logger
from notekeeper.backend.models.base import Base

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with owner-scoped CRUD operations.

    Subclasses should set the model class, which must have ``id`` and
    ``owner_id`` columns:

        class NoteRepository(BaseRepository[Note]):
            model = Note
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @property
    def _label(self) -> str:
        return self.model.__name__

    def _owned(self, owner_id: str, *criteria: ColumnElement[bool]) -> list[ColumnElement[bool]]:
        """Build a WHERE clause list that always includes the owner predicate."""
        return [self.model.owner_id == owner_id, *criteria]

    async def get_by_id(self, id: str, owner_id: str) -> ModelType:
        """
        Get a single owned record by ID.

        Raises:
            NotFoundError: If no record with this ID belongs to the owner
        """
        instance = await self.get_by_id_or_none(id, owner_id)

        if instance is None:
            raise NotFoundError(f"{self._label} not found")

        return instance

    async def get_by_id_or_none(self, id: str, owner_id: str) -> ModelType | None:
        """Get a single owned record by ID, returning None if not found."""
        result = await self.session.execute(
            select(self.model).where(*self._owned(owner_id, self.model.id == id))
        )
        return result.scalar_one_or_none()

    async def create(self, **kwargs: Any) -> ModelType:
        """Create a new record. ``owner_id`` must be among the fields."""
        if not kwargs.get("owner_id"):
            raise ValueError(f"{self._label} requires an owner_id")

        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update_where(
        self,
        owner_id: str,
        *criteria: ColumnElement[bool],
        **values: Any,
    ) -> list[str]:
        """
        Apply ``values`` to every owned row matching ``criteria``.

        Runs as one UPDATE statement; the WHERE clause is the guard, so
        rows that do not match are left untouched.

        Returns:
            IDs of the rows that were updated
        """
        result = await self.session.execute(
            update(self.model)
            .where(*self._owned(owner_id, *criteria))
            .values(**values)
            .returning(self.model.id)
            .execution_options(synchronize_session="fetch")
        )
        return list(result.scalars().all())

    async def update(
        self,
        id: str,
        owner_id: str,
        *criteria: ColumnElement[bool],
        **values: Any,
    ) -> ModelType:
        """
        Update a single owned record and return its fresh state.

        Additional ``criteria`` are ANDed into the guard, e.g. to require
        the row to be in a given state.

        Raises:
            NotFoundError: If no row matched the guard
        """
        updated = await self.update_where(owner_id, self.model.id == id, *criteria, **values)
        if not updated:
            raise NotFoundError(f"{self._label} not found")
        return await self._reload(id, owner_id)

    async def _reload(self, id: str, owner_id: str) -> ModelType:
        result = await self.session.execute(
            select(self.model)
            .where(*self._owned(owner_id, self.model.id == id))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    async def count(self, owner_id: str, *criteria: ColumnElement[bool]) -> int:
        """Count owned records matching ``criteria``."""
        result = await self.session.execute(
            select(func.count())
            .select_from(self.model)
            .where(*self._owned(owner_id, *criteria))
        )
        return result.scalar_one()
