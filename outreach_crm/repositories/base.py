"""
Base repository with generic CRUD operations.
"""
import uuid
from typing import TypeVar, Generic, Type, Optional
from datetime import datetime

from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

from outreach_crm.core.pagination import count_query, paginate_query

ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """
    Generic repository with CRUD operations.
    Inherit and specify the model class. Every listing is scoped by owner.
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession):
        self.model = model
        self.session = session

    async def create(self, obj_in: dict) -> ModelType:
        """Create a new record."""
        db_obj = self.model(**obj_in)
        return await self.save(db_obj)

    async def save(self, db_obj: ModelType) -> ModelType:
        """Persist a new or modified instance."""
        self.session.add(db_obj)
        await self.session.commit()
        await self.session.refresh(db_obj)
        return db_obj

    async def get(self, id: uuid.UUID) -> Optional[ModelType]:
        """Get a record by ID."""
        return await self.session.get(self.model, id)

    async def get_owned(self, id: uuid.UUID, owner_id: uuid.UUID) -> Optional[ModelType]:
        """Get a record by ID only if it belongs to ``owner_id``."""
        db_obj = await self.get(id)
        if db_obj is None or getattr(db_obj, "owner_id", None) != owner_id:
            return None
        return db_obj

    def _scoped_query(self, owner_id: Optional[uuid.UUID], filters: Optional[dict]):
        query = select(self.model)

        if owner_id and hasattr(self.model, 'owner_id'):
            query = query.where(self.model.owner_id == owner_id)

        if filters:
            for field, value in filters.items():
                if hasattr(self.model, field) and value is not None:
                    query = query.where(getattr(self.model, field) == value)
        return query

    def _ordered(self, query, order_by: str, order_desc: bool):
        if hasattr(self.model, order_by):
            order_column = getattr(self.model, order_by)
            query = query.order_by(order_column.desc() if order_desc else order_column)
        return query

    async def list_paginated(
        self,
        owner_id: Optional[uuid.UUID] = None,
        filters: Optional[dict] = None,
        page: int = 1,
        limit: int = 20,
        order_by: str = "created_at",
        order_desc: bool = True
    ) -> dict:
        """List records with pagination."""
        query = self._ordered(self._scoped_query(owner_id, filters), order_by, order_desc)
        return await paginate_query(self.session, query, page, limit)

    async def update(self, id: uuid.UUID, obj_in: dict) -> Optional[ModelType]:
        """Update a record, skipping None values."""
        db_obj = await self.get(id)
        if not db_obj:
            return None

        for field, value in obj_in.items():
            if hasattr(db_obj, field) and value is not None:
                setattr(db_obj, field, value)

        if hasattr(db_obj, 'updated_at'):
            db_obj.updated_at = datetime.utcnow()

        return await self.save(db_obj)

    async def delete(self, id: uuid.UUID) -> bool:
        """Delete a record."""
        db_obj = await self.get(id)
        if not db_obj:
            return False

        await self.session.delete(db_obj)
        await self.session.commit()
        return True

    async def count(self, owner_id: Optional[uuid.UUID] = None, filters: Optional[dict] = None) -> int:
        """Count records."""
        return await count_query(self.session, self._scoped_query(owner_id, filters))
