"""
Base repository with standardized CRUD operations.

Repositories never commit; the calling service owns the transaction so an
entity change and its audit entry are persisted together.
"""

from typing import Any, Generic, List, Optional, Sequence, Tuple, Type, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.models.base import BaseModel

logger = get_logger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Generic repository with common CRUD and query helpers.
    """

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    # ==================== Create Operations ====================

    def add(self, entity: ModelType) -> ModelType:
        """Stage an entity and flush so its primary key is assigned."""
        self.db.add(entity)
        self.db.flush()
        logger.debug(f"Staged {self.model.__name__} with id: {entity.id}")
        return entity

    # ==================== Read Operations ====================

    def get_by_id(self, entity_id: int) -> Optional[ModelType]:
        return self.db.get(self.model, entity_id)

    def find_all(self, stmt: Optional[Select] = None) -> List[ModelType]:
        stmt = stmt if stmt is not None else select(self.model)
        return list(self.db.scalars(stmt).unique())

    def count(self, *criteria: Any) -> int:
        stmt = select(func.count()).select_from(self.model)
        if criteria:
            stmt = stmt.where(*criteria)
        return int(self.db.scalar(stmt) or 0)

    def paginate(
        self,
        stmt: Select,
        page: int,
        limit: int,
    ) -> Tuple[Sequence[ModelType], int]:
        """
        Run a select for one page and report the unpaged total.

        Args:
            stmt: Filtered and ordered select of ``self.model``
            page: 1-based page number
            limit: Page size

        Returns:
            (items, total)
        """
        total_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        total = int(self.db.scalar(total_stmt) or 0)

        items = list(
            self.db.scalars(stmt.offset((page - 1) * limit).limit(limit)).unique()
        )
        return items, total
