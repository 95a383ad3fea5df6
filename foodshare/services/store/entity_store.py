# foodshare/services/store/entity_store.py
"""Keyed collection access for one entity type, scoped by owning business"""
import logging
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from foodshare.core.errors import StoreError
from foodshare.models.base import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class EntityStore(Generic[ModelT]):
    """
    CRUD over a single model.

    Every mutation commits immediately so later reads in the process see it.
    Failures roll the session back and surface as StoreError.
    """

    def __init__(self, db: Session, model: Type[ModelT]):
        self.db = db
        self.model = model

    @property
    def entity_name(self) -> str:
        return self.model.__name__

    def get(self, entity_id: str) -> Optional[ModelT]:
        return self.db.get(self.model, entity_id)

    def list_by_owner(self, business_id: str) -> List[ModelT]:
        return self.db.query(self.model).filter(
            self.model.business_id == business_id
        ).all()

    def create(self, **fields: Any) -> ModelT:
        entity = self.model(**fields)
        try:
            self.db.add(entity)
            self.db.commit()
            self.db.refresh(entity)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error creating {self.entity_name}: {e}", exc_info=True)
            raise StoreError(f"Failed to create {self.entity_name}") from e

        logger.debug(f"Created {self.entity_name} {entity.id}")
        return entity

    def update(self, entity_id: str, fields: Dict[str, Any]) -> Optional[ModelT]:
        entity = self.get(entity_id)
        if entity is None:
            return None

        for field, value in fields.items():
            if hasattr(entity, field):
                setattr(entity, field, value)

        try:
            self.db.commit()
            self.db.refresh(entity)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error updating {self.entity_name} {entity_id}: {e}", exc_info=True)
            raise StoreError(f"Failed to update {self.entity_name}") from e

        return entity

    def delete(self, entity_id: str) -> bool:
        entity = self.get(entity_id)
        if entity is None:
            return False

        try:
            self.db.delete(entity)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error deleting {self.entity_name} {entity_id}: {e}", exc_info=True)
            raise StoreError(f"Failed to delete {self.entity_name}") from e

        return True
