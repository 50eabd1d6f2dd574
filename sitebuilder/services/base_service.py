from typing import Type, TypeVar, Optional
from sqlalchemy.orm import Session, Query

ModelType = TypeVar('ModelType')


class BaseService:
    def __init__(self, model: Type[ModelType]):
        self.model = model
        self.soft_delete = hasattr(model, "is_deleted")

    def query(self, db: Session, include_deleted: bool = False) -> Query:
        """
        Base query for the model.

        Args:
            db: Database session
            include_deleted: Also return soft-deleted rows (models with `is_deleted` only)
        """
        query = db.query(self.model)
        if self.soft_delete and not include_deleted:
            query = query.filter(self.model.is_deleted.is_(False))
        return query

    def create(self, db: Session, db_obj: ModelType) -> ModelType:
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get(self, db: Session, id: int, include_deleted: bool = False) -> Optional[ModelType]:
        return self.query(db, include_deleted).filter(self.model.id == id).first()

    def delete(self, db: Session, db_obj: ModelType) -> None:
        """Soft delete when the model supports it, hard delete otherwise."""
        if self.soft_delete:
            db_obj.is_deleted = True
        else:
            db.delete(db_obj)
        db.commit()
