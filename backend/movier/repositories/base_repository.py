from typing import Generic, TypeVar, Type, Optional, List, Any, Dict
from sqlalchemy.orm import Session
from sqlalchemy.dialects import postgresql, sqlite
from movier.db import Base

ModelType = TypeVar("ModelType", bound=Base)

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class _Excluded:
    """Marker: take the value proposed by the rejected insert"""

    def __repr__(self):
        return "EXCLUDED"


EXCLUDED = _Excluded()

class BaseRepository(Generic[ModelType]):
    """Base repository with common CRUD operations"""
    
    def __init__(self, model: Type[ModelType], db: Session):
        self.model = model
        self.db = db
    
    def get(self, id: Any) -> Optional[ModelType]:
        """Get by ID"""
        return self.db.query(self.model).filter(self.model.id == id).first()
    
    def create(self, obj_in: Dict[str, Any]) -> ModelType:
        """Create new object"""
        db_obj = self.model(**obj_in)
        self.db.add(db_obj)
        self.db.commit()
        self.db.refresh(db_obj)
        return db_obj
    
    def filter_one_by(self, **kwargs) -> Optional[ModelType]:
        """Filter by multiple conditions and return first"""
        return self.db.query(self.model).filter_by(**kwargs).first()
    
    def exists(self, **kwargs) -> bool:
        """Check if object exists"""
        return self.db.query(self.model.id).filter_by(**kwargs).first() is not None
    
    def count(self) -> int:
        return self.db.query(self.model).count()
    
    def upsert(self, values: Dict[str, Any], conflict_columns: List[str], update_values: Dict[str, Any]) -> None:
        """Insert a row; on collision with the unique key update only update_values.

        The whole operation is one INSERT ... ON CONFLICT DO UPDATE statement.
        """
        dialect = self.db.get_bind().dialect.name
        insert = _UPSERT_DIALECTS.get(dialect)
        if insert is None:
            raise NotImplementedError(f"Upsert is not supported for dialect {dialect}")
        
        stmt = insert(self.model).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=conflict_columns,
            set_={
                column: (stmt.excluded[column] if value is EXCLUDED else value)
                for column, value in update_values.items()
            },
        )
        self.db.execute(stmt)
        self.db.commit()
    
    def delete_where(self, **kwargs) -> int:
        """Delete every row matching the predicate in one statement; returns affected rows"""
        deleted = self.db.query(self.model).filter_by(**kwargs).delete(synchronize_session=False)
        self.db.commit()
        return deleted

