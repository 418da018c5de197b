"""
Base repository classes shared by the member and relationship repositories
"""

from abc import ABC
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from family_tree.database import db
from family_tree.shared.logging_config import get_project_logger


# Generic type for model classes
ModelType = TypeVar('ModelType')


class BaseRepository(ABC):
    """
    Base repository class providing common functionality for all repositories

    Features:
    - Standard error handling with rollback
    - Consistent logging setup
    - Transaction management (flush here, commit in the service layer)
    """

    def __init__(self, db_session=None):
        """Initialize base repository with database session and logger"""
        self.db_session = db_session or db.session
        self.logger = get_project_logger(self.__class__.__name__)

    def safe_operation(self, operation: Callable[[], Any], operation_name: str = "operation") -> Any:
        """
        Execute a writing database operation with standard error handling

        Args:
            operation: Function to execute (should return result)
            operation_name: Description for logging purposes

        Returns:
            Result of the operation

        Raises:
            Exception: Re-raises original exception after logging and rollback
        """
        try:
            result = operation()
            self.db_session.flush()
            self.logger.debug(f"Repository {operation_name} completed successfully")
            return result
        except SQLAlchemyError as e:
            self.db_session.rollback()
            self.logger.error(f"Database error in {operation_name}: {e}")
            raise
        except Exception as e:
            self.db_session.rollback()
            self.logger.error(f"Repository {operation_name} failed: {e}")
            raise

    def safe_query(self, query_func: Callable[[], Any], operation_name: str = "query") -> Any:
        """
        Execute read-only query with error handling (no flush needed)

        Args:
            query_func: Function to execute query
            operation_name: Description for logging purposes

        Returns:
            Query result
        """
        try:
            result = query_func()
            self.logger.debug(f"Repository {operation_name} completed successfully")
            return result
        except Exception as e:
            self.logger.error(f"Repository {operation_name} failed: {e}")
            raise


class ModelRepository(BaseRepository, Generic[ModelType]):
    """
    Generic repository for standard CRUD operations on model types
    """

    def __init__(self, model_class: type[ModelType], db_session=None):
        """
        Initialize model repository

        Args:
            model_class: SQLAlchemy model class this repository manages
            db_session: Database session (optional)
        """
        super().__init__(db_session)
        self.model_class = model_class

    def create(self, **kwargs) -> ModelType:
        """Create a new model instance"""
        def _create():
            instance = self.model_class(**kwargs)
            self.db_session.add(instance)
            return instance

        return self.safe_operation(_create, f"create {self.model_class.__name__}")

    def update(self, instance: ModelType, **kwargs) -> ModelType:
        """Update an existing model instance"""
        def _update():
            for key, value in kwargs.items():
                if hasattr(instance, key):
                    setattr(instance, key, value)
            return instance

        return self.safe_operation(_update, f"update {self.model_class.__name__}")

    def delete(self, instance: ModelType) -> None:
        """Delete a model instance (ORM cascades apply)"""
        def _delete():
            self.db_session.delete(instance)

        return self.safe_operation(_delete, f"delete {self.model_class.__name__}")

    def get_by_id(self, id_value: Any) -> ModelType | None:
        """Get instance by ID with error handling"""
        def _get_by_id():
            return self.db_session.get(self.model_class, id_value)

        return self.safe_query(_get_by_id, f"get {self.model_class.__name__} by id")

    def get_all(self) -> list[ModelType]:
        """Get all instances with error handling"""
        def _get_all():
            return self.db_session.execute(
                db.select(self.model_class)
            ).scalars().all()

        return self.safe_query(_get_all, f"get all {self.model_class.__name__}")

    def count(self) -> int:
        """Count all instances with error handling"""
        def _count():
            return self.db_session.execute(
                db.select(db.func.count()).select_from(self.model_class)
            ).scalar_one()

        return self.safe_query(_count, f"count {self.model_class.__name__}")
