"""
Base service class providing common functionality for all services
"""
from family_tree.database import db
from family_tree.shared.logging_config import get_project_logger


class BaseService:
    """Base class for all services providing common functionality"""

    def __init__(self, db_session=None):
        self.logger = get_project_logger(self.__class__.__module__)
        self.db_session = db_session or db.session

    def commit(self):
        """Commit the unit of work, rolling back if the commit fails"""
        try:
            self.db_session.commit()
        except Exception:
            self.db_session.rollback()
            raise
