"""
Database Model - shared MongoDB connection and index setup
"""
import logging
from typing import Optional

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.errors import PyMongoError

from ..utils.base import Base

logger = logging.getLogger(__name__)

ARTICLES_COLLECTION = "articles"
EMPLOYEES_COLLECTION = "employees"


class Database(metaclass=Base):
    """Database connection manager. Shared across the application."""

    def __init__(self):
        self._client: Optional[MongoClient] = None
        self._db = None

    def connect(self, connection_string: str = "mongodb://localhost:27017/",
                database_name: str = "recordhub", timeout_ms: int = 5000,
                client=None) -> None:
        """
        Establish database connection with connection pooling.

        Args:
            connection_string: MongoDB connection URI
            database_name: Database name
            timeout_ms: Server selection timeout
            client: Ready-made client to use instead of opening one
        """
        if self._client is not None:
            return

        self._client = client if client is not None else MongoClient(
            connection_string,
            maxPoolSize=50,
            minPoolSize=10,
            serverSelectionTimeoutMS=timeout_ms
        )
        self._db = self._client[database_name]
        logger.info(f"Connected to MongoDB database: {database_name}")
        self._setup_indexes()

    def _setup_indexes(self):
        """Create indexes for the unique keys and the allow-listed sort/filter fields."""
        try:
            articles = self._db[ARTICLES_COLLECTION]
            articles.create_index([('articleNumber', ASCENDING)], unique=True,
                                  name='idx_article_number_unique')
            articles.create_index([('articleName', ASCENDING)], name='idx_article_name')
            articles.create_index([('salesPrice', ASCENDING)], name='idx_sales_price')
            articles.create_index([('category', ASCENDING), ('unit', ASCENDING)],
                                  name='idx_category_unit')
            articles.create_index([('createdAt', DESCENDING)], name='idx_article_created_desc')

            employees = self._db[EMPLOYEES_COLLECTION]
            employees.create_index([('name', ASCENDING)], name='idx_employee_name')
            # Employees without an email are stored without the key
            employees.create_index([('email', ASCENDING)], unique=True, sparse=True,
                                   name='idx_employee_email_unique')
            employees.create_index([('department', ASCENDING)], name='idx_employee_department')
            employees.create_index([('job', ASCENDING)], name='idx_employee_job')
            employees.create_index([('createdAt', DESCENDING)], name='idx_employee_created_desc')

            logger.info("Database indexes created successfully")
        except PyMongoError as e:
            logger.warning(f"Index creation warning: {e}")

    def get_collection(self, collection_name: str):
        """Get a collection from the database"""
        if self._db is None:
            raise ConnectionError("Database not connected. Call connect() first.")
        return self._db[collection_name]

    def ping(self) -> bool:
        """Check that the server answers a ping."""
        if self._client is None:
            return False
        try:
            self._client.admin.command('ping')
            return True
        except PyMongoError as e:
            logger.error(f"MongoDB ping failed: {e}")
            return False

    def close(self) -> None:
        """Close database connection"""
        if self._client:
            self._client.close()
            self._client = None
            self._db = None
            logger.info("MongoDB connection closed")

    @property
    def is_connected(self) -> bool:
        """Check if database is connected"""
        return self._client is not None and self._db is not None
