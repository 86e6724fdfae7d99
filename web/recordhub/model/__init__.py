"""Model package - Database and business logic"""
from .database import Database
from .article_model import ArticleModel
from .employee_model import EmployeeModel
from .record_model import BulkResult, RecordModel

__all__ = ['Database', 'ArticleModel', 'EmployeeModel', 'BulkResult', 'RecordModel']
