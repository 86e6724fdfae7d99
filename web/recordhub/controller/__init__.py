"""Controller package - HTTP handlers"""
from .article_controller import ArticleController
from .employee_controller import EmployeeController
from .health_controller import HealthController

__all__ = ['ArticleController', 'EmployeeController', 'HealthController']
