"""
Article Controller - Handles article API routes
"""
from ..model.article_model import ArticleModel
from .record_controller import RecordController


class ArticleController(RecordController):
    """Controller for article operations"""

    model_class = ArticleModel
    filter_params = ('category', 'unit')
