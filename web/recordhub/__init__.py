"""
Flask Application Factory with Singleton Pattern
"""
import logging
from typing import Optional

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .config import Config
from .errors import RecordError
from .model.database import Database
from .utils.base import Base

logger = logging.getLogger(__name__)


class FlaskApp(metaclass=Base):
    """Singleton Flask application factory"""

    def __init__(self):
        self._app: Optional[Flask] = None

    def create_app(self, config: Optional[dict] = None, mongo_client=None) -> Flask:
        """Create and configure the Flask application"""
        if self._app is not None:
            return self._app

        self._app = Flask(__name__)

        # Default configuration from environment variables
        self._app.config.update(Config.as_flask_config())

        # Update with custom config if provided
        if config:
            self._app.config.update(config)
        self._app.json.sort_keys = self._app.config['JSON_SORT_KEYS']

        self._init_database(mongo_client)
        self._register_error_handlers()
        self._register_routes()

        return self._app

    def _init_database(self, mongo_client=None):
        """Initialize database connection"""
        db = Database()
        db.connect(
            connection_string=self._app.config['MONGODB_URI'],
            database_name=self._app.config['DATABASE_NAME'],
            timeout_ms=self._app.config['MONGODB_TIMEOUT_MS'],
            client=mongo_client
        )

    def _register_error_handlers(self):
        """Map record errors onto JSON error responses"""

        def handle_record_error(error: RecordError):
            if error.status_code >= 500:
                logger.error(f"{type(error).__name__}: {error.message}")
            return jsonify(error.to_dict()), error.status_code

        def handle_http_error(error: HTTPException):
            return jsonify({"success": False, "error": error.description}), error.code

        def handle_unexpected_error(error: Exception):
            logger.exception(f"Unhandled error: {error}")
            return jsonify({"success": False, "error": str(error)}), 500

        self._app.register_error_handler(RecordError, handle_record_error)
        self._app.register_error_handler(HTTPException, handle_http_error)
        self._app.register_error_handler(Exception, handle_unexpected_error)

    def _register_routes(self):
        """Register application routes"""
        from .controller import ArticleController, EmployeeController, HealthController

        health = HealthController()
        self._app.add_url_rule('/api/health', 'api_health', health.get_health)

        for prefix, controller in (
            ('/api/articles', ArticleController()),
            ('/api/employees', EmployeeController()),
        ):
            name = controller.plural
            self._app.add_url_rule(prefix, f'api_{name}_list', controller.list_records)
            self._app.add_url_rule(prefix, f'api_{name}_create', controller.create, methods=['POST'])
            self._app.add_url_rule(f'{prefix}/stats', f'api_{name}_stats', controller.get_statistics)
            self._app.add_url_rule(f'{prefix}/bulk', f'api_{name}_bulk_create',
                                   controller.bulk_create, methods=['POST'])
            self._app.add_url_rule(f'{prefix}/bulk/<ids>', f'api_{name}_bulk_delete',
                                   controller.bulk_delete, methods=['DELETE'])
            self._app.add_url_rule(f'{prefix}/<record_id>', f'api_{name}_get', controller.get)
            self._app.add_url_rule(f'{prefix}/<record_id>', f'api_{name}_update',
                                   controller.update, methods=['PUT'])
            self._app.add_url_rule(f'{prefix}/<record_id>', f'api_{name}_delete',
                                   controller.delete, methods=['DELETE'])

    def get_app(self) -> Optional[Flask]:
        """Get the Flask application instance"""
        return self._app


def create_app(config: Optional[dict] = None, mongo_client=None) -> Flask:
    """Factory function to create Flask app"""
    app_factory = FlaskApp()
    return app_factory.create_app(config, mongo_client=mongo_client)
