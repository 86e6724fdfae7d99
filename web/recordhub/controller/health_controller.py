"""
Health Controller - Service health endpoint
"""
from datetime import datetime, timezone

from flask import jsonify

from ..model.database import Database


class HealthController:
    """Controller for service health checks"""

    def __init__(self):
        self.db = Database()

    def get_health(self):
        """API endpoint reporting MongoDB connectivity"""
        mongodb_ok = self.db.ping()
        return jsonify({
            "health": "healthy" if mongodb_ok else "unhealthy",
            "components": {
                "mongodb": "connected" if mongodb_ok else "disconnected"
            },
            "timestamp": datetime.now(timezone.utc).isoformat()
        }), 200 if mongodb_ok else 503
