"""
Record Controller - HTTP handlers shared by the article and employee APIs
"""
from typing import Tuple

from flask import jsonify, request

from ..errors import ValidationError
from ..model.record_model import RecordModel


class RecordController:
    """Controller exposing list, CRUD and bulk endpoints for one record model"""

    model_class = RecordModel
    filter_params: Tuple[str, ...] = ()

    def __init__(self):
        self.model = self.model_class()

    @property
    def singular(self) -> str:
        return self.model.query_config.name

    @property
    def plural(self) -> str:
        return self.model.query_config.plural

    def _json_body(self) -> dict:
        data = request.get_json(silent=True)
        if data is None:
            raise ValidationError("Request body must be JSON")
        return data

    def list_records(self):
        """API endpoint for the searchable, sortable, paginated list"""
        filters = {name: request.args.get(name) for name in self.filter_params}
        body = self.model.list_records(
            page=request.args.get('page'),
            limit=request.args.get('limit'),
            search=request.args.get('search', ''),
            sort_by=request.args.get('sortBy'),
            sort_order=request.args.get('sortOrder', 'asc'),
            filters=filters,
        )
        return jsonify(body)

    def get(self, record_id: str):
        """API endpoint for a single record"""
        return jsonify(self.model.get_by_id(record_id))

    def create(self):
        record = self.model.create(self._json_body())
        return jsonify({
            self.singular: record,
            "message": f"{self.model.label} created successfully"
        }), 201

    def update(self, record_id: str):
        record = self.model.update(record_id, self._json_body())
        return jsonify({
            self.singular: record,
            "message": f"{self.model.label} updated successfully"
        })

    def delete(self, record_id: str):
        deleted = self.model.delete(record_id)
        return jsonify({
            "message": f"{self.model.label} deleted successfully",
            "deleted": deleted
        })

    def bulk_create(self):
        """API endpoint to create many records; each item succeeds or fails on its own"""
        data = self._json_body()
        items = data.get(self.plural) if isinstance(data, dict) else None
        result = self.model.bulk_create(items)

        status = 201 if result.succeeded_count else 400
        return jsonify({
            "success": result.succeeded_count > 0,
            "message": f"Successfully created {result.succeeded_count} {self.plural}",
            "created": result.succeeded_count,
            "createdIds": result.succeeded,
            self.plural: result.records,
            "failed": result.failed_count,
            "errors": result.failures
        }), status

    def bulk_delete(self, ids: str):
        """API endpoint to delete a comma-separated list of records"""
        result = self.model.bulk_delete(ids.split(','))
        return jsonify({
            "message": f"Successfully deleted {result.succeeded_count} {self.plural}",
            "deletedCount": result.succeeded_count,
            "deletedIds": result.succeeded,
            "failed": result.failed_count,
            "errors": result.failures
        })

    def get_statistics(self):
        """API endpoint for statistics over the whole collection"""
        return jsonify({
            "success": True,
            "data": self.model.get_statistics()
        })
