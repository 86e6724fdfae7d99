"""
Employee Model - Business logic for employee data
"""
from typing import Any, Dict, List

from pymongo.errors import PyMongoError

from ..query import EMPLOYEE_QUERY, summarize_employees
from .database import EMPLOYEES_COLLECTION
from .record_model import RecordModel
from .validation import ValidationResult, validate_employee


class EmployeeModel(RecordModel):
    """Employee data model with business logic"""

    collection_name = EMPLOYEES_COLLECTION
    label = "Employee"
    query_config = EMPLOYEE_QUERY
    unique_fields = ('email',)
    sparse_fields = ('email',)

    def validate(self, payload: Dict[str, Any]) -> ValidationResult:
        return validate_employee(payload)

    def summarize(self, records: List[Dict[str, Any]]) -> Dict[str, Any]:
        return summarize_employees(records)

    def describe(self, document: Dict[str, Any]) -> Dict[str, Any]:
        return {"id": str(document['_id']), "name": document.get('name')}

    def get_statistics(self) -> Dict[str, Any]:
        """Head count overall and per department"""
        try:
            collection = self.collection
            total_count = collection.count_documents({})
            department_pipeline = [
                {"$group": {"_id": "$department", "count": {"$sum": 1}}},
                {"$sort": {"count": -1}}
            ]
            departments = list(collection.aggregate(department_pipeline))
        except PyMongoError as e:
            raise self._storage_error("summarizing", e) from e

        return {
            "total": total_count,
            "byDepartment": [{"name": d["_id"] or "Other", "count": d["count"]} for d in departments],
        }
