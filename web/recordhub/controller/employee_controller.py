"""
Employee Controller - Handles employee API routes
"""
from ..model.employee_model import EmployeeModel
from .record_controller import RecordController


class EmployeeController(RecordController):
    """Controller for employee operations"""

    model_class = EmployeeModel
    filter_params = ('department',)
