"""
Input validation for Article and Employee payloads.

Validators take the raw request payload and return a ``ValidationResult``
holding either the cleaned document or field-level error messages. They never
touch the database.
"""
import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..errors import ValidationError

ARTICLE_UNITS = (
    'pcs', 'kg', 'g', 'lb', 'oz', 'm', 'cm', 'mm', 'ft', 'in', 'l', 'ml',
    'gal', 'qt', 'pt', 'set', 'box', 'pack', 'dozen', 'pair', 'other',
)

DEPARTMENTS = (
    'Engineering', 'Marketing', 'Sales', 'HR', 'Finance', 'Operations',
    'Support', 'Management', 'IT', 'Legal', 'Research', 'Quality Assurance',
    'Other',
)

JOB_DEPARTMENTS = {
    'software engineer': 'Engineering',
    'developer': 'Engineering',
    'marketing manager': 'Marketing',
    'sales representative': 'Sales',
    'hr manager': 'HR',
    'accountant': 'Finance',
    'operations manager': 'Operations',
    'support specialist': 'Support',
    'it specialist': 'IT',
}

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
PHONE_PATTERN = re.compile(r'^\+?[\d\s\-()]{7,}$')

# Largest integer BSON can store
MAX_INT64 = 2 ** 63 - 1


@dataclass
class ValidationResult:
    data: Dict[str, Any] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_for_errors(self, label: str = 'record') -> Dict[str, Any]:
        """Return the cleaned data, or raise ValidationError listing every bad field."""
        if self.errors:
            details = '; '.join(self.errors.values())
            raise ValidationError(f"Invalid {label}: {details}", fields=dict(self.errors))
        return self.data


def _text(payload: Dict[str, Any], name: str) -> Optional[str]:
    value = payload.get(name)
    if value is None:
        return None
    if not isinstance(value, str):
        value = str(value)
    value = value.strip()
    return value or None


def _number(payload: Dict[str, Any], name: str, label: str, result: ValidationResult,
            default: float) -> Optional[float]:
    value = payload.get(name)
    if value is None or value == '':
        return default
    if isinstance(value, bool):
        result.errors[name] = f"{label} must be a number"
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        result.errors[name] = f"{label} must be a number"
        return None
    if math.isnan(number) or math.isinf(number):
        result.errors[name] = f"{label} must be a number"
        return None
    if number < 0:
        result.errors[name] = f"{label} cannot be negative"
        return None
    return number


def _whole_number(value: Any) -> Optional[int]:
    """Exact integer for int values and integer strings; "12.0" style floats are accepted too."""
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    try:
        as_float = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(as_float) or math.isinf(as_float) or not as_float.is_integer():
        return None
    return int(as_float)


def _check_length(value: Optional[str], name: str, label: str, limit: int,
                  result: ValidationResult) -> None:
    if value is not None and len(value) > limit:
        result.errors[name] = f"{label} cannot exceed {limit} characters"


def validate_article(payload: Dict[str, Any]) -> ValidationResult:
    """Validate and normalize an Article create/update payload."""
    result = ValidationResult()
    if not isinstance(payload, dict):
        result.errors['_'] = "Article payload must be an object"
        return result

    raw_number = payload.get('articleNumber')
    article_number = None
    if raw_number is None or raw_number == '' or isinstance(raw_number, bool):
        result.errors['articleNumber'] = "Article number is required"
    else:
        article_number = _whole_number(raw_number)
        if article_number is None:
            result.errors['articleNumber'] = "Article number must be a whole number"
        elif article_number < 1:
            result.errors['articleNumber'] = "Article number must be positive"
        elif article_number > MAX_INT64:
            result.errors['articleNumber'] = f"Article number cannot exceed {MAX_INT64}"

    article_name = _text(payload, 'articleName')
    if article_name is None:
        result.errors['articleName'] = "Article name is required"
    _check_length(article_name, 'articleName', "Article name", 200, result)

    unit = _text(payload, 'unit') or 'pcs'
    if unit not in ARTICLE_UNITS:
        result.errors['unit'] = f"{unit} is not a valid unit"

    package_size = _number(payload, 'packageSize', "Package size", result, default=1)
    purchase_price = _number(payload, 'purchasePrice', "Purchase price", result, default=0)
    sales_price = _number(payload, 'salesPrice', "Sales price", result, default=0)

    category = _text(payload, 'category') or 'General'
    _check_length(category, 'category', "Category", 100, result)
    description = _text(payload, 'description')
    _check_length(description, 'description', "Description", 1000, result)

    if result.errors:
        return result

    result.data = {
        'articleNumber': article_number,
        'articleName': article_name,
        'unit': unit,
        'packageSize': package_size,
        'purchasePrice': round(purchase_price, 2),
        'salesPrice': round(sales_price, 2),
        'category': category,
        'description': description,
    }
    return result


def derive_department(job: Optional[str]) -> str:
    """Department implied by a job title, 'Other' when nothing matches."""
    if not job:
        return 'Other'
    lowered = job.lower()
    for title, department in JOB_DEPARTMENTS.items():
        if title in lowered:
            return department
    return 'Other'


def validate_employee(payload: Dict[str, Any]) -> ValidationResult:
    """Validate and normalize an Employee create/update payload."""
    result = ValidationResult()
    if not isinstance(payload, dict):
        result.errors['_'] = "Employee payload must be an object"
        return result

    name = _text(payload, 'name')
    if name is None:
        result.errors['name'] = "Name is required"
    elif len(name) < 2:
        result.errors['name'] = "Name must be at least 2 characters"
    _check_length(name, 'name', "Name", 100, result)

    email = _text(payload, 'email')
    if email is not None:
        email = email.lower()
        if not EMAIL_PATTERN.match(email):
            result.errors['email'] = "Please provide a valid email address"

    phone = _text(payload, 'phone')
    if phone is not None and not PHONE_PATTERN.match(phone):
        result.errors['phone'] = "Please provide a valid phone number"

    job = _text(payload, 'job') or 'Employee'
    _check_length(job, 'job', "Job title", 100, result)

    department = _text(payload, 'department')
    if department is not None and department not in DEPARTMENTS:
        result.errors['department'] = f"{department} is not a valid department"
    if department is None or department == 'Other':
        department = derive_department(job)

    if result.errors:
        return result

    result.data = {
        'name': name,
        'email': email,
        'phone': phone,
        'job': job,
        'department': department,
    }
    return result
