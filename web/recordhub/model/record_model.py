"""
Record Model - storage operations shared by Article and Employee records.

List requests go through the query engine: the filter descriptor, sort and
page window are resolved first, then the page read and the count run
concurrently against MongoDB. The two reads are not wrapped in a transaction,
so a write that lands between them can make ``totalCount`` disagree with the
page contents. That mismatch is accepted for this read-mostly workload.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from ..errors import ConflictError, NotFoundError, StorageError, ValidationError
from ..query import (
    EntityQueryConfig, assemble, build_query, paginate, resolve_page, resolve_sort,
)
from .database import Database
from .validation import ValidationResult

logger = logging.getLogger(__name__)


@dataclass
class BulkResult:
    """Outcome of a bulk operation where each item succeeds or fails on its own."""
    succeeded: List[str] = field(default_factory=list)
    records: List[Dict[str, Any]] = field(default_factory=list)
    failures: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def succeeded_count(self) -> int:
        return len(self.succeeded)

    @property
    def failed_count(self) -> int:
        return len(self.failures)

    @property
    def is_partial(self) -> bool:
        return bool(self.succeeded) and bool(self.failures)


def _serialize_value(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    return value


class RecordModel:
    """Base model for one MongoDB collection of records"""

    collection_name: str = ""
    label: str = "Record"
    query_config: EntityQueryConfig = None
    unique_fields: tuple = ()
    # Left out of the stored document when empty, so sparse unique indexes skip them
    sparse_fields: tuple = ()
    bulk_create_limit = 1000
    bulk_delete_limit = 100

    def __init__(self):
        self.db = Database()

    @property
    def collection(self):
        return self.db.get_collection(self.collection_name)

    # Hooks for subclasses

    def validate(self, payload: Dict[str, Any]) -> ValidationResult:
        raise NotImplementedError

    def summarize(self, records: List[Dict[str, Any]]) -> Dict[str, Any]:
        raise NotImplementedError

    def get_statistics(self) -> Dict[str, Any]:
        raise NotImplementedError

    def serialize(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """Convert a stored document into a JSON-ready dict"""
        record = {key: _serialize_value(value) for key, value in document.items()}
        for sparse_field in self.sparse_fields:
            record.setdefault(sparse_field, None)
        return record

    def describe(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """Short summary of a record, used in delete responses"""
        return {"id": str(document['_id'])}

    # Helpers

    def parse_id(self, record_id: Any) -> ObjectId:
        try:
            return ObjectId(str(record_id))
        except (InvalidId, TypeError):
            raise ValidationError(f"Invalid {self.label.lower()} ID",
                                  fields={"id": f"{record_id!r} is not a valid id"})

    def _storage_error(self, action: str, error: PyMongoError) -> StorageError:
        logger.error(f"Database error while {action} {self.label.lower()}: {error}")
        return StorageError(f"Database error while {action} {self.label.lower()}")

    def _check_unique(self, data: Dict[str, Any], exclude_id: Optional[ObjectId] = None) -> None:
        """Raise ConflictError when another record already owns a unique value."""
        for unique_field in self.unique_fields:
            value = data.get(unique_field)
            if value is None:
                continue
            query = {unique_field: value}
            if exclude_id is not None:
                query['_id'] = {'$ne': exclude_id}
            if self.collection.find_one(query, {'_id': 1}) is not None:
                logger.warning(f"Duplicate {unique_field} rejected: {value}")
                raise ConflictError(
                    f"{self.label} with {unique_field} {value} already exists",
                    field=unique_field
                )

    def _duplicate_conflict(self, error: DuplicateKeyError) -> ConflictError:
        details = getattr(error, 'details', None) or {}
        key_pattern = details.get('keyPattern') or {}
        duplicate_field = next(iter(key_pattern), None) or (
            self.unique_fields[0] if self.unique_fields else '_id')
        logger.warning(f"Duplicate key rejected by index on {duplicate_field}")
        return ConflictError(
            f"{self.label} with this {duplicate_field} already exists",
            field=duplicate_field
        )

    # Queries

    def list_records(self, page: Any = None, limit: Any = None, search: Optional[str] = None,
                     sort_by: Optional[str] = None, sort_order: Optional[str] = None,
                     filters: Optional[Mapping[str, Optional[str]]] = None) -> Dict[str, Any]:
        """
        Search, sort and paginate records.

        Args:
            page: Requested page, 1-based
            limit: Records per page
            search: Free-text search term
            sort_by: Field to sort by, must be allow-listed
            sort_order: "asc" or "desc"
            filters: Exact-match filters by field

        Returns:
            List response body with records, pagination, search, sort and statistics
        """
        entity = self.query_config
        descriptor = build_query(entity, search, filters)
        sort = resolve_sort(entity, sort_by, sort_order)
        page_request = resolve_page(entity, page, limit)
        mongo_filter = descriptor.to_mongo()

        def fetch_page():
            cursor = (self.collection.find(mongo_filter)
                      .sort(sort.to_mongo())
                      .skip(page_request.skip)
                      .limit(page_request.limit))
            return list(cursor)

        try:
            with ThreadPoolExecutor(max_workers=2) as executor:
                page_future = executor.submit(fetch_page)
                count_future = executor.submit(self.collection.count_documents, mongo_filter)
                documents = page_future.result()
                total_count = count_future.result()
        except PyMongoError as e:
            raise self._storage_error("listing", e) from e

        records = [self.serialize(document) for document in documents]
        page_info = paginate(page_request, total_count)
        logger.debug(
            f"Listed {len(records)} of {total_count} {entity.plural} "
            f"(page {page_request.page}, sort {sort.field} {sort.order})"
        )
        return assemble(entity, records, page_info, descriptor.term, sort,
                        self.summarize(records))

    def get_by_id(self, record_id: Any) -> Dict[str, Any]:
        object_id = self.parse_id(record_id)
        try:
            document = self.collection.find_one({'_id': object_id})
        except PyMongoError as e:
            raise self._storage_error("fetching", e) from e

        if document is None:
            raise NotFoundError(f"{self.label} not found")
        return self.serialize(document)

    # Writes

    def create(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Validate and insert one record. Returns the stored record."""
        data = self.validate(payload).raise_for_errors(self.label.lower())
        now = datetime.now(timezone.utc)
        document = {key: value for key, value in data.items()
                    if not (key in self.sparse_fields and value is None)}
        document.update(createdAt=now, updatedAt=now)

        try:
            self._check_unique(data)
            result = self.collection.insert_one(document)
        except DuplicateKeyError as e:
            raise self._duplicate_conflict(e) from e
        except PyMongoError as e:
            raise self._storage_error("creating", e) from e

        document['_id'] = result.inserted_id
        logger.info(f"Created {self.label.lower()} {result.inserted_id}")
        return self.serialize(document)

    def update(self, record_id: Any, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Replace every mutable field of a record in one write."""
        object_id = self.parse_id(record_id)
        data = self.validate(payload).raise_for_errors(self.label.lower())
        data['updatedAt'] = datetime.now(timezone.utc)
        changes = {'$set': {key: value for key, value in data.items()
                            if not (key in self.sparse_fields and value is None)}}
        cleared = {key: "" for key in self.sparse_fields if data.get(key) is None}
        if cleared:
            changes['$unset'] = cleared

        try:
            self._check_unique(data, exclude_id=object_id)
            document = self.collection.find_one_and_update(
                {'_id': object_id},
                changes,
                return_document=ReturnDocument.AFTER
            )
        except DuplicateKeyError as e:
            raise self._duplicate_conflict(e) from e
        except PyMongoError as e:
            raise self._storage_error("updating", e) from e

        if document is None:
            raise NotFoundError(f"{self.label} not found")
        logger.info(f"Updated {self.label.lower()} {object_id}")
        return self.serialize(document)

    def delete(self, record_id: Any) -> Dict[str, Any]:
        object_id = self.parse_id(record_id)
        try:
            document = self.collection.find_one_and_delete({'_id': object_id})
        except PyMongoError as e:
            raise self._storage_error("deleting", e) from e

        if document is None:
            raise NotFoundError(f"{self.label} not found")
        logger.info(f"Deleted {self.label.lower()} {object_id}")
        return self.describe(document)

    def bulk_create(self, items: Any) -> BulkResult:
        """
        Create many records, each independently.

        Invalid or conflicting items are reported in ``BulkResult.failures``
        with their index and reason; the rest are still created.

        Raises:
            ValidationError: items is not a non-empty list or exceeds the cap
        """
        if not isinstance(items, list) or not items:
            raise ValidationError(f"Please provide an array of {self.query_config.plural}")
        if len(items) > self.bulk_create_limit:
            raise ValidationError(
                f"Maximum {self.bulk_create_limit} {self.query_config.plural} "
                f"can be created at once"
            )

        result = BulkResult()
        for index, item in enumerate(items):
            try:
                record = self.create(item)
            except (ValidationError, ConflictError, StorageError) as e:
                result.failures.append({"index": index, "error": e.message})
                continue
            result.succeeded.append(record['_id'])
            result.records.append(record)

        logger.info(
            f"Bulk created {result.succeeded_count} {self.query_config.plural}, "
            f"{result.failed_count} failed"
        )
        return result

    def bulk_delete(self, ids: Iterable[Any]) -> BulkResult:
        """
        Delete many records by id, each independently.

        Ids that are malformed or match nothing are reported as failures and
        do not stop the rest of the batch.
        """
        ids = [str(record_id).strip() for record_id in ids if str(record_id).strip()]
        if not ids:
            raise ValidationError(f"Please provide {self.label.lower()} ids to delete")
        if len(ids) > self.bulk_delete_limit:
            raise ValidationError(
                f"Maximum {self.bulk_delete_limit} {self.query_config.plural} "
                f"can be deleted at once"
            )

        result = BulkResult()
        for record_id in ids:
            try:
                self.delete(record_id)
            except (ValidationError, NotFoundError, StorageError) as e:
                result.failures.append({"id": record_id, "error": e.message})
                continue
            result.succeeded.append(record_id)

        logger.info(
            f"Bulk deleted {result.succeeded_count} {self.query_config.plural}, "
            f"{result.failed_count} failed"
        )
        return result
