"""Generic CRUD base class for collections in the key-value store."""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from app.core.storage import LocalStore
from app.schemas.base import StoredRecord


logger = logging.getLogger(__name__)

RecordType = TypeVar("RecordType", bound=StoredRecord)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


def generate_id() -> str:
	return str(uuid.uuid4())


def load_records(store: LocalStore, model: Type[RecordType], collection: str) -> Dict[str, RecordType]:
	"""Read a collection and parse each row; rows that fail validation are logged and skipped."""
	records: Dict[str, RecordType] = {}
	for key, data in store.read_collection(collection).items():
		try:
			records[key] = model.model_validate(data)
		except ValidationError as e:
			logger.warning(f"[STORAGE] Skipping invalid {model.__name__} row {key} in {collection}: {e.error_count()} error(s)")
	return records


def save_records(
	store: LocalStore,
	model: Type[RecordType],
	collection: str,
	records: Dict[str, RecordType],
) -> None:
	"""Serialize and overwrite a whole collection.

	Rows that ``load_records`` skipped as invalid are written back untouched,
	so a write never drops data it could not read.
	"""
	with store.transaction():
		rows = {key: record.to_storage() for key, record in records.items()}
		for key, data in store.read_collection(collection).items():
			if key in rows:
				continue
			try:
				model.model_validate(data)
			except ValidationError:
				rows[key] = data
		store.write_collection(collection, rows)


class CRUDBase(Generic[RecordType, CreateSchemaType, UpdateSchemaType]):
	"""Reusable CRUD helper over one stored collection.

	Every read is a full scan of a fresh snapshot; every write rewrites the
	collection inside ``store.transaction()``. Missing records come back as
	None / False, never as exceptions.
	"""

	def __init__(self, model: Type[RecordType], collection: str):
		self.model = model
		self.collection = collection

	def load(self, store: LocalStore) -> Dict[str, RecordType]:
		return load_records(store, self.model, self.collection)

	def save(self, store: LocalStore, records: Dict[str, RecordType]) -> None:
		save_records(store, self.model, self.collection, records)

	# ----- Read -----
	def get(self, store: LocalStore, id: Any) -> Optional[RecordType]:
		"""Get one record by id."""
		return self.load(store).get(id)

	def get_multi(self, store: LocalStore, *, skip: int = 0, limit: int = 100) -> List[RecordType]:
		"""Get records with pagination, in storage order."""
		return list(self.load(store).values())[skip:skip + limit]

	def get_by_field(self, store: LocalStore, field_name: str, value: Any) -> Optional[RecordType]:
		"""Get first record where given field equals value."""
		if field_name not in self.model.model_fields:
			raise AttributeError(f"Model '{self.model.__name__}' has no field '{field_name}'")
		for record in self.load(store).values():
			if getattr(record, field_name) == value:
				return record
		return None

	def filter_by(self, store: LocalStore, **conditions: Any) -> List[RecordType]:
		"""Get all records whose fields equal the given values."""
		for field_name in conditions:
			if field_name not in self.model.model_fields:
				raise AttributeError(f"Model '{self.model.__name__}' has no field '{field_name}'")
		return [
			record
			for record in self.load(store).values()
			if all(getattr(record, name) == value for name, value in conditions.items())
		]

	# ----- Create -----
	def create(self, store: LocalStore, *, obj_in: Union[CreateSchemaType, Dict[str, Any]]) -> RecordType:
		"""Create a new record from a Pydantic schema or dict; a fresh id is assigned."""
		obj_in_data: Dict[str, Any] = obj_in.model_dump(exclude_unset=True) if isinstance(obj_in, BaseModel) else dict(obj_in)
		obj_in_data["id"] = generate_id()
		db_obj = self.model.model_validate(obj_in_data)
		with store.transaction():
			records = self.load(store)
			records[db_obj.id] = db_obj
			self.save(store, records)
		return db_obj

	# ----- Update -----
	def update(
		self,
		store: LocalStore,
		*,
		id: Any,
		obj_in: Union[UpdateSchemaType, Dict[str, Any]],
	) -> Optional[RecordType]:
		"""Merge fields from a Pydantic schema or dict into a stored record."""
		update_data = obj_in.model_dump(exclude_unset=True) if isinstance(obj_in, BaseModel) else dict(obj_in)
		update_data.pop("id", None)

		with store.transaction():
			records = self.load(store)
			db_obj = records.get(id)
			if db_obj is None:
				return None

			merged = db_obj.model_dump()
			merged.update({field: value for field, value in update_data.items() if field in self.model.model_fields})
			db_obj = self.model.model_validate(merged)
			records[id] = db_obj
			self.save(store, records)
		return db_obj

	# ----- Delete -----
	def delete(self, store: LocalStore, *, id: Any) -> bool:
		"""Delete a record. Returns False when there was nothing to delete."""
		with store.transaction():
			records = self.load(store)
			if records.pop(id, None) is None:
				return False
			self.save(store, records)
		return True
