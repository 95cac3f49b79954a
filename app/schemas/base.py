"""Shared configuration for stored records."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class StoredRecord(BaseModel):
	"""Base for records persisted in the key-value store.

	Attributes are snake_case in Python and camelCase in storage
	(``author_id`` <-> ``authorId``), so stored blobs keep the browser layout.
	"""

	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

	def to_storage(self) -> Dict[str, Any]:
		return self.model_dump(mode="json", by_alias=True)
