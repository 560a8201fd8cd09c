"""
Record models.

A record is an open mapping with three reserved fields lifted out:
  id          caller-supplied, immutable, unique within a model
  createdAt   set once at creation
  updatedAt   set at creation and on every update
"""

from dataclasses import dataclass, field
from typing import Any, Optional

Record = dict[str, Any]

ID_FIELD = "id"
CREATED_AT = "createdAt"
UPDATED_AT = "updatedAt"

TIMESTAMP_FIELDS = (CREATED_AT, UPDATED_AT)
RESERVED_FIELDS = (ID_FIELD, CREATED_AT, UPDATED_AT)


@dataclass
class FindManyOptions:
    """Filtering and pagination for find_many.

    `where` is an AND of exact matches; `offset` is applied before `limit`.
    """

    where: dict[str, Any] = field(default_factory=dict)
    limit: Optional[int] = None
    offset: Optional[int] = None


@dataclass(frozen=True)
class FieldError:
    """One violated field from schema validation."""

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}" if self.path else self.message

    def to_dict(self) -> dict:
        return {"path": self.path, "message": self.message}
