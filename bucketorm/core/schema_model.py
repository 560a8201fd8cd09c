"""
BucketSchemaModel: a pydantic validation gate in front of a BucketModel.

The schema is a pydantic BaseModel subclass describing `id` plus the
caller's fields (never createdAt/updatedAt). Validated data is dumped in
JSON mode, so what create returns is exactly what a later read returns.

Updates are checked against a partial copy of the schema in which every
field is optional; only the fields the caller supplied are merged.

The unchecked create/find_one/find_many/update/delete stay available and
behave exactly like the wrapped model's.
"""

import logging
from collections.abc import Mapping
from typing import Annotated, Any, Optional

from pydantic import BaseModel, Field, RootModel, ValidationError, create_model

from bucketorm.core.model import BucketModel
from bucketorm.errors.exceptions import InvalidData
from bucketorm.models.record import FieldError, Record

logger = logging.getLogger("bucketorm.schema_model")


class BucketSchemaModel:
    """Wraps a BucketModel and validates writes against one fixed schema."""

    def __init__(self, model: BucketModel, schema: type[BaseModel]):
        if not (isinstance(schema, type) and issubclass(schema, BaseModel)):
            raise TypeError(
                f"Schema must be a pydantic BaseModel subclass, got {schema!r}"
            )
        self.model = model
        self._schema = schema
        self._partial_schema = derive_partial_schema(schema)
        if self._partial_schema is None:
            logger.debug(
                f"No partial form for {schema.__name__}; updates on '{model.name}' "
                f"validate against the full schema"
            )

    @property
    def name(self) -> str:
        return self.model.name

    def get_schema(self) -> type[BaseModel]:
        return self._schema

    # --- Validated operations ---

    async def create_with_validation(self, data: Mapping[str, Any]) -> Record:
        """Validate `data` (including id) against the full schema, then create."""
        validated = self._validate(self._schema, data, partial=False)
        return await self.model.create(validated)

    async def update_with_validation(
        self, record_id: str, data: Mapping[str, Any]
    ) -> Record:
        """Validate `data` against the partial schema, then update."""
        if self._partial_schema is not None:
            validated = self._validate(
                self._partial_schema, data, partial=True, record_id=record_id
            )
        else:
            validated = self._validate(
                self._schema, data, partial=False, record_id=record_id
            )
        return await self.model.update(record_id, validated)

    def validate_data(self, data: Any) -> Record:
        """Validate against the full schema without touching storage."""
        return self._validate(self._schema, data, partial=False)

    # --- Unchecked operations ---

    async def create(self, data: Mapping[str, Any]) -> Record:
        return await self.model.create(data)

    async def find_one(self, record_id: str) -> Optional[Record]:
        return await self.model.find_one(record_id)

    async def find_many(self, options=None, **kwargs) -> list[Record]:
        return await self.model.find_many(options, **kwargs)

    async def update(self, record_id: str, data: Mapping[str, Any]) -> Record:
        return await self.model.update(record_id, data)

    async def delete(self, record_id: str) -> None:
        await self.model.delete(record_id)

    # --- Helpers ---

    def _validate(
        self,
        schema: type[BaseModel],
        data: Any,
        partial: bool,
        record_id: Optional[str] = None,
    ) -> Record:
        try:
            instance = schema.model_validate(data)
        except ValidationError as e:
            errors = field_errors(e)
            logger.info(
                f"Validation failed for '{self.name}' ({len(errors)} field error(s))"
            )
            raise InvalidData.from_field_errors(
                errors,
                model=self.name,
                record_id=record_id or _id_of(data),
            ) from e
        return instance.model_dump(mode="json", exclude_unset=partial)

    def __repr__(self) -> str:
        return f"BucketSchemaModel(name={self.name!r}, schema={self._schema.__name__})"


def derive_partial_schema(schema: type[BaseModel]) -> Optional[type[BaseModel]]:
    """
    Build a copy of `schema` in which every field may be omitted.

    Omitted fields default to None, which is never validated, so dump the
    result with exclude_unset. A value that is supplied is checked against
    the original annotation and constraints: an explicit None only passes
    where the schema itself allows None. Model-level validators do not
    carry over. Returns None for schemas without named fields (RootModel).
    """
    if issubclass(schema, RootModel):
        return None

    fields: dict[str, Any] = {}
    for field_name, info in schema.model_fields.items():
        annotation = info.annotation
        if info.metadata:
            annotation = Annotated[(annotation, *info.metadata)]
        field_kwargs = {
            name: getattr(info, name)
            for name in ("alias", "validation_alias", "description")
            if getattr(info, name) is not None
        }
        fields[field_name] = (annotation, Field(default=None, **field_kwargs))

    return create_model(
        f"Partial{schema.__name__}",
        __config__={**schema.model_config, "validate_default": False},
        **fields,
    )


def field_errors(error: ValidationError) -> list[FieldError]:
    """One FieldError per violation, path joined with dots."""
    return [
        FieldError(
            path=".".join(str(part) for part in item.get("loc", ())),
            message=item.get("msg", "invalid value"),
        )
        for item in error.errors()
    ]


def _id_of(data: Any) -> Optional[str]:
    if isinstance(data, Mapping) and isinstance(data.get("id"), str):
        return data["id"]
    return None
