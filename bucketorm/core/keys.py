"""
Key scheme.

    <model>/<id>.json    one object per record
    <model>/             namespace prefix used for listing

Ids may not contain the separator, so two (model, id) pairs never map
to the same key and listing a prefix never picks up a nested object.
"""

from typing import Any, Optional

from bucketorm.errors.exceptions import InvalidData

SEPARATOR = "/"
RECORD_SUFFIX = ".json"


def validate_model_name(model_name: str) -> str:
    if not isinstance(model_name, str) or not model_name:
        raise ValueError("Model name must be a non-empty string")
    if SEPARATOR in model_name:
        raise ValueError(f"Model name '{model_name}' must not contain '{SEPARATOR}'")
    return model_name


def validate_id(record_id: Any, model_name: Optional[str] = None) -> str:
    """Return the id unchanged, or raise InvalidData."""
    if not isinstance(record_id, str) or not record_id:
        raise InvalidData("ID must be a non-empty string", model=model_name)
    if SEPARATOR in record_id:
        raise InvalidData(
            f"ID '{record_id}' must not contain '{SEPARATOR}'",
            model=model_name,
            record_id=record_id,
        )
    return record_id


def prefix_of(model_name: str) -> str:
    return f"{model_name}{SEPARATOR}"


def key_of(model_name: str, record_id: str) -> str:
    return f"{prefix_of(model_name)}{record_id}{RECORD_SUFFIX}"


def id_from_key(model_name: str, key: str) -> Optional[str]:
    """Inverse of key_of. Returns None for keys that are not records of this model."""
    prefix = prefix_of(model_name)
    if not key.startswith(prefix) or not key.endswith(RECORD_SUFFIX):
        return None
    record_id = key[len(prefix):-len(RECORD_SUFFIX)]
    if not record_id or SEPARATOR in record_id:
        return None
    return record_id
