"""Extract user-declared properties from an XRD version's validation schema."""

import copy
import json
import logging
from pydantic import BaseModel
from typing import Any, Dict, List, Optional, Union

from xrdgen.exception import SchemaParseError

logger = logging.getLogger(__name__)


class SchemaProps(BaseModel):
    """A JSON schema object, checked recursively.

    Only the keywords with a fixed shape are typed; anything else is
    accepted as is.
    """

    type: Optional[str] = None
    format: Optional[str] = None
    description: Optional[str] = None
    title: Optional[str] = None
    pattern: Optional[str] = None
    required: Optional[List[str]] = None
    enum: Optional[List[Any]] = None
    nullable: Optional[bool] = None
    properties: Optional[Dict[str, "SchemaProps"]] = None
    items: Optional[Union["SchemaProps", List["SchemaProps"]]] = None
    additionalProperties: Optional[Union[bool, "SchemaProps"]] = None
    allOf: Optional[List["SchemaProps"]] = None
    anyOf: Optional[List["SchemaProps"]] = None
    oneOf: Optional[List["SchemaProps"]] = None

    class Config:
        extra = "allow"


SchemaProps.model_rebuild()


def decode_validation_schema(raw):
    """Decode and check a raw ``openAPIV3Schema``.

    ``raw`` may be a decoded mapping or JSON text (``str``/``bytes``).

    Returns:
        The schema as a plain dict.

    Raises:
        ValueError: If ``raw`` is missing, not JSON, or not shaped like a schema
    """
    if raw is None:
        raise ValueError("schema is empty")
    if isinstance(raw, (str, bytes, bytearray)):
        raw = json.loads(raw)
    if not isinstance(raw, dict):
        raise ValueError(f"expected a JSON object, got {type(raw).__name__}")
    SchemaProps.model_validate(raw)
    return raw


def get_props(field, validation, version=None):
    """Return the properties and required list of ``field`` in a schema.

    Args:
        field: Top-level schema field, ``spec`` or ``status``
        validation: The version's validation block, may be None
        version: Version name, used in error messages

    Returns:
        Tuple of (properties, required). Both are empty when there is no
        validation block or the field is not declared. The values are copies.

    Raises:
        SchemaParseError: If the raw schema cannot be parsed
    """
    if validation is None:
        return {}, []

    try:
        schema = decode_validation_schema(validation.openAPIV3Schema)
    except ValueError as e:
        raise SchemaParseError(field, e, version=version) from e

    fragment = (schema.get("properties") or {}).get(field)
    if fragment is None:
        logger.debug(f"No {field} properties declared in version {version}")
        return {}, []

    props = copy.deepcopy(fragment.get("properties") or {})
    return props, list(fragment.get("required") or [])


def merge_props(*layers):
    """Merge property maps into a new dict; later layers win on collisions."""
    merged = {}
    for layer in layers:
        merged.update(layer)
    return merged
