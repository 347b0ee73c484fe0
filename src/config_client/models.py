from __future__ import annotations

import json
import logging
import math
from typing import Any, Dict, List, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationError,
    field_validator,
)

from config_client.errors import PropertyConversionError

logger = logging.getLogger(__name__)

ScalarValue = Union[StrictBool, StrictInt, StrictFloat, StrictStr]
NestedValue = Union[List[Any], Dict[str, Any]]
PropertyValue = Union[ScalarValue, NestedValue, None]


class PropertySource(BaseModel):
    """One named bundle of dotted keys, e.g. the content of a single file on the server."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = ""
    source: Dict[str, PropertyValue] = Field(default_factory=dict)

    @field_validator("source", mode="before")
    @classmethod
    def _null_source_is_empty(cls, value: Any) -> Any:
        return {} if value is None else value


class Environment(BaseModel):
    """
    Response envelope returned by the config server for one application/profile/label.

    The order of `property_sources` is defined by the server and is applied as-is.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    name: Optional[str] = None
    profiles: List[str] = Field(default_factory=list)
    label: Optional[str] = None
    version: Optional[str] = None
    # Null entries are kept and skipped when the environment is applied.
    property_sources: List[Optional[PropertySource]] = Field(default_factory=list, alias="propertySources")

    @field_validator("profiles", "property_sources", mode="before")
    @classmethod
    def _null_list_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value


def render_property_value(value: PropertyValue) -> str:
    # bool is checked before int since it is a subclass of int.
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and not math.isfinite(value):
        if math.isnan(value):
            return "NaN"
        return "Infinity" if value > 0 else "-Infinity"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (list, dict)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    if value is None:
        raise PropertyConversionError("Property value is null.")
    raise PropertyConversionError(f"Unsupported property value type: {type(value).__name__}")


def deserialize_environment(payload: bytes) -> Environment | None:
    """Parse a config server response body. Returns None when the body is not a valid Environment."""
    try:
        return Environment.model_validate_json(payload)
    except ValidationError as exc:
        logger.error(
            "Config server response could not be deserialized. error_count=%s errors=%s",
            exc.error_count(),
            exc.errors(include_url=False, include_input=False),
        )
        return None
