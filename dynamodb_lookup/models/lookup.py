"""
Lookup Request and Result Models

``ItemLookup`` is the validated request for a single GetItem call. It is
built from the caller's arguments before anything is sent to DynamoDB, so
malformed input never reaches the network.

Results are one of two frozen models:
- ``Found``: the store returned a non-empty item
- ``NotFound``: the store answered successfully but had no matching item
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ItemLookup(BaseModel):
    """Validated input for a single-item lookup."""

    table_name: str = Field(..., min_length=1, description="Name of the DynamoDB table")
    key: Dict[str, Any] = Field(..., min_length=1, description="Primary key attribute names to values")
    projection: Optional[List[str]] = Field(None, description="Attribute names to return, None for all")
    consistent_read: bool = Field(False, description="Request a strongly consistent read")
    timeout: Optional[float] = Field(None, gt=0, description="Per-call deadline in seconds")

    model_config = ConfigDict(frozen=True)

    @field_validator('key')
    @classmethod
    def validate_key(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        """Every key field needs a name and a non-empty value."""
        for name, value in v.items():
            if not name:
                raise ValueError("Key field names must be non-empty")
            if value is None:
                raise ValueError(f"Key field '{name}' has no value")
            if isinstance(value, (str, bytes)) and len(value) == 0:
                raise ValueError(f"Key field '{name}' has an empty value")
        return v

    @field_validator('projection')
    @classmethod
    def validate_projection(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        """A projection, when given, lists distinct trimmed names."""
        if v is None:
            return v
        if len(v) == 0:
            raise ValueError("Projection must name at least one attribute")
        for name in v:
            if not name.strip():
                raise ValueError("Projection attribute names must be non-empty")
            if name != name.strip():
                raise ValueError(f"Projection attribute name {name!r} has surrounding whitespace")
        duplicates = sorted({name for name in v if v.count(name) > 1})
        if duplicates:
            raise ValueError(f"Projection names attributes more than once: {duplicates}")
        return v


class Found(BaseModel):
    """The store returned the item."""

    item: Dict[str, Any]

    model_config = ConfigDict(frozen=True)

    @property
    def found(self) -> bool:
        return True


class NotFound(BaseModel):
    """The store answered successfully with no matching item."""

    table_name: str
    key: Dict[str, Any]

    model_config = ConfigDict(frozen=True)

    @property
    def found(self) -> bool:
        return False


LookupResult = Union[Found, NotFound]
