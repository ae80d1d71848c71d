"""
Base Model
==========
Shared configuration and utilities for all instaclient payload models.
"""

from collections.abc import Mapping
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, ValidationError

from ..exceptions import InvalidEntityData


class InstaModel(BaseModel):
    """
    Base model for all Instagram payload models.

    Features:
        - extra="allow": unknown Instagram fields are preserved, not discarded
        - frozen=True: a validated payload is an immutable value object
        - Dict-like access: model["key"] works for backward compatibility
        - .to_dict(): convert back to plain dict
    """

    model_config = ConfigDict(
        extra="allow",
        frozen=True,
        from_attributes=True,
    )

    @classmethod
    def from_payload(cls, data: Any):
        """
        Validate a raw API payload (dict or attribute object).

        Raises:
            InvalidEntityData: payload is missing its identity or has bad field types
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            first = e.errors()[0]
            where = ".".join(str(p) for p in first["loc"]) or cls.__name__
            raise InvalidEntityData(
                f"Invalid {cls.__name__} data ({where}): {first['msg']}",
                response=dict(data) if isinstance(data, Mapping) else {},
            ) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to plain dict (backward compatibility)."""
        return self.model_dump(exclude_none=True)

    def __getitem__(self, key: str) -> Any:
        """Dict-like access: model['field_name']."""
        return getattr(self, key)

    def get(self, key: str, default: Any = None) -> Any:
        """Dict-like .get() method."""
        return getattr(self, key, default)


def require_id(v: Any) -> str:
    """Coerce an identity value (int or str) to a non-empty string."""
    if v is None or isinstance(v, bool):
        raise ValueError("identity field is required")
    v = str(v).strip()
    if not v:
        raise ValueError("identity field is required")
    return v
