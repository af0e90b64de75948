from __future__ import annotations

from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

# Legacy back-ends used customId/dateCreated and dropped empty descriptions.
_ID_ALIASES = AliasChoices("id", "customId")
_CREATED_AT_ALIASES = AliasChoices("createdAt", "dateCreated", "created_at")

_EXAMPLE = {
    "id": "3f2b9c1e8a4d4f6b9e0c7a5d1b2e3f4a",
    "name": "Buy groceries",
    "description": "Milk, eggs, bread",
    "createdAt": "25/01/2025, 10:15:30",
}


def _require_name(v: Optional[str]) -> str:
    """
    Strip whitespace and reject blank names.
    """
    if v is None:
        raise ValueError("name is required")
    s = v.strip()
    if not s:
        raise ValueError("name must not be blank")
    return s


def _description_or_empty(v: Optional[str]) -> str:
    return "" if v is None else v


# PUBLIC_INTERFACE
class TaskRecord(BaseModel):
    """
    A task as exchanged with the remote task store.

    Records are immutable; a changed task is a new record. Serialize with
    ``model_dump(by_alias=True)`` to get the wire shape
    ``{id, name, description, createdAt}``.
    """

    model_config = ConfigDict(frozen=True, json_schema_extra={"example": _EXAMPLE})

    id: str = Field(..., validation_alias=_ID_ALIASES, description="Client-generated unique identifier")
    name: str = Field(..., description="Display name of the task")
    description: str = Field(default="", description="Free-form description")
    created_at: str = Field(
        default="",
        validation_alias=_CREATED_AT_ALIASES,
        serialization_alias="createdAt",
        description="Human-readable creation (or last update) timestamp",
    )

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, v: Optional[str]) -> str:
        return _description_or_empty(v)

    def to_wire(self) -> dict:
        """Return the JSON-ready dict sent over the wire."""
        return self.model_dump(by_alias=True)


# PUBLIC_INTERFACE
class TaskCreate(BaseModel):
    """
    Request body for creating a task. The id is assigned by the client.
    """

    model_config = ConfigDict(json_schema_extra={"example": _EXAMPLE})

    id: str = Field(..., validation_alias=_ID_ALIASES, min_length=1, description="Client-generated unique identifier")
    name: str = Field(..., description="Display name of the task")
    description: str = Field(default="", description="Free-form description")
    created_at: str = Field(default="", validation_alias=_CREATED_AT_ALIASES, description="Creation timestamp")

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> str:
        return _require_name(v)

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, v: Optional[str]) -> str:
        return _description_or_empty(v)


# PUBLIC_INTERFACE
class TaskReplace(BaseModel):
    """
    Request body for a full-record update. Any id in the body is ignored in
    favour of the id in the request path.
    """

    model_config = ConfigDict(json_schema_extra={"example": _EXAMPLE})

    id: Optional[str] = Field(default=None, validation_alias=_ID_ALIASES)
    name: str = Field(..., description="Display name of the task")
    description: str = Field(default="", description="Free-form description")
    created_at: str = Field(default="", validation_alias=_CREATED_AT_ALIASES, description="Refreshed timestamp")

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> str:
        return _require_name(v)

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, v: Optional[str]) -> str:
        return _description_or_empty(v)
