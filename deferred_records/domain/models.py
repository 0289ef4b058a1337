"""
Domain models for Deferred Records.

Defines the immutable person record held by the in-memory store. The model
accepts both snake_case field names and the camelCase aliases used by seed
files (``firstName``/``lastName``).
"""
from __future__ import annotations

from pydantic import BaseModel, Field


class Person(BaseModel):
    """
    A single record in the person store.
    """

    id: int = Field(..., ge=0, description="Unique identifier within the store.")
    first_name: str = Field(..., alias="firstName", description="Given name.")
    last_name: str = Field(..., alias="lastName", description="Family name.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "arbitrary_types_allowed": False,
    }

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __str__(self) -> str:
        return f"Person(id={self.id}, firstName={self.first_name}, lastName={self.last_name})"


__all__ = ["Person"]
