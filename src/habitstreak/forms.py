"""Habit form definitions."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError

NAME_MAX_LENGTH = 50


class HabitForm(BaseModel):
    """Form model for creating a habit."""

    model_config = ConfigDict(str_strip_whitespace=True, strict=True)

    name: str = Field(description="Short label for the habit", max_length=NAME_MAX_LENGTH)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        """Ensure the habit name is present once surrounding whitespace is gone."""

        if not value:
            raise ValueError("Habit name is required")
        return value

    @classmethod
    def clean(cls, payload: dict[str, Any]) -> "HabitForm":
        """Validate ``payload`` or raise the domain ``ValidationError``."""

        try:
            return cls.model_validate(payload)
        except PydanticValidationError as exc:
            details: list[dict[str, Any]] = []
            for error in exc.errors(include_url=False):
                loc = error.get("loc", ())
                details.append(
                    {
                        "field": str(loc[0]) if loc else "__root__",
                        "message": error.get("msg", "Invalid value"),
                    }
                )
            raise ValidationError("Invalid habit", details=details) from exc


__all__ = ["HabitForm", "NAME_MAX_LENGTH"]
