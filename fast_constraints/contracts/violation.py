from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from fast_constraints.utils.path_resolver import split_path


class Violation(BaseModel):
    """One validation failure reported by a callback. Immutable."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    message: str = Field(..., description="Rendered message")
    message_template: str = Field(..., description="Message or translation key before interpolation")
    path: str = Field(default="", description="Property path; empty when the object as a whole is invalid")
    parameters: dict[str, Any] = Field(default_factory=dict)
    invalid_value: Any = None
    code: Optional[str] = None
    plural: Optional[int] = None
    payload: Any = None

    @property
    def loc(self) -> tuple[str, ...]:
        return split_path(self.path)

    def to_error(self) -> dict[str, Any]:
        """Pydantic-like error entry, as returned in 422 responses."""
        error: dict[str, Any] = {
            "loc": self.loc,
            "msg": self.message,
            "type": self.code or "callback_error",
        }
        if self.parameters:
            error["ctx"] = dict(self.parameters)
        return error
