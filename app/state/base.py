"""Shared result type for state-slice actions."""

from typing import Any, Dict, Optional

from pydantic import BaseModel


class ActionResult(BaseModel):
    """Outcome of a slice action: fulfilled with a payload, or rejected with a message."""
    fulfilled: bool
    payload: Any = None
    error: Optional[str] = None
    form_errors: Dict[str, str] = {}

    @classmethod
    def ok(cls, payload: Any = None) -> "ActionResult":
        return cls(fulfilled=True, payload=payload)

    @classmethod
    def rejected(cls, error: str, form_errors: Optional[Dict[str, str]] = None) -> "ActionResult":
        return cls(fulfilled=False, error=error, form_errors=form_errors or {})
