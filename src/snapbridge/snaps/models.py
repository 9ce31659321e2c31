"""Snap metadata and invocation contracts."""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from snapbridge.errors import InvocationError


class SnapMetadata(BaseModel):
    """Identity and version of an installed snap, as reported by the wallet."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(..., description="Snap origin id, e.g. npm:@scope/snap")
    version: str = Field(..., description="Installed package version")
    enabled: bool = Field(default=True, description="Whether the snap is enabled")
    blocked: bool = Field(default=False, description="Whether the wallet blocked it")


@dataclass(frozen=True)
class InvocationRequest:
    """A named snap method call."""

    method: str
    params: Optional[Mapping[str, Any]] = None

    def to_payload(self) -> dict:
        payload: dict[str, Any] = {"method": self.method}
        if self.params is not None:
            payload["params"] = dict(self.params)
        return payload


@dataclass
class InvocationResult:
    """Outcome of a snap invocation.

    The result is opaque here; interpreting it is up to the caller.
    """

    success: bool
    method: str
    result: Any = None
    error: Optional[InvocationError] = None

    def unwrap(self) -> Any:
        """Return the result or raise the carried error."""
        if not self.success:
            raise self.error or InvocationError(
                f"Snap method '{self.method}' failed", method=self.method
            )
        return self.result
