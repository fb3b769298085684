from pydantic import BaseModel
from typing import Any, Optional


class ApiResponseError(BaseModel):
    type: int = 0
    address: str = ""
    description: str = ""


class ApiResponse(BaseModel):
    # One record per changed attribute, e.g.
    # {"success": {"/lights/1/state/on": true}} or
    # {"error": {"type": 3, "address": "/lights/99", "description": "..."}}
    success: Optional[dict[str, Any]] = None
    error: Optional[ApiResponseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __str__(self) -> str:
        if self.error is not None:
            return f"error {self.error.type} at {self.error.address}: {self.error.description}"
        if not self.success:
            return "success"
        return ", ".join(f"{address} => {value}" for address, value in self.success.items())
