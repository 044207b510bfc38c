"""Response envelope shared by every endpoint."""
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base schema exposing camelCase names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(BaseModel, Generic[T]):
    """``{success, data?, error?}`` envelope."""
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None


class Acknowledgement(BaseModel):
    success: bool = True


def ok(data) -> ApiResponse:
    """Successful envelope; ``error`` is left unset so it is not serialized."""
    return ApiResponse(success=True, data=data)


def fail(message: str) -> dict:
    return {"success": False, "error": message}
