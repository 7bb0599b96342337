# backend/schemas/common.py
from typing import Annotated, Any, Generic, Optional, TypeVar

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


# Base configuration for ORM compatibility and camelCase JSON
class ORMBase(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# Envelope wrapping every response body
class ApiResponse(BaseModel, Generic[T]):
    success: bool
    message: str = ""
    data: Optional[T] = None


def ok(data: Any = None, message: str = "") -> ApiResponse:
    return ApiResponse(success=True, message=message, data=data)


def fail(message: str, data: Any = None) -> dict:
    return {"success": False, "message": message, "data": data}


def _check_email(value: str) -> str:
    # Format check only, the address is kept exactly as written
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(f"value is not a valid email address: {e}")
    return value


EmailAddress = Annotated[str, AfterValidator(_check_email)]
