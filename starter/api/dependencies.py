"""FastAPI dependencies for request bodies and services."""

from typing import Annotated, Any

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from starter.database import get_db
from starter.errors import ValidationFailedError
from starter.services.registration import RegistrationService
from starter.validation import SchemaError


async def get_json_body(request: Request) -> Any:
    """Decode the JSON body, leaving shape checks to the schema."""
    try:
        return await request.json()
    except ValueError:
        raise ValidationFailedError(SchemaError.invalid_body().sanitize()) from None


def get_registration_service(
    db: Annotated[Session, Depends(get_db)],
) -> RegistrationService:
    """Get registration service with dependencies."""
    return RegistrationService(db)
