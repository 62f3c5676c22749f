"""User API endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, status

from starter.api.dependencies import get_json_body, get_registration_service
from starter.context import AppContext, get_context
from starter.schemas.user import UserResponse
from starter.services.registration import RegistrationService

router = APIRouter(prefix="/api", tags=["users"])


@router.post(
    "/user",
    response_model=UserResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
def create_user(
    payload: Annotated[Any, Depends(get_json_body)],
    service: Annotated[RegistrationService, Depends(get_registration_service)],
    context: Annotated[AppContext, Depends(get_context)],
):
    """Register a new user."""
    user = service.register(payload)

    response = UserResponse.model_validate(user)
    if context.settings.redact_password:
        response = response.model_copy(update={"password": None})
    return response
