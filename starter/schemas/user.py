"""User schemas."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from starter.validation import Email, FieldSchema, MaxLength, MinLength, Required, Schema, Trim

USER_REGISTER_SCHEMA = Schema(
    FieldSchema(
        "email",
        [
            Trim(),
            Email("Please provide a valid email address"),
            MaxLength(255, "Email must be at most 255 characters long"),
            Required("Email is required"),
        ],
        type_message="Email must be a string",
    ),
    FieldSchema(
        "password",
        [
            Trim(),
            MinLength(8, "Password must be at least 8 characters long"),
            MaxLength(255, "Password must be at most 255 characters long"),
            Required("Password is required"),
        ],
        type_message="Password must be a string",
    ),
    FieldSchema(
        "name",
        [
            Trim(),
            MinLength(2, "Name must be at least 2 characters long"),
            MaxLength(255, "Name must be at most 255 characters long"),
            Required("Name is required"),
        ],
        type_message="Name must be a string",
    ),
)


class UserRegister(BaseModel):
    """Validated user registration request."""

    email: str
    password: str
    name: str


class UserResponse(BaseModel):
    """User record response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    # stored hash, never the plaintext
    password: str | None = Field(
        default=None,
        validation_alias=AliasChoices("password_hash", "password"),
        serialization_alias="password",
    )
    is_admin: bool = Field(
        validation_alias=AliasChoices("is_admin", "isAdmin"),
        serialization_alias="isAdmin",
    )
    created_at: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("created_at", "createdAt"),
        serialization_alias="createdAt",
    )
    updated_at: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("updated_at", "updatedAt"),
        serialization_alias="updatedAt",
    )
