"""Request and response schemas for the users API."""

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

from accounts.domain.identity.entities.credential import RoleBasedAuthority


def _not_blank(value: str) -> str:
    if not value or not value.strip():
        raise PydanticCustomError("not_blank", "must not be blank")
    return value


class CredentialRequest(BaseModel):
    """Credential payload nested in a user write."""

    credential_id: int | None = Field(default=None, ge=0)
    username: str = Field(..., max_length=255)
    password: str | None = Field(default=None, max_length=255)
    role: RoleBasedAuthority = RoleBasedAuthority.ROLE_USER
    is_enabled: bool = True
    is_account_non_expired: bool = True
    is_account_non_locked: bool = True
    is_credentials_non_expired: bool = True

    @field_validator("username", mode="after")
    @classmethod
    def username_not_blank(cls, value: str) -> str:
        return _not_blank(value)


class UserRequest(BaseModel):
    """User payload for create and update."""

    user_id: int | None = Field(default=None, ge=0)
    first_name: str | None = Field(default=None, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)
    image_url: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=255)
    credential: CredentialRequest | None = None

    @field_validator("email", mode="after")
    @classmethod
    def email_well_formed(cls, value: str | None) -> str | None:
        if value is not None and "@" not in value:
            raise PydanticCustomError("email", "must be a well-formed email address")
        return value


class CredentialResponse(BaseModel):
    """Credential as returned to clients (the password is never echoed)."""

    credential_id: int
    user_id: int
    username: str
    role: RoleBasedAuthority
    is_enabled: bool
    is_account_non_expired: bool
    is_account_non_locked: bool
    is_credentials_non_expired: bool


class UserResponse(BaseModel):
    """User as returned to clients."""

    user_id: int
    first_name: str | None = None
    last_name: str | None = None
    image_url: str | None = None
    email: str | None = None
    phone: str | None = None
    credential: CredentialResponse | None = None
