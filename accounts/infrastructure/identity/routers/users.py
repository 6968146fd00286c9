"""API routes for user account management."""

import logging

from fastapi import APIRouter, Depends, status

from accounts.application.identity.use_cases.user_aggregate_use_case import (
    UserAggregateUseCase,
)
from accounts.core import build_user_aggregate_use_case
from accounts.domain.common.value_objects.ids import CredentialId, UserId
from accounts.domain.identity.entities.credential import Credential
from accounts.domain.identity.entities.user import User
from accounts.infrastructure.common.di import inject_use_case
from accounts.infrastructure.common.schemas import CollectionResponse
from accounts.infrastructure.identity.schemas import (
    CredentialRequest,
    CredentialResponse,
    UserRequest,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])

get_use_case = inject_use_case(build_user_aggregate_use_case)


@router.get("", response_model=CollectionResponse[UserResponse])
def find_all(
    use_case: UserAggregateUseCase = Depends(get_use_case),
) -> CollectionResponse[UserResponse]:
    """Get all users."""
    logger.info("Fetching all users")
    return CollectionResponse(collection=[_to_response(user) for user in use_case.find_all()])


@router.get("/username/{username}", response_model=UserResponse)
def find_by_username(
    username: str,
    use_case: UserAggregateUseCase = Depends(get_use_case),
) -> UserResponse:
    """Get the user owning the credential with this username."""
    logger.info(f"Fetching user with username {username}")
    return _to_response(use_case.find_by_username(username))


@router.get("/{user_id}", response_model=UserResponse)
def find_by_id(
    user_id: int,
    use_case: UserAggregateUseCase = Depends(get_use_case),
) -> UserResponse:
    """Get a user by id."""
    logger.info(f"Fetching user {user_id}")
    return _to_response(use_case.find_by_id(user_id))


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create(
    request: UserRequest,
    use_case: UserAggregateUseCase = Depends(get_use_case),
) -> UserResponse:
    """
    Register a user, optionally with a credential.

    Ids in the payload are ignored; the database assigns them.
    """
    logger.info("Creating user")
    return _to_response(use_case.create(_to_domain(request)))


@router.put("", response_model=UserResponse)
def update_self_id(
    request: UserRequest,
    use_case: UserAggregateUseCase = Depends(get_use_case),
) -> UserResponse:
    """Update the user whose id is carried in the payload."""
    logger.info(f"Updating user {request.user_id} from payload id")
    return _to_response(use_case.update_self_id(_to_domain(request)))


@router.put("/{user_id}", response_model=UserResponse)
def update_with_id(
    user_id: int,
    request: UserRequest,
    use_case: UserAggregateUseCase = Depends(get_use_case),
) -> UserResponse:
    """
    Update a user.

    The credential is returned only when the payload carried one.
    """
    logger.info(f"Updating user {user_id}")
    return _to_response(use_case.update_with_id(user_id, _to_domain(request)))


@router.delete("/{user_id}")
def delete_by_id(
    user_id: int,
    use_case: UserAggregateUseCase = Depends(get_use_case),
) -> bool:
    """Delete a user together with its credential."""
    logger.info(f"Deleting user {user_id}")
    use_case.delete_by_id(user_id)
    return True


def _to_domain(request: UserRequest) -> User:
    credential = _credential_to_domain(request.credential) if request.credential else None
    return User.create(
        first_name=request.first_name,
        last_name=request.last_name,
        image_url=request.image_url,
        email=request.email,
        phone=request.phone,
        credential=credential,
        user_id=UserId(request.user_id) if request.user_id else None,
    )


def _credential_to_domain(request: CredentialRequest) -> Credential:
    return Credential.create(
        username=request.username,
        password=request.password,
        role=request.role,
        is_enabled=request.is_enabled,
        is_account_non_expired=request.is_account_non_expired,
        is_account_non_locked=request.is_account_non_locked,
        is_credentials_non_expired=request.is_credentials_non_expired,
        credential_id=CredentialId(request.credential_id) if request.credential_id else None,
    )


def _to_response(user: User) -> UserResponse:
    credential = None
    if user.credential is not None:
        credential = CredentialResponse(
            credential_id=user.credential.id.value,
            user_id=user.credential.user_id.value,
            username=user.credential.username,
            role=user.credential.role,
            is_enabled=user.credential.is_enabled,
            is_account_non_expired=user.credential.is_account_non_expired,
            is_account_non_locked=user.credential.is_account_non_locked,
            is_credentials_non_expired=user.credential.is_credentials_non_expired,
        )
    return UserResponse(
        user_id=user.id.value,
        first_name=user.first_name,
        last_name=user.last_name,
        image_url=user.image_url,
        email=user.email,
        phone=user.phone,
        credential=credential,
    )
