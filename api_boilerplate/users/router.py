"""HTTP endpoints for the users resource.

Mounted at ``/users`` under the API prefix. Every response goes through the
envelope helpers; failures are raised as ``AppError`` and rendered by the
global exception handlers.
"""

import re
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Response, status

from api_boilerplate.api.dependencies import validate_body
from api_boilerplate.api.schemas.envelope import ApiResponse
from api_boilerplate.api.utils.responses import (
    send_created,
    send_no_content,
    send_success,
)
from api_boilerplate.core.exceptions import BadRequestError, NotFoundError
from api_boilerplate.users.schemas import (
    CREATE_USER_SCHEMA,
    UPDATE_USER_SCHEMA,
    UserCreate,
    UserRead,
    UserUpdate,
)
from api_boilerplate.users.service import UsersServiceDep

router = APIRouter(tags=["users"])

CreateUserBody = Annotated[dict[str, Any], Depends(validate_body(CREATE_USER_SCHEMA))]
UpdateUserBody = Annotated[dict[str, Any], Depends(validate_body(UPDATE_USER_SCHEMA))]


USER_ID_PATTERN = re.compile(r"-?[0-9]+")
USER_ID_MIN = -(2**63)
USER_ID_MAX = 2**63 - 1
USER_NOT_FOUND_MESSAGE = "User not found"


def parse_user_id(raw: str) -> int:
    """Parse a path parameter into a user ID.

    Only an optional minus sign followed by ASCII digits is accepted.

    Raises:
        BadRequestError: If ``raw`` is not an integer.
        NotFoundError: If the integer is outside the ID column's range, so
            no user can have it.
    """
    if USER_ID_PATTERN.fullmatch(raw) is None:
        raise BadRequestError("Invalid user ID")
    user_id = int(raw)
    if not USER_ID_MIN <= user_id <= USER_ID_MAX:
        raise NotFoundError(USER_NOT_FOUND_MESSAGE)
    return user_id


@router.get("", response_model=ApiResponse[list[UserRead]])
async def list_users(service: UsersServiceDep) -> Response:
    """List every user, ordered by ID."""
    users = await service.list_users()
    return send_success(
        [UserRead.model_validate(user).to_wire() for user in users],
        "Users retrieved successfully",
    )


@router.get("/{user_id}", response_model=ApiResponse[UserRead])
async def get_user(user_id: str, service: UsersServiceDep) -> Response:
    """Fetch one user."""
    user = await service.get_user(parse_user_id(user_id))
    if user is None:
        raise NotFoundError(USER_NOT_FOUND_MESSAGE)
    return send_success(
        UserRead.model_validate(user).to_wire(), "User retrieved successfully"
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[UserRead],
)
async def create_user(body: CreateUserBody, service: UsersServiceDep) -> Response:
    """Register a user. The email must not be taken."""
    user = await service.create_user(UserCreate.model_validate(body))
    return send_created(
        UserRead.model_validate(user).to_wire(), "User created successfully"
    )


@router.put("/{user_id}", response_model=ApiResponse[UserRead])
async def update_user(
    user_id: str, body: UpdateUserBody, service: UsersServiceDep
) -> Response:
    """Change a user's provided, non-empty fields.

    The body is validated before the ID is parsed.
    """
    user = await service.update_user(
        parse_user_id(user_id), UserUpdate.model_validate(body)
    )
    if user is None:
        raise NotFoundError(USER_NOT_FOUND_MESSAGE)
    return send_success(
        UserRead.model_validate(user).to_wire(), "User updated successfully"
    )


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_user(user_id: str, service: UsersServiceDep) -> Response:
    """Delete a user."""
    if not await service.delete_user(parse_user_id(user_id)):
        raise NotFoundError(USER_NOT_FOUND_MESSAGE)
    return send_no_content()
