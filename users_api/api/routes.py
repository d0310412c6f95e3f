from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from users_api.core.config import Settings
from users_api.model.pagination import Page
from users_api.model.users import (
    CreateUserRequest,
    HealthResponse,
    MessageResponse,
    UpdateUserDetailsRequest,
    UpdateUserStatusRequest,
    User,
)
from users_api.services.user_service import UserService

health_router = APIRouter()
router = APIRouter(tags=["users"])

NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": MessageResponse}}


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def user_not_found(username: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND, detail=f"User not found: '{username}'"
    )


@health_router.get("/health", response_model=HealthResponse)
async def health(service: UserService = Depends(get_user_service)):
    return {"status": "ok", "users": await service.count()}


@router.get("", response_model=Page[User])
async def list_users(
    page_current: Annotated[int, Query(alias="pageCurrent")] = 1,
    page_size: Annotated[Optional[int], Query(alias="pageSize")] = None,
    service: UserService = Depends(get_user_service),
    settings: Settings = Depends(get_app_settings),
):
    if page_size is None:
        page_size = settings.default_page_size
    return await service.get_all(page_current, page_size)


@router.get("/{username}", response_model=User, responses=NOT_FOUND)
async def get_user(username: str, service: UserService = Depends(get_user_service)):
    user = await service.get_by_username(username)
    if user is None:
        raise user_not_found(username)
    return user


@router.post(
    "",
    response_model=User,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_409_CONFLICT: {"model": MessageResponse}},
)
async def create_user(
    payload: CreateUserRequest, service: UserService = Depends(get_user_service)
):
    return await service.create(payload)


@router.patch("/{username}", response_model=User, responses=NOT_FOUND)
async def update_user_details(
    username: str,
    payload: UpdateUserDetailsRequest,
    service: UserService = Depends(get_user_service),
):
    user = await service.update_user_details(username, payload)
    if user is None:
        raise user_not_found(username)
    return user


@router.patch("/{username}/status", response_model=User, responses=NOT_FOUND)
async def update_user_status(
    username: str,
    payload: UpdateUserStatusRequest,
    service: UserService = Depends(get_user_service),
):
    user = await service.update_user_status(username, payload)
    if user is None:
        raise user_not_found(username)
    return user


@router.post("/{username}/logins", response_model=User, responses=NOT_FOUND)
async def increase_logins_counter(
    username: str, service: UserService = Depends(get_user_service)
):
    user = await service.increase_logins_counter(username)
    if user is None:
        raise user_not_found(username)
    return user


@router.delete(
    "/{username}", status_code=status.HTTP_204_NO_CONTENT, responses=NOT_FOUND
)
async def delete_user(username: str, service: UserService = Depends(get_user_service)):
    if not await service.remove(username):
        raise user_not_found(username)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
