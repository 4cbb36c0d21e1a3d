"""FastAPI endpoints for the Identity domain."""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from identity.api.schemas import (
    CreateUserRequest,
    SeedUsersResponse,
    SignInRequest,
    StatusResponse,
    UpdateUserRequest,
    UserIdResponse,
    UserResponse,
)
from identity.user.authentication import AuthenticateUser
from identity.user.management import DeleteUser, UpdateUser
from identity.user.provisioning import ProvisionUser
from identity.user.queries import get_user, list_users
from identity.user.seeding import SeedUsers

router = APIRouter(prefix="/users", tags=["users"])


def _to_response(user) -> UserResponse:
    return UserResponse(
        id=str(user.id),
        name=user.name,
        username=user.username,
        email=user.email,
        address=user.address,
        phone_number=user.phone_number,
        profile_image=user.profile_image,
        role=user.role,
        comments=user.comments,
    )


@router.post("", status_code=201, response_model=UserIdResponse)
async def create_user(body: CreateUserRequest) -> UserIdResponse:
    command = ProvisionUser(
        email=body.email,
        password=body.password,
        name=body.name,
        username=body.username,
        address=body.address,
        phone_number=body.phone_number,
        profile_image=body.profile_image,
        role=body.role,
        comments=body.comments,
    )
    result = current_domain.process(command, asynchronous=False)
    return UserIdResponse(user_id=result)


@router.get("", response_model=list[UserResponse])
async def all_users() -> list[UserResponse]:
    return [_to_response(user) for user in list_users()]


@router.post("/sign-in", response_model=UserResponse)
async def sign_in(body: SignInRequest) -> UserResponse:
    user_id = current_domain.process(AuthenticateUser(email=body.email, password=body.password), asynchronous=False)
    return _to_response(get_user(user_id))


@router.post("/seed", response_model=SeedUsersResponse)
async def seed_users() -> SeedUsersResponse:
    created = current_domain.process(SeedUsers(), asynchronous=False)
    return SeedUsersResponse(created=created)


@router.get("/{user_id}", response_model=UserResponse)
async def user_detail(user_id: str) -> UserResponse:
    return _to_response(get_user(user_id))


@router.put("/{user_id}", response_model=StatusResponse)
async def update_user(user_id: str, body: UpdateUserRequest) -> StatusResponse:
    command = UpdateUser(
        user_id=user_id,
        name=body.name,
        address=body.address,
        phone_number=body.phone_number,
        profile_image=body.profile_image,
        role=body.role,
        comments=body.comments,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@router.delete("/{user_id}", response_model=StatusResponse)
async def delete_user(user_id: str) -> StatusResponse:
    current_domain.process(DeleteUser(user_id=user_id), asynchronous=False)
    return StatusResponse()
