# src/task_tracker/api/routes/accounts.py

"""Registration, login and the public user counter."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ...core.errors import TaskTrackerError
from ...core.state import AppState
from ...tasks import task_api
from ..deps import get_state, http_error
from ..schemas import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserCountResponse,
    UserOut,
)

router = APIRouter(tags=["accounts"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
def register(request: RegisterRequest, state: AppState = Depends(get_state)) -> RegisterResponse:
    try:
        user = task_api.register_user(
            state,
            email=request.email,
            password=request.password,
            firstname=request.firstname,
            lastname=request.lastname,
        )
    except TaskTrackerError as exc:
        raise http_error(exc) from exc
    return RegisterResponse(user=UserOut.from_user(user))


@router.post("/login", response_model=LoginResponse)
def login(request: LoginRequest, state: AppState = Depends(get_state)) -> LoginResponse:
    try:
        token, user = task_api.login(state, email=request.email, password=request.password)
    except TaskTrackerError as exc:
        raise http_error(exc) from exc
    return LoginResponse(token=token, firstname=user.firstname, lastname=user.lastname)


@router.get("/usercount", response_model=UserCountResponse)
def user_count(state: AppState = Depends(get_state)) -> UserCountResponse:
    return UserCountResponse(usercount=task_api.count_users(state))
