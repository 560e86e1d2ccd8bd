"""
api/routes/v1/users.py -- Registration, login, profile and favorites endpoints.

Routes (in registration order to avoid FastAPI path capture conflicts):
  POST   /users/register                        -- create account
  POST   /users/login                           -- verify credentials, return token
  GET    /users/me                              -- current user (requires Bearer)
  GET    /users/{phone_number}/favorite-cars    -- list favorite cars
  POST   /users/{user_id}/favorites/{car_id}    -- add favorite
  DELETE /users/{user_id}/favorites/{car_id}    -- remove favorite
  GET    /users/{phone_number}                  -- public profile

Error mapping (service exception -> HTTP):
  register  AlreadyExists      -> 400 "User already exists"
  login     NotFound           -> 400 "User Not Found!"
            InvalidCredential  -> 400 "Wrong Password"
  favorites NotFound           -> 404 "User not found" / "Car not found"
            AlreadyExists      -> 400 "Car already in favorites"
  profile   NotFound           -> 404

Handlers are plain `def` so FastAPI runs them on its threadpool; the stores
are blocking SQLAlchemy calls.

Security:
  POST /users/login is rate-limited to 10 requests/minute per IP.
  Cache-Control: no-store on login responses (they carry a token).
  No response ever contains password_hash or password_salt.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.responses import JSONResponse

from api.limiter import LOGIN_RATE_LIMIT, limiter
from api.models import (
    CarResponse,
    ErrorDetail,
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    UserResponse,
)
from auth.dependencies import get_current_user
from auth.favorites import FavoritesManager
from auth.models import User
from auth.service import AuthService
from core.errors import AlreadyExists, InvalidCredential, NotFound, RentCarError

# Auth policy:
# - POST /users/register, /users/login: public -- they are how a client gets a token
# - GET  /users/me:                     requires auth (get_current_user)
# - POST /cars:                        requires auth (see cars.py)
# - everything else:                    public
router = APIRouter()


def _http_error(status_code: int, exc: RentCarError) -> HTTPException:
    return HTTPException(status_code=status_code, detail=ErrorDetail(code=exc.code, message=exc.message).model_dump())


# ---------------------------------------------------------------------------
# Registration and login
# ---------------------------------------------------------------------------


@router.post("/users/register", response_model=UserResponse)
def register(request: Request, body: RegisterRequest) -> UserResponse:
    """Create a user account with role "User".

    The response is the public user view -- hash and salt stay server-side.
    """
    auth_service: AuthService = request.app.state.auth_service
    try:
        user = auth_service.register(
            phone_number=body.phone_number,
            first_name=body.first_name,
            last_name=body.last_name,
            email=body.email,
            password=body.password,
        )
    except AlreadyExists as exc:
        raise _http_error(400, exc) from exc
    return UserResponse.from_user(user)


@router.post("/users/login", response_model=LoginResponse)
@limiter.limit(LOGIN_RATE_LIMIT)  # must sit BELOW @router: FastAPI registers the wrapper
def login(request: Request, body: LoginRequest) -> JSONResponse:
    """Authenticate with phone number and password; return a bearer token."""
    auth_service: AuthService = request.app.state.auth_service
    try:
        result = auth_service.login(body.phone_number, body.password)
    except (NotFound, InvalidCredential) as exc:
        resp = JSONResponse(
            status_code=400,
            content=ErrorResponse(error=ErrorDetail(code=exc.code, message=exc.message)).model_dump(),
        )
        resp.headers["Cache-Control"] = "no-store"
        return resp

    resp = JSONResponse(
        status_code=200,
        content=LoginResponse.from_result(result).model_dump(by_alias=True),
    )
    resp.headers["Cache-Control"] = "no-store"
    return resp


@router.get("/users/me", response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)) -> UserResponse:
    """Return the user identified by the bearer token."""
    return UserResponse.from_user(current_user)


# ---------------------------------------------------------------------------
# Favorites
# ---------------------------------------------------------------------------


@router.get("/users/{phone_number}/favorite-cars", response_model=list[CarResponse])
def get_favorite_cars(request: Request, phone_number: str) -> list[CarResponse]:
    favorites: FavoritesManager = request.app.state.favorites
    try:
        cars = favorites.get_favorite_cars(phone_number)
    except NotFound as exc:
        raise _http_error(404, exc) from exc
    return [CarResponse.from_car(c) for c in cars]


@router.post("/users/{user_id}/favorites/{car_id}")
def add_to_favorites(request: Request, user_id: str, car_id: int) -> Response:
    """Mark a car as a favorite. Both the user and the car must exist."""
    favorites: FavoritesManager = request.app.state.favorites
    try:
        favorites.add_to_favorites(user_id, car_id)
    except NotFound as exc:
        raise _http_error(404, exc) from exc
    except AlreadyExists as exc:
        raise _http_error(400, exc) from exc
    return Response(status_code=200)


@router.delete("/users/{user_id}/favorites/{car_id}", status_code=204)
def remove_from_favorites(request: Request, user_id: str, car_id: int) -> Response:
    favorites: FavoritesManager = request.app.state.favorites
    try:
        favorites.remove_from_favorites(user_id, car_id)
    except NotFound as exc:
        raise _http_error(404, exc) from exc
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------


@router.get("/users/{phone_number}", response_model=UserResponse)
def get_user(request: Request, phone_number: str) -> UserResponse:
    auth_service: AuthService = request.app.state.auth_service
    try:
        user = auth_service.get_user(phone_number)
    except NotFound as exc:
        raise _http_error(404, exc) from exc
    return UserResponse.from_user(user)
