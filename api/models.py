"""
API request and response models for RentCar REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in auth/models.py and
fleet/models.py, which own the internal domain representation. Route handlers
map between the two.

Wire format: JSON field names are camelCase (phoneNumber, firstName, ...).
Every model derives from _CamelModel, which generates the aliases and still
accepts snake_case names on input.

Password material never appears in any response model. UserResponse is the
only externally visible shape of a user.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from auth.models import User
from auth.service import LoginResult
from fleet.models import Car


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Users -- requests
# ---------------------------------------------------------------------------


class RegisterRequest(_CamelModel):
    """Request body for POST /api/v1/users/register. role is not accepted."""

    phone_number: str = Field(min_length=1, max_length=32)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=1, max_length=255)


class LoginRequest(_CamelModel):
    phone_number: str = Field(min_length=1, max_length=32)
    password: str = Field(min_length=1, max_length=255)


# ---------------------------------------------------------------------------
# Users -- responses
# ---------------------------------------------------------------------------


class UserResponse(_CamelModel):
    """Public view of a user. Excludes password_hash and password_salt."""

    model_config = ConfigDict(frozen=True)

    phone_number: str
    first_name: str
    last_name: str
    email: str
    role: str
    created_at: Optional[str] = None

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            phone_number=user.phone_number,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            role=user.role,
            created_at=user.created_at,
        )


class LoginResponse(_CamelModel):
    model_config = ConfigDict(frozen=True)

    token: str
    first_name: str
    last_name: str
    role: str
    phone_number: str
    email: str

    @classmethod
    def from_result(cls, result: LoginResult) -> "LoginResponse":
        return cls(
            token=result.token,
            first_name=result.first_name,
            last_name=result.last_name,
            role=result.role,
            phone_number=result.phone_number,
            email=result.email,
        )


# ---------------------------------------------------------------------------
# Cars
# ---------------------------------------------------------------------------


class CarCreate(_CamelModel):
    """Request body for POST /api/v1/cars.

    Image fields are URLs into the static file area; uploads are handled
    elsewhere. The owner is taken from the bearer token, not the body.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    brand: str = Field(min_length=1, max_length=100)
    model: str = Field(min_length=1, max_length=100)
    year: int = Field(ge=1900, le=2100)
    price: float = Field(default=0.0, ge=0)
    multiplier: int = Field(default=1, ge=1)
    capacity: int = Field(default=0, ge=0)
    transmission: str = Field(default="", max_length=30)
    fuel_capacity: int = Field(default=0, ge=0)
    city: str = Field(default="", max_length=100)
    created_by: str = Field(default="", max_length=255)
    created_by_email: str = Field(default="", max_length=255)
    image_url1: str = Field(default="", max_length=500)
    image_url2: str = Field(default="", max_length=500)
    image_url3: str = Field(default="", max_length=500)


class CarResponse(_CamelModel):
    model_config = ConfigDict(frozen=True)

    id: int
    brand: str
    model: str
    year: int
    price: float
    multiplier: int
    capacity: int
    transmission: str
    fuel_capacity: int
    city: str
    created_by: str
    created_by_email: str
    image_url1: str
    image_url2: str
    image_url3: str
    owner_phone_number: Optional[str] = None

    @classmethod
    def from_car(cls, car: Car) -> "CarResponse":
        """Factory Method -- the mapping lives next to the output model."""
        return cls(
            id=car.id,
            brand=car.brand,
            model=car.model,
            year=car.year,
            price=car.price,
            multiplier=car.multiplier,
            capacity=car.capacity,
            transmission=car.transmission,
            fuel_capacity=car.fuel_capacity,
            city=car.city,
            created_by=car.created_by,
            created_by_email=car.created_by_email,
            image_url1=car.image_url1,
            image_url2=car.image_url2,
            image_url3=car.image_url3,
            owner_phone_number=car.owner_phone_number,
        )


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------


class ErrorDetail(BaseModel):
    """Machine-readable error payload."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Top-level error envelope returned on 4xx/5xx responses."""

    model_config = ConfigDict(frozen=True)

    error: ErrorDetail


class HealthResponse(BaseModel):
    """Response for GET /api/v1/health."""

    model_config = ConfigDict(frozen=True)

    status: str = "healthy"
    version: str
    components: dict[str, str] = Field(default_factory=dict)
