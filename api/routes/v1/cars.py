"""
api/routes/v1/cars.py -- Minimal car catalog routes.

Routes:
  POST /cars            -- list a car (requires Bearer; owner = token subject)
  GET  /cars            -- list cars, optional ?city= filter
  GET  /cars/{car_id}   -- car detail

The catalog exists so favorites have something to point at. Image uploads
and pricing are out of scope: image fields are plain URL strings.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request

from api.models import CarCreate, CarResponse, ErrorDetail
from auth.dependencies import get_current_user
from auth.models import User
from fleet.models import Car
from fleet.store import CarStore

router = APIRouter()


@router.post("/cars", response_model=CarResponse, status_code=201)
def create_car(
    request: Request,
    body: CarCreate,
    current_user: User = Depends(get_current_user),
) -> CarResponse:
    car_store: CarStore = request.app.state.car_store
    car = Car(
        brand=body.brand,
        model=body.model,
        year=body.year,
        price=body.price,
        multiplier=body.multiplier,
        capacity=body.capacity,
        transmission=body.transmission,
        fuel_capacity=body.fuel_capacity,
        city=body.city,
        created_by=body.created_by or f"{current_user.first_name} {current_user.last_name}",
        created_by_email=body.created_by_email or current_user.email,
        image_url1=body.image_url1,
        image_url2=body.image_url2,
        image_url3=body.image_url3,
        owner_phone_number=current_user.phone_number,
    )
    car_id = car_store.create_car(car)
    created = car_store.get_car(car_id)
    if created is None:
        raise HTTPException(
            status_code=500,
            detail=ErrorDetail(code="internal_error", message="Car not found after write.").model_dump(),
        )
    return CarResponse.from_car(created)


@router.get("/cars", response_model=list[CarResponse])
def list_cars(request: Request, city: Optional[str] = None) -> list[CarResponse]:
    car_store: CarStore = request.app.state.car_store
    return [CarResponse.from_car(c) for c in car_store.list_cars(city=city)]


@router.get("/cars/{car_id}", response_model=CarResponse)
def get_car(request: Request, car_id: int) -> CarResponse:
    car_store: CarStore = request.app.state.car_store
    car = car_store.get_car(car_id)
    if car is None:
        raise HTTPException(
            status_code=404,
            detail=ErrorDetail(code="not_found", message="Car not found").model_dump(),
        )
    return CarResponse.from_car(car)
