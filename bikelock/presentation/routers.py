from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from bikelock.core.errors import InvalidInputError, InvalidStateError
from bikelock.infrastructure.database import SessionLocal
from bikelock.schemas.models import (
    EndRideResponse,
    ErrorResponse,
    LockStatusResponse,
    LoginRequest,
    LoginResponse,
    PaymentRequest,
    PaymentResponse,
    StatusResponse,
)
from bikelock.services.bikelock_service import (
    end_ride_service,
    get_lock_signal_service,
    get_status_service,
    login_service,
    payment_service,
)

router = APIRouter(prefix="/api")

_CLIENT_ERROR = {400: {"model": ErrorResponse}}


def get_db() -> Session:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def failure_response(message: str, status_code: int = 400) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


@router.post("/login", response_model=LoginResponse, responses=_CLIENT_ERROR)
def post_login(body: Optional[LoginRequest] = None):
    """
    Accept any non-empty username
    """
    try:
        return login_service(body or LoginRequest())
    except InvalidInputError as e:
        return failure_response(str(e))


@router.get("/status", response_model=StatusResponse)
def get_status(db: Session = Depends(get_db)) -> StatusResponse:
    """
    Lock state, remaining ride time and the recent ride history (dashboard)
    """
    return get_status_service(db)


@router.get("/lock-status", response_model=LockStatusResponse)
def get_lock_status(db: Session = Depends(get_db)) -> LockStatusResponse:
    """
    Minimal unlock signal polled by the lock device
    """
    return get_lock_signal_service(db)


@router.post("/end-ride", response_model=EndRideResponse, responses=_CLIENT_ERROR)
def post_end_ride(db: Session = Depends(get_db)):
    """
    Force the lock closed on the active ride

    Returns:
      - 200 when an active ride was ended
      - 400 when no ride is active
    """
    try:
        return end_ride_service(db)
    except InvalidStateError as e:
        return failure_response(str(e))


@router.post(
    "/payment",
    response_model=PaymentResponse,
    response_model_exclude_none=True,
    responses=_CLIENT_ERROR,
)
def post_payment(body: Optional[PaymentRequest] = None, db: Session = Depends(get_db)):
    """
    Pay for a booking and unlock now or schedule it

    Returns:
      - 200 with the committed reservation
      - 400 on a missing or out-of-range duration or booking date
    """
    try:
        return payment_service(body or PaymentRequest(), db)
    except InvalidInputError as e:
        return failure_response(str(e))
