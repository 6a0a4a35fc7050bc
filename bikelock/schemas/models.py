from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class LoginRequest(BaseModel):
    username: Optional[str] = None


class LoginResponse(BaseModel):
    success: bool
    message: str
    user: str


class RideHistoryEntry(BaseModel):
    startTime: datetime
    endTime: datetime
    amount: int


class StatusResponse(BaseModel):
    isLocked: bool
    rideActive: bool
    startTime: Optional[datetime]
    endTime: Optional[datetime]
    remainingMinutes: int
    remainingSeconds: int
    rideHistory: List[RideHistoryEntry]


class LockStatusResponse(BaseModel):
    unlock: bool
    timeLeft: int


class EndRideResponse(BaseModel):
    success: bool
    message: str


class PaymentRequest(BaseModel):
    durationMinutes: Optional[int] = None
    bookingDate: Optional[str] = None
    hours: Optional[int] = None
    minutes: Optional[int] = None


class PaymentResponse(BaseModel):
    success: bool
    message: str
    unlock: bool
    startTime: datetime
    endTime: datetime
    durationMinutes: int
    isFuture: Optional[bool] = None


class ErrorResponse(BaseModel):
    success: bool
    message: str
