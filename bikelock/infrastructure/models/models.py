from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column

from bikelock.infrastructure.database import Base

# The bike has exactly one reservation record; it always lives in this row.
LOCK_STATE_ROW_ID = 1


class LockStateModel(Base):
    __tablename__ = "lock_state"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    is_locked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    start_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    end_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class RideHistoryModel(Base):
    __tablename__ = "ride_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 0 is the newest ride
    position: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
