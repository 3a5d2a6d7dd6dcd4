from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.column_types import UtcDateTime
from src.platform.database.orm_db_setting import Base


class BookingModel(Base):
    __tablename__ = 'booking'

    id: Mapped[str] = mapped_column(String(36), primary_key=True)  # UUID7
    trip_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    passenger_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    passenger_name: Mapped[str] = mapped_column(String(120), nullable=False)
    seat_ids: Mapped[list] = mapped_column(JSON, nullable=False)  # display order
    status: Mapped[str] = mapped_column(String(20), default='pending', nullable=False)
    payment_status: Mapped[str] = mapped_column(String(20), default='pending', nullable=False)
    booking_reference: Mapped[str] = mapped_column(String(16), nullable=False, unique=True)
    claim_token: Mapped[Optional[str]] = mapped_column(String(36), nullable=True, unique=True)
    created_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)
    cancelled_at: Mapped[Optional[datetime]] = mapped_column(UtcDateTime, nullable=True)
