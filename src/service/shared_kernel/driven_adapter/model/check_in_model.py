from datetime import datetime
from typing import Optional

from sqlalchemy import ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.column_types import UtcDateTime
from src.platform.database.orm_db_setting import Base


class CheckInModel(Base):
    __tablename__ = 'check_in'
    __table_args__ = (
        UniqueConstraint('trip_id', 'booking_id', name='uq_check_in_trip_booking'),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    trip_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    booking_id: Mapped[str] = mapped_column(String(36), ForeignKey('booking.id'), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    check_in_time: Mapped[Optional[datetime]] = mapped_column(UtcDateTime, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)
