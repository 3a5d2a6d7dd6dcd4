from datetime import datetime
from typing import Optional

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.column_types import UtcDateTime
from src.platform.database.orm_db_setting import Base


class TripModel(Base):
    __tablename__ = 'trip'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    route_ref: Mapped[str] = mapped_column(String(64), nullable=False)
    bus_plate: Mapped[str] = mapped_column(String(16), nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    company_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
    status: Mapped[str] = mapped_column(String(20), default='scheduled', nullable=False)
    departure_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)
    arrival_at: Mapped[Optional[datetime]] = mapped_column(UtcDateTime, nullable=True)
    actual_departure_at: Mapped[Optional[datetime]] = mapped_column(UtcDateTime, nullable=True)
    actual_arrival_at: Mapped[Optional[datetime]] = mapped_column(UtcDateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)
