from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class BookingSeatModel(Base):
    """
    One row per (booking, seat)

    The partial unique index is the durable guard against double booking:
    a seat can be active in at most one booking per trip.
    """

    __tablename__ = 'booking_seat'
    __table_args__ = (
        Index(
            'uq_booking_seat_trip_seat_active',
            'trip_id',
            'seat_id',
            unique=True,
            sqlite_where=text('is_active = 1'),
            postgresql_where=text('is_active'),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    booking_id: Mapped[str] = mapped_column(
        String(36), ForeignKey('booking.id'), nullable=False, index=True
    )
    trip_id: Mapped[int] = mapped_column(Integer, nullable=False)
    seat_id: Mapped[str] = mapped_column(String(8), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
