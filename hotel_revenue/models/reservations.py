# models/reservations.py

from sqlalchemy import Column, Date, ForeignKey, Integer, Numeric, String

from hotel_revenue.models.base import Base


class Reservation(Base):
    """
    ORM model for a guest booking of one room over a date range.

    Many reservations may reference the same room. Rooms with reservations
    cannot be deleted (ondelete="RESTRICT").
    """

    __tablename__ = "reservations"

    reservation_id = Column(Integer, primary_key=True, autoincrement=False)
    guest_name = Column(String(50), nullable=True, index=True)
    check_in_date = Column(Date, nullable=True)
    check_out_date = Column(Date, nullable=True)
    room_number = Column(
        Integer,
        ForeignKey("rooms.room_number", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )
    total_cost = Column(Numeric(10, 2), nullable=True)
