"""SQLAlchemy model for hotel rooms."""

from sqlalchemy import CheckConstraint, Column, Integer, Numeric, String

from hotel_revenue.models.base import Base


class Room(Base):
    """
    ORM model for a rentable room.

    room_rate is validated before every insert and update; the CHECK
    constraint only backs that up for writes that bypass the writers.
    """

    __tablename__ = "rooms"
    __table_args__ = (CheckConstraint("room_rate >= 0", name="ck_rooms_room_rate_non_negative"),)

    room_number = Column(Integer, primary_key=True, autoincrement=False)
    room_type = Column(String(50), nullable=True, index=True)
    room_rate = Column(Numeric(10, 2), nullable=True)
