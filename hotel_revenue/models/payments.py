from sqlalchemy import Column, Date, ForeignKey, Integer, Numeric, String

from hotel_revenue.models.base import Base


class Payment(Base):
    """
    ORM model for a payment made against a reservation.

    payment_method is free text in the table (Credit, Cash and Debit by
    convention); the HTTP payload is what narrows it.
    """

    __tablename__ = "payments"

    payment_id = Column(Integer, primary_key=True, autoincrement=False)
    reservation_id = Column(
        Integer,
        ForeignKey("reservations.reservation_id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )
    payment_date = Column(Date, nullable=True)
    payment_amount = Column(Numeric(10, 2), nullable=True)
    payment_method = Column(String(50), nullable=True)
