from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All three hotel tables inherit from this base so that a single
    Base.metadata.create_all() provisions the whole schema.
    """

    pass
