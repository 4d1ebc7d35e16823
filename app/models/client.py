"""Client model — customer of the optical shop."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class Client(Base):
    """A retail customer who orders glasses.

    Clients are never physically removed: deleting one sets ``is_active`` to
    ``False`` so that historical contracts keep their owner.

    Attributes:
        id: Primary key.
        first_name: Given name.
        last_name: Family name.
        ci: National identity card number (searched as a plain substring).
        address: Optional postal address.
        email: Optional email address.
        phone: Contact phone.
        is_active: Soft-delete flag.
        created_at: Record creation timestamp.
    """

    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    ci = Column(String(30), nullable=False)
    address = Column(String(300), nullable=True)
    email = Column(String(200), nullable=True)
    phone = Column(String(50), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)

    # Relationships
    contracts = relationship("Contract", back_populates="client", lazy="select")
