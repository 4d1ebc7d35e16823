"""Frame model — glasses frame stock item."""

from sqlalchemy import Boolean, Column, DateTime, Integer, Numeric, String
from sqlalchemy.sql import func

from app.database import Base


class Frame(Base):
    """A frame model kept in the warehouse.

    Frames are hard-deleted; ``is_active`` only hides a frame from sale.
    """

    __tablename__ = "frames"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    brand = Column(String(100), nullable=False)
    model = Column(String(100), nullable=False)
    color = Column(String(50), nullable=True)
    material = Column(String(50), nullable=True)
    size = Column(String(30), nullable=True)
    stock = Column(Integer, default=0, nullable=False)
    price = Column(Numeric(12, 2), default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)
