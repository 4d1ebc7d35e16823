"""Crystal model — lens blank stock item."""

from sqlalchemy import Boolean, Column, DateTime, Float, Integer, Numeric, String
from sqlalchemy.sql import func

from app.database import Base


class Crystal(Base):
    """A lens blank kept in the warehouse.

    Attributes:
        id: Primary key.
        type: Lens type, e.g. "monofocal".
        material: One of ``constants.CRYSTAL_MATERIALS``.
        index: Refractive index, e.g. 1.56.
        coating: Coating code (see ``constants.COATING_LABELS``).
        diameter: Blank diameter in millimetres.
        stock: Units on hand.
        price: Unit price.
        is_active: Visible for sale.
        created_at: Record creation timestamp.
    """

    __tablename__ = "crystals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(String(50), nullable=False)
    material = Column(String(50), nullable=False)
    index = Column(Float, nullable=False)
    coating = Column(String(50), nullable=True)
    diameter = Column(Integer, nullable=True)
    stock = Column(Integer, default=0, nullable=False)
    price = Column(Numeric(12, 2), default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)
