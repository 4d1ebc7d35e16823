"""Task model — production work order for one contract."""

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class Task(Base):
    """Workshop task with the six fabrication steps as independent flags.

    Attributes:
        id: Primary key.
        contract_id: FK to Contract.
        assigned_date: Day the task was handed to the workshop.
        measure, mark, cut, bevel, mount, quality_check: Step flags.
        notes: Free-text workshop notes.
        created_at: Record creation timestamp.
    """

    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    contract_id = Column(Integer, ForeignKey("contracts.id"), nullable=False)
    assigned_date = Column(Date, nullable=False)
    measure = Column(Boolean, default=False, nullable=False)
    mark = Column(Boolean, default=False, nullable=False)
    cut = Column(Boolean, default=False, nullable=False)
    bevel = Column(Boolean, default=False, nullable=False)
    mount = Column(Boolean, default=False, nullable=False)
    quality_check = Column(Boolean, default=False, nullable=False)
    notes = Column(String(1000), nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)

    # Relationships
    contract = relationship("Contract", back_populates="tasks", lazy="select")
