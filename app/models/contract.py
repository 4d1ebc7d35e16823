"""Contract model — an order for a pair of prescription glasses."""

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class Contract(Base):
    """Glasses order with prescription, product options, and payment data.

    ``status`` is a free-form string at the storage layer.  The console moves
    it forward through ``constants.CONTRACT_STATUSES`` one step at a time, but
    nothing here prevents a direct update to any other value.

    Attributes:
        id: Primary key.
        client_id: FK to Client (the ordering customer).
        frame: Free-text frame description.
        sphere_od / sphere_oi: Sphere, right / left eye.
        cylinder_od / cylinder_oi: Cylinder, right / left eye.
        axis_od / axis_oi: Axis, right / left eye.
        prysm_od / prysm_oi: Prism, right / left eye.
        base_od / base_oi: Prism base, right / left eye.
        add: Near addition.
        dp: Pupillary distance as written by the optometrist.
        shape: Frame shape (see ``constants.SHAPES``).
        mode: Lens mode (see ``constants.MODES``).
        crystal: Lens material (see ``constants.CRYSTAL_MATERIALS``).
        color: Lens tint (see ``constants.LENS_COLORS``).
        total: Total price.
        paid_cash / paid_transfer: Down-payment split.
        paid_type: "efectivo", "transferencia" or "mixto".
        status: Lifecycle status.
        confirmed: Order confirmed by the client.
        supervised: Order reviewed by a supervisor.
        beneficiary_*: Person who wears the glasses, when not the client.
        presented: "si" / "no" — prescription presented.
        warranty_end_date: End of the warranty period.
        end_payment_*: Final payment split and method.
        created_at: Record creation timestamp.
    """

    __tablename__ = "contracts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False)
    frame = Column(String(200), nullable=True)

    # Prescription
    sphere_od = Column(Float, nullable=True)
    sphere_oi = Column(Float, nullable=True)
    cylinder_od = Column(Float, nullable=True)
    cylinder_oi = Column(Float, nullable=True)
    axis_od = Column(Float, nullable=True)
    axis_oi = Column(Float, nullable=True)
    prysm_od = Column(Float, nullable=True)
    prysm_oi = Column(Float, nullable=True)
    base_od = Column(Float, nullable=True)
    base_oi = Column(Float, nullable=True)
    add = Column(Float, nullable=True)
    dp = Column(String(20), nullable=True)

    # Product options
    shape = Column(String(20), default="redondo", nullable=False)
    mode = Column(String(20), default="monofocal", nullable=False)
    crystal = Column(String(20), default="organico", nullable=False)
    color = Column(String(20), default="transparente", nullable=False)

    # Payment
    total = Column(Numeric(12, 2), nullable=False)
    paid_cash = Column(Numeric(12, 2), nullable=True)
    paid_transfer = Column(Numeric(12, 2), nullable=True)
    paid_type = Column(String(20), nullable=True)  # "efectivo", "transferencia", "mixto"

    status = Column(String(50), default="Encargado", nullable=False)
    confirmed = Column(Boolean, default=False, nullable=False)
    supervised = Column(Boolean, default=False, nullable=False)

    beneficiary_name = Column(String(200), nullable=True)
    beneficiary_phone = Column(String(50), nullable=True)
    beneficiary_ci = Column(String(30), nullable=True)
    presented = Column(String(2), nullable=True)  # "si", "no"

    warranty_end_date = Column(Date, nullable=True)
    end_payment_cup = Column(Numeric(12, 2), nullable=True)
    end_payment_transfer = Column(Numeric(12, 2), nullable=True)
    end_payment_method = Column(String(20), nullable=True)

    created_at = Column(DateTime, default=func.now(), nullable=False)

    # Relationships
    client = relationship("Client", back_populates="contracts", lazy="select")
    tasks = relationship(
        "Task", back_populates="contract", lazy="select", cascade="all, delete-orphan"
    )
