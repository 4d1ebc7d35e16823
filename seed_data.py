"""Seed data script for the Óptica console database.

Populates the database with demo staff, clients, inventory, contracts and
production tasks for development.  The script is idempotent: each table
is skipped when it already has rows.

Usage (from the project root):
    python seed_data.py
"""

from __future__ import annotations

import os
import sys
from datetime import date, timedelta
from decimal import Decimal

# Ensure the app package is importable when running from the project root
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from app.database import Base, SessionLocal, engine  # noqa: E402
from app.models import Client, Contract, Crystal, Frame, Task, User  # noqa: E402
from app.utils.constants import CONTRACT_STATUSES  # noqa: E402
from app.utils.security import hash_password  # noqa: E402


def _dec(value: float) -> Decimal:
    return Decimal(str(round(value, 2)))


# ---------------------------------------------------------------------------
# Seed functions
# ---------------------------------------------------------------------------


def seed_users(session) -> None:
    if session.query(User).filter(User.role != "admin").count() > 0:
        print("  [SKIP] User — staff accounts already present.")
        return

    staff = [
        ("admin@optica.local", "Admin123!", "Ana", "Ruiz", "admin"),
        ("recepcion@optica.local", "Recepcion123!", "Laura", "Díaz", "reception"),
        ("almacen@optica.local", "Almacen123!", "Jorge", "Pérez", "warehouse"),
    ]
    created = 0
    for email, password, first_name, last_name, role in staff:
        if session.query(User).filter(User.email == email).first() is not None:
            continue
        session.add(
            User(
                email=email,
                password_hash=hash_password(password),
                first_name=first_name,
                last_name=last_name,
                role=role,
                is_active=True,
            )
        )
        created += 1
    session.flush()
    print(f"  [OK] User — {created} registros insertados.")


def seed_clients(session) -> list[Client]:
    if session.query(Client).count() > 0:
        print("  [SKIP] Client — table already has data.")
        return session.query(Client).all()

    rows = [
        ("María", "González", "85010112345", "+53 5 1234567", "maria@example.com"),
        ("José", "Martínez", "79052298765", "+53 5 2345678", None),
        ("Ángela", "Rodríguez", "92111034567", "+53 5 3456789", "angela@example.com"),
        ("Carlos", "Fernández", "68030345678", "+53 5 4567890", None),
        ("Lucía", "Hernández", "01072256789", "+53 5 5678901", "lucia@example.com"),
        ("Raúl", "Castro", "75120867890", "+53 5 6789012", None),
    ]
    clients = [
        Client(
            first_name=first_name,
            last_name=last_name,
            ci=ci,
            phone=phone,
            email=email,
            address="La Habana",
            is_active=True,
        )
        for first_name, last_name, ci, phone, email in rows
    ]
    session.add_all(clients)
    session.flush()
    print(f"  [OK] Client — {len(clients)} registros insertados.")
    return clients


def seed_frames(session) -> None:
    if session.query(Frame).count() > 0:
        print("  [SKIP] Frame — table already has data.")
        return

    frames = [
        Frame(name="Aviador clásico", brand="Ray-Ban", model="RB3025", color="Dorado",
              material="Metal", size="58-14-135", stock=12, price=_dec(3500)),
        Frame(name="Wayfarer", brand="Ray-Ban", model="RB2140", color="Negro",
              material="Acetato", size="50-22-150", stock=4, price=_dec(3200)),
        Frame(name="Redondo fino", brand="Vogue", model="VO4177", color="Plata",
              material="Metal", size="49-20-140", stock=0, price=_dec(2100)),
        Frame(name="Deportivo", brand="Oakley", model="OX8046", color="Gris",
              material="O-Matter", size="55-18-138", stock=7, price=_dec(4100)),
    ]
    session.add_all(frames)
    session.flush()
    print(f"  [OK] Frame — {len(frames)} registros insertados.")


def seed_crystals(session) -> None:
    if session.query(Crystal).count() > 0:
        print("  [SKIP] Crystal — table already has data.")
        return

    crystals = [
        Crystal(type="monofocal", material="organico", index=1.5, coating="antireflejo",
                diameter=65, stock=40, price=_dec(800)),
        Crystal(type="monofocal", material="policarbonato", index=1.59, coating="blue_light",
                diameter=70, stock=8, price=_dec(1200)),
        Crystal(type="progresivo", material="trivex", index=1.53, coating="endurecido",
                diameter=70, stock=0, price=_dec(2600)),
        Crystal(type="bifocal", material="mineral", index=1.6, coating=None,
                diameter=65, stock=15, price=_dec(950)),
    ]
    session.add_all(crystals)
    session.flush()
    print(f"  [OK] Crystal — {len(crystals)} registros insertados.")


def seed_contracts_and_tasks(session, clients: list[Client]) -> None:
    if session.query(Contract).count() > 0:
        print("  [SKIP] Contract — table already has data.")
        return

    today = date.today()
    contracts = []
    for i, status in enumerate(CONTRACT_STATUSES):
        client = clients[i % len(clients)]
        contracts.append(
            Contract(
                client_id=client.id,
                frame="Ray-Ban RB2140",
                sphere_od=-1.25,
                sphere_oi=-1.0,
                shape="cuadrado",
                mode="monofocal",
                crystal="organico",
                color="transparente",
                total=_dec(4500 + i * 100),
                paid_cash=_dec(2000),
                paid_type="efectivo",
                status=status,
                confirmed=i > 0,
                presented="si",
                warranty_end_date=today + timedelta(days=365) if status == "En Garantía" else None,
            )
        )
    session.add_all(contracts)
    session.flush()
    print(f"  [OK] Contract — {len(contracts)} registros insertados.")

    in_production = [c for c in contracts if c.status in (
        "Entregado a Producción",
        "Revisión por Calidad",
        "Entregado a Producción Retrabajo",
    )]
    tasks = [
        Task(contract_id=c.id, assigned_date=today - timedelta(days=n),
             measure=True, mark=n > 0, cut=n > 1)
        for n, c in enumerate(in_production)
    ]
    session.add_all(tasks)
    session.flush()
    print(f"  [OK] Task — {len(tasks)} registros insertados.")


def main() -> None:
    print("Seeding Óptica console database...")
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        seed_users(session)
        clients = seed_clients(session)
        seed_frames(session)
        seed_crystals(session)
        seed_contracts_and_tasks(session, clients)
        session.commit()
        print("Done.")
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


if __name__ == "__main__":
    main()
