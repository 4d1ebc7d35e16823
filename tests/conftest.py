"""Shared fixtures: in-memory SQLite database, row factories and auth headers."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import date, datetime, timedelta  # noqa: E402
from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.database import Base, SessionLocal, engine  # noqa: E402
from app.main import app  # noqa: E402
from app.models import Client, Contract, Crystal, Frame, Task, User  # noqa: E402
from app.utils.security import create_access_token, hash_password  # noqa: E402

BASE_TIME = datetime(2026, 1, 1, 9, 0, 0)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def api(db):
    # No context manager: the startup seed is not wanted in tests
    return TestClient(app)


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(role="admin", *, email=None, password="Secreto123!", is_active=True):
        counter["n"] += 1
        user = User(
            email=email or f"{role}{counter['n']}@optica.test",
            password_hash=hash_password(password),
            first_name=role.capitalize(),
            last_name=f"Prueba{counter['n']}",
            role=role,
            is_active=is_active,
            created_at=BASE_TIME + timedelta(minutes=counter["n"]),
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def auth_headers(make_user):
    """Return ``(user, headers)`` for a fresh user with the given role."""

    def _headers(role="admin"):
        user = make_user(role)
        token = create_access_token({"sub": str(user.id), "role": user.role})
        return user, {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def make_client(db):
    counter = {"n": 0}

    def _make(first_name="María", last_name="González", ci=None, **extra):
        counter["n"] += 1
        values = {
            "phone": "+53 5 0000000",
            "is_active": True,
            "created_at": BASE_TIME + timedelta(minutes=counter["n"]),
        }
        values.update(extra)
        client = Client(
            first_name=first_name,
            last_name=last_name,
            ci=ci or f"9001010{counter['n']:04d}",
            **values,
        )
        db.add(client)
        db.commit()
        db.refresh(client)
        return client

    return _make


@pytest.fixture
def make_contract(db):
    counter = {"n": 0}

    def _make(client, status="Encargado", total=1000, **extra):
        counter["n"] += 1
        values = {
            "frame": "Ray-Ban RB2140",
            "created_at": BASE_TIME + timedelta(minutes=counter["n"]),
        }
        values.update(extra)
        contract = Contract(
            client_id=client.id,
            status=status,
            total=Decimal(str(total)),
            **values,
        )
        db.add(contract)
        db.commit()
        db.refresh(contract)
        return contract

    return _make


@pytest.fixture
def make_frame(db):
    def _make(name="Aviador", brand="Ray-Ban", model="RB3025", stock=10, price=3500):
        frame = Frame(name=name, brand=brand, model=model, stock=stock, price=Decimal(str(price)))
        db.add(frame)
        db.commit()
        db.refresh(frame)
        return frame

    return _make


@pytest.fixture
def make_crystal(db):
    def _make(type="monofocal", material="organico", stock=20, coating="antireflejo"):
        crystal = Crystal(
            type=type, material=material, index=1.5, coating=coating,
            diameter=65, stock=stock, price=Decimal("800"),
        )
        db.add(crystal)
        db.commit()
        db.refresh(crystal)
        return crystal

    return _make


@pytest.fixture
def make_task(db):
    def _make(contract, assigned_date=None, **steps):
        task = Task(
            contract_id=contract.id,
            assigned_date=assigned_date or date(2026, 1, 10),
            **steps,
        )
        db.add(task)
        db.commit()
        db.refresh(task)
        return task

    return _make
