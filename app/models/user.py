"""User model — staff account with role-based access control."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.sql import func

from app.database import Base


class User(Base):
    """Staff member who signs in to the console.

    Roles:
        - admin: Full access, including staff accounts.
        - reception: Manages clients, contracts and tasks.
        - warehouse: Manages frame and crystal stock, contracts and tasks.

    Attributes:
        id: Primary key.
        email: Unique login email.
        password_hash: Bcrypt-hashed password (never store plain text).
        first_name: Given name.
        last_name: Family name.
        role: Role identifier controlling permissions.
        is_active: Soft-delete flag; inactive users cannot sign in.
        last_login: Timestamp of the last successful login.
        created_at: Record creation timestamp.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(200), unique=True, nullable=False)
    password_hash = Column(String(200), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    role = Column(String(20), default="reception", nullable=False)
    # "admin", "reception", "warehouse"
    is_active = Column(Boolean, default=True, nullable=False)
    last_login = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
