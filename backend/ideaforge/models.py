"""
SQLAlchemy models for IdeaForge.

Tables:
- user_settings: Per-user provider configuration (API key encrypted at rest)
- documents: Generated documents owned by a user
"""

from sqlalchemy import Column, DateTime, LargeBinary, String, Text, func
from sqlalchemy.orm import DeclarativeBase

from ideaforge.constants import DEFAULT_PROVIDER


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class UserSettings(Base):
    """Provider configuration for a user."""

    __tablename__ = "user_settings"

    user_id = Column(String(100), primary_key=True)
    provider = Column(String(50), default=DEFAULT_PROVIDER, nullable=False)
    api_key_encrypted = Column(LargeBinary, nullable=True)  # Fernet token, NULL when unset
    model = Column(String(200), default="", nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )


class Document(Base):
    """A generated document (PRD, specs, design, plans, ideas)."""

    __tablename__ = "documents"

    id = Column(String(36), primary_key=True)
    user_id = Column(String(100), nullable=False, index=True)
    title = Column(String(500), nullable=False)
    type = Column(String(50), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
