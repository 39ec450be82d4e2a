"""
ORM — articles / reviews persistés (SQLAlchemy, SQLite).
Le corps est stocké en JSON (forme stockée des blocs).
"""
import uuid
from datetime import datetime
from typing import Optional

import sqlalchemy as sa
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class StoryDB(Base):
    __tablename__ = "stories"
    id:             Mapped[str]           = mapped_column(sa.String, primary_key=True, default=lambda: str(uuid.uuid4()))
    slug:           Mapped[Optional[str]] = mapped_column(sa.String, unique=True, nullable=True, index=True)
    title:          Mapped[str]           = mapped_column(sa.String, nullable=False)
    body:           Mapped[str]           = mapped_column(sa.Text, default="[]")
    plain_text:     Mapped[str]           = mapped_column(sa.Text, default="")
    trailer_url:    Mapped[Optional[str]] = mapped_column(sa.String, nullable=True)
    gallery_images: Mapped[Optional[str]] = mapped_column(sa.Text, nullable=True)  # JSON [{url, caption}]
    created_at:     Mapped[datetime]      = mapped_column(sa.DateTime, default=datetime.utcnow)
    updated_at:     Mapped[datetime]      = mapped_column(sa.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
