from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, List, Optional

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class NameTableRow(Base):
    __tablename__ = "name_tables"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    kind: Mapped[str] = mapped_column(String(32))
    locale: Mapped[str] = mapped_column(String(64))
    loaded_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    shared_values: Mapped[List["SharedValueRow"]] = relationship(
        back_populates="table", cascade="all, delete-orphan", order_by="SharedValueRow.position"
    )
    entries: Mapped[List["NameEntryRow"]] = relationship(
        back_populates="table", cascade="all, delete-orphan", order_by="NameEntryRow.position"
    )
    __table_args__ = (UniqueConstraint("kind", "locale"),)


class SharedValueRow(Base):
    __tablename__ = "shared_values"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    table_id: Mapped[int] = mapped_column(Integer, ForeignKey("name_tables.id", ondelete="CASCADE"))
    position: Mapped[int] = mapped_column(Integer)
    name: Mapped[str] = mapped_column(String(128))
    value: Mapped[Any] = mapped_column(JSON)
    # alias target; ``value`` still holds the resolved value
    ref: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    table: Mapped[NameTableRow] = relationship(back_populates="shared_values")
    __table_args__ = (UniqueConstraint("table_id", "name"),)


class NameEntryRow(Base):
    __tablename__ = "name_entries"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    table_id: Mapped[int] = mapped_column(Integer, ForeignKey("name_tables.id", ondelete="CASCADE"))
    position: Mapped[int] = mapped_column(Integer)
    key: Mapped[str] = mapped_column(String(255))
    # Always the resolved value, even when ``ref`` is set
    value: Mapped[Any] = mapped_column(JSON)
    ref: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    table: Mapped[NameTableRow] = relationship(back_populates="entries")
    __table_args__ = (UniqueConstraint("table_id", "key"),)
