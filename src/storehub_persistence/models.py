"""ORM models for stores and their version chain."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    BigInteger,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

_ID = Integer().with_variant(BigInteger, "postgresql")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Declarative base for all storehub tables."""


class StoreModel(Base):
    __tablename__ = "stores"

    store_id: Mapped[int] = mapped_column(_ID, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(40))
    address: Mapped[str] = mapped_column(String)
    creator_login: Mapped[str] = mapped_column(String, index=True)
    owner_name: Mapped[str] = mapped_column(String)
    opening_time: Mapped[str] = mapped_column(String(19))
    closing_time: Mapped[str] = mapped_column(String(19))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow
    )


class StoreVersionModel(Base):
    """
    One row per version of a store.

    The schema itself guards the chain: version numbers are unique per store
    and at most one row per store may carry ``is_current``.
    """

    __tablename__ = "store_versions"

    version_id: Mapped[int] = mapped_column(_ID, primary_key=True, autoincrement=True)
    store_id: Mapped[int] = mapped_column(ForeignKey("stores.store_id"), index=True)
    version_number: Mapped[int] = mapped_column(Integer)
    creator_login: Mapped[str] = mapped_column(String)
    owner_name: Mapped[str] = mapped_column(String)
    opening_time: Mapped[str] = mapped_column(String(19))
    closing_time: Mapped[str] = mapped_column(String(19))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow
    )
    is_current: Mapped[bool] = mapped_column(Boolean, default=False)

    __table_args__ = (
        UniqueConstraint(
            "store_id", "version_number", name="uq_store_versions_number"
        ),
        Index(
            "uq_store_versions_current",
            "store_id",
            unique=True,
            postgresql_where=text("is_current"),
            sqlite_where=text("is_current = 1"),
        ),
    )
