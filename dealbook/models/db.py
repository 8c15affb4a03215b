"""SQLAlchemy ORM models for deal persistence."""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, Numeric, DateTime, Boolean, JSON, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def new_property_id() -> str:
    return f"prop_{uuid.uuid4().hex[:12]}"


class Base(DeclarativeBase):
    pass


class PropertyRecord(Base):
    __tablename__ = "properties"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_property_id)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    # Listing
    title: Mapped[str] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    investment_strategy: Mapped[str] = mapped_column(String(50), default="Buy & Hold")
    property_type: Mapped[str] = mapped_column(String(50), default="Single Family")

    # Address
    address: Mapped[str] = mapped_column(String(255), default="")
    city: Mapped[str] = mapped_column(String(100), default="")
    state: Mapped[str] = mapped_column(String(2), default="")
    zip_code: Mapped[str] = mapped_column(String(10), default="")

    # Headline numbers
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=0)
    monthly_rent: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=0)

    # Publishing
    is_draft: Mapped[bool] = mapped_column(Boolean, default=False)
    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False)

    # Engine input snapshot and its computed table (camelCase JSON)
    projection_inputs: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    thirty_year_projections: Mapped[dict | None] = mapped_column(JSON, nullable=True)
