"""Database models for the neighborhood lookup tables."""
from sqlalchemy import Integer, String, Float, ForeignKey, Enum as SQLEnum, TEXT, TIMESTAMP
from sqlalchemy.orm import relationship, Mapped, mapped_column
from sqlalchemy.sql import func
from datetime import datetime
from typing import Optional

from ..models.enums import SalaryTier
from .session import Base


class Neighborhood(Base):
    """Neighborhood master list - identification and geographic data."""
    __tablename__ = "neighborhoods"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(150), unique=True, nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)

    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now())

    # One-to-One relationships to the normalized category data
    categories: Mapped[Optional["NeighborhoodCategories"]] = relationship(back_populates="neighborhood", uselist=False)
    lifestyle: Mapped[Optional["NeighborhoodLifestyle"]] = relationship(back_populates="neighborhood", uselist=False)

    def __repr__(self):
        return f"<Neighborhood(id={self.id}, name='{self.name}')>"


class NeighborhoodCategories(Base):
    """Normalized (0-100) service and mobility values for a neighborhood."""
    __tablename__ = "neighborhood_categories"

    neighborhood_id: Mapped[int] = mapped_column(Integer, ForeignKey("neighborhoods.id", ondelete="CASCADE"), primary_key=True)
    security: Mapped[float] = mapped_column(Float, default=0.0)
    shops: Mapped[float] = mapped_column(Float, default=0.0)
    schools: Mapped[float] = mapped_column(Float, default=0.0)
    hospitals: Mapped[float] = mapped_column(Float, default=0.0)
    fire_stations: Mapped[float] = mapped_column(Float, default=0.0)
    police_stations: Mapped[float] = mapped_column(Float, default=0.0)
    night_leisure: Mapped[float] = mapped_column(Float, default=0.0)
    day_leisure: Mapped[float] = mapped_column(Float, default=0.0)
    universities: Mapped[float] = mapped_column(Float, default=0.0)
    public_transport: Mapped[float] = mapped_column(Float, default=0.0)
    taxis: Mapped[float] = mapped_column(Float, default=0.0)
    bike_lanes: Mapped[float] = mapped_column(Float, default=0.0)
    walkability: Mapped[float] = mapped_column(Float, default=0.0)
    parking: Mapped[float] = mapped_column(Float, default=0.0)

    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now())

    neighborhood: Mapped["Neighborhood"] = relationship(back_populates="categories")

    def __repr__(self):
        return f"<NeighborhoodCategories(id={self.neighborhood_id})>"


class NeighborhoodLifestyle(Base):
    """Lifestyle values and salary tier for a neighborhood."""
    __tablename__ = "neighborhood_lifestyle"

    neighborhood_id: Mapped[int] = mapped_column(Integer, ForeignKey("neighborhoods.id", ondelete="CASCADE"), primary_key=True)
    connectivity: Mapped[float] = mapped_column(Float, default=0.0)
    green_zones: Mapped[float] = mapped_column(Float, default=0.0)
    noise: Mapped[float] = mapped_column(Float, default=0.0)
    air_quality: Mapped[float] = mapped_column(Float, default=0.0)
    occupability: Mapped[float] = mapped_column(Float, default=0.0)
    accessibility: Mapped[float] = mapped_column(Float, default=0.0)
    salary_tier: Mapped[Optional[SalaryTier]] = mapped_column(SQLEnum(SalaryTier, name="salary_tier"))
    note: Mapped[Optional[str]] = mapped_column(TEXT)

    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now())

    neighborhood: Mapped["Neighborhood"] = relationship(back_populates="lifestyle")

    def __repr__(self):
        return f"<NeighborhoodLifestyle(id={self.neighborhood_id}, salary_tier={self.salary_tier})>"
