"""
PositionLog model - the tracker's historical log of samples.

Append-only: one row per (satellite, sample timestamp) the tracker has
seen. Rows are never updated.
"""

from datetime import datetime, timezone

from sqlalchemy import Float, Integer, DateTime, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from sattrack.models.base import Base


class PositionLog(Base):
    """Historical satellite position samples."""

    __tablename__ = 'position_log'

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    satellite_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment='NORAD catalog number'
    )

    # Sample time reported by N2YO, not when we stored it
    timestamp: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment='Unix timestamp of the sample'
    )

    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)

    altitude_km: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        comment='Altitude above the ellipsoid in km'
    )

    recorded_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        UniqueConstraint('satellite_id', 'timestamp', name='uq_position_log_sat_time'),
        Index('ix_position_log_sat_time', 'satellite_id', 'timestamp'),
    )

    def __repr__(self) -> str:
        return f'<PositionLog {self.satellite_id} @ {self.timestamp}>'
