"""
Database models for SatTrack.

Only the tracker persists anything: an append-only log of the position
samples it has seen.
"""

from sattrack.models.base import Base, engine, make_engine, init_db
from sattrack.models.position_log import PositionLog

__all__ = [
    'Base',
    'engine',
    'make_engine',
    'init_db',
    'PositionLog',
]
