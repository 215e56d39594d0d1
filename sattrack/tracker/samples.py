"""
Position samples as delivered by the positions endpoint.

N2YO sample format (one dict per second of the requested window):
    satlatitude   - sub-satellite latitude, degrees
    satlongitude  - sub-satellite longitude, degrees
    sataltitude   - altitude, km
    azimuth       - degrees, relative to the observer
    elevation     - degrees, relative to the observer
    ra, dec       - right ascension / declination, degrees
    timestamp     - Unix timestamp (seconds)
    eclipsed      - satellite in Earth's shadow
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class PositionSample:
    """Parsed position sample. Only the fields the tracker uses are typed."""
    latitude: float
    longitude: float
    altitude_km: float
    timestamp: int
    extra: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @classmethod
    def from_n2yo(cls, data: Dict[str, Any]) -> Optional['PositionSample']:
        """
        Parse an N2YO position dict.

        Returns None if any of the core numeric fields is missing or
        not a number.
        """
        if not isinstance(data, dict):
            return None

        try:
            lat = data['satlatitude']
            lng = data['satlongitude']
            alt = data['sataltitude']
            ts = data['timestamp']
        except KeyError:
            return None

        for value in (lat, lng, alt, ts):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                return None

        core = ('satlatitude', 'satlongitude', 'sataltitude', 'timestamp')
        return cls(
            latitude=float(lat),
            longitude=float(lng),
            altitude_km=float(alt),
            timestamp=int(ts),
            extra={k: v for k, v in data.items() if k not in core},
        )

    @property
    def point(self) -> Tuple[float, float]:
        return (self.latitude, self.longitude)

    def describe(self) -> List[str]:
        """Human-readable lines, two decimals, as shown in the marker popup."""
        return [
            f'Latitude: {self.latitude:.2f}',
            f'Longitude: {self.longitude:.2f}',
            f'Altitude: {self.altitude_km:.2f} km',
        ]

    def to_dict(self) -> dict:
        return {
            'satlatitude': self.latitude,
            'satlongitude': self.longitude,
            'sataltitude': self.altitude_km,
            'timestamp': self.timestamp,
        }


def parse_positions(payload: Dict[str, Any]) -> List[PositionSample]:
    """Parse the 'positions' list of a response body, skipping malformed entries."""
    raw = (payload or {}).get('positions') or []
    samples = []
    for item in raw:
        sample = PositionSample.from_n2yo(item)
        if sample is not None:
            samples.append(sample)
    return samples
