"""
Satellite tracker - polls the backend and keeps live display state.

Poll cycle:
1. Fetch: GET the position proxy for the configured satellite/observer
2. Log: samples newer than the last logged one go to the position log
3. Replace: the response is authoritative, held samples are swapped out
4. Locate: if the latest point moved, request its place name
5. Center: in follow mode the map center tracks the latest sample

Geocode lookups run on a small thread pool so a slow OpenCage call
never delays the next poll. Each lookup gets a sequence number; a result
is applied only if nothing newer has been applied already.
"""

import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, List, Optional, Tuple

import requests
from sqlalchemy import func, select
from sqlalchemy.orm import sessionmaker

from sattrack.config import config
from sattrack.models import PositionLog, engine as default_engine, init_db
from sattrack.tracker.client import BackendClient
from sattrack.tracker.geometry import is_centered
from sattrack.tracker.samples import PositionSample, parse_positions

logger = logging.getLogger(__name__)

LOADING_LOCATION = 'Loading...'


class SatelliteTracker:
    """
    Polling loop plus the state a map view needs.

    Can run as a background thread for continuous polling, or be driven
    one cycle at a time with poll_once().
    """

    def __init__(
        self,
        client: Optional[BackendClient] = None,
        satellite_id: Optional[int] = None,
        observer: Optional[Tuple[float, float, float]] = None,
        seconds: Optional[int] = None,
        db_engine=None,
        center_threshold: Optional[float] = None,
        geocode_workers: Optional[int] = None,
    ):
        """
        Initialize the tracker.

        Args:
            client: Backend client (created from config if None)
            satellite_id: NORAD id to track
            observer: (lat, lng, alt) of the observer
            seconds: Prediction window requested per poll
            db_engine: Engine for the position log (in-memory by default)
            center_threshold: Degrees within which the map counts as centered
            geocode_workers: Size of the reverse-geocode thread pool
        """
        self.client = client or BackendClient()
        self.satellite_id = satellite_id or config.tracker.satellite_id
        self.observer = observer or config.observer
        self.seconds = seconds or config.tracker.seconds
        self.center_threshold = center_threshold or config.tracker.center_threshold_deg

        db_engine = db_engine or default_engine
        init_db(db_engine)
        self._session_factory = sessionmaker(bind=db_engine, expire_on_commit=False)

        self._lock = threading.RLock()
        self._executor = ThreadPoolExecutor(
            max_workers=geocode_workers or config.tracker.geocode_workers,
            thread_name_prefix='geocode',
        )

        # Display state
        self._samples: List[PositionSample] = []
        self.location: str = LOADING_LOCATION
        self._map_center: Optional[Tuple[float, float]] = None
        self._follow = True

        # Geocode bookkeeping
        self._geocoded_point: Optional[Tuple[float, float]] = None
        self._geocode_seq = 0
        self._applied_seq = 0
        self._closed = False

        self._last_logged_ts = self._load_last_logged_timestamp()

        # Loop state
        self._running = False
        self._thread: Optional[threading.Thread] = None
        self._last_poll_time: float = 0
        self._poll_count: int = 0
        self._error_count: int = 0

        self._on_update_callbacks: List[Callable[['SatelliteTracker'], None]] = []

    def add_update_callback(self, callback: Callable[['SatelliteTracker'], None]) -> None:
        """Register callback invoked after each successful poll."""
        self._on_update_callbacks.append(callback)

    # -------------------------------------------------------------------------
    # Samples
    # -------------------------------------------------------------------------

    @property
    def samples(self) -> List[PositionSample]:
        with self._lock:
            return list(self._samples)

    @property
    def latest(self) -> Optional[PositionSample]:
        with self._lock:
            return self._samples[-1] if self._samples else None

    def poll_once(self) -> int:
        """
        Execute one poll cycle.

        Returns count of samples now held, or -1 on error. On error the
        previously held samples are kept.
        """
        lat, lng, alt = self.observer

        try:
            payload = self.client.get_positions(
                self.satellite_id, lat, lng, alt, self.seconds,
            )
            samples = parse_positions(payload)
            latest = samples[-1] if samples else None

            # Log before swapping so a failed write leaves held state untouched
            if latest is not None:
                self._log_samples(samples)

            with self._lock:
                self._samples = samples
                if latest is not None and (self._follow or self._map_center is None):
                    self._map_center = latest.point

            self._last_poll_time = time.time()
            self._poll_count += 1

            if latest is None:
                logger.info('No positions available')
            else:
                self.request_location(latest)
                logger.debug(f'Latest position: {", ".join(latest.describe())}')

        except (requests.RequestException, ValueError) as e:
            self._error_count += 1
            logger.error(f'Error fetching positions: {e}')
            return -1
        except Exception as e:
            self._error_count += 1
            logger.error(f'Tracking error: {e}')
            return -1

        for callback in self._on_update_callbacks:
            try:
                callback(self)
            except Exception as e:
                logger.error(f'Update callback error: {e}')

        return len(samples)

    # -------------------------------------------------------------------------
    # Location
    # -------------------------------------------------------------------------

    def request_location(self, sample: PositionSample) -> Optional[Future]:
        """
        Look up the place name under sample, unless that point was
        already requested.

        Returns the Future of the lookup, or None if nothing was issued.
        """
        point = sample.point
        with self._lock:
            if self._closed:
                return None
            if point == self._geocoded_point:
                return None
            self._geocoded_point = point
            self._geocode_seq += 1
            seq = self._geocode_seq

        try:
            return self._executor.submit(self._resolve_location, seq, point)
        except RuntimeError as e:
            # Pool shut down between the check and the submit
            logger.warning(f'Location lookup skipped: {e}')
            return None

    def _resolve_location(self, seq: int, point: Tuple[float, float]) -> bool:
        """Fetch and apply a place name. Returns True if it was applied."""
        try:
            result = self.client.reverse_geocode(point[0], point[1])
        except (requests.RequestException, ValueError) as e:
            logger.error(f'Error fetching location: {e}')
            return False

        location = result.get('location')
        if not location:
            return False

        with self._lock:
            if seq <= self._applied_seq:
                logger.debug(f'Dropping stale location #{seq} ({location})')
                return False
            self._applied_seq = seq
            self.location = location

        logger.info(f'Satellite over: {location}')
        return True

    # -------------------------------------------------------------------------
    # Map view
    # -------------------------------------------------------------------------

    @property
    def map_center(self) -> Optional[Tuple[float, float]]:
        with self._lock:
            return self._map_center

    @property
    def follow(self) -> bool:
        with self._lock:
            return self._follow

    def pan_to(self, lat: float, lng: float) -> None:
        """Move the map view by hand. Turns follow mode off."""
        with self._lock:
            self._map_center = (lat, lng)
            self._follow = False

    def recenter(self) -> None:
        """Snap the map view back onto the satellite and follow it again."""
        with self._lock:
            self._follow = True
            if self._samples:
                self._map_center = self._samples[-1].point

    @property
    def is_centered(self) -> bool:
        latest = self.latest
        return is_centered(
            self.map_center,
            latest.point if latest else None,
            self.center_threshold,
        )

    # -------------------------------------------------------------------------
    # Position log
    # -------------------------------------------------------------------------

    def _load_last_logged_timestamp(self) -> Optional[int]:
        with self._session_factory() as session:
            return session.execute(
                select(func.max(PositionLog.timestamp)).where(
                    PositionLog.satellite_id == self.satellite_id
                )
            ).scalar()

    def _log_samples(self, samples: List[PositionSample]) -> int:
        """Append samples newer than the last logged one. Returns count added."""
        with self._lock:
            # Another tracker may share the log database
            stored_ts = self._load_last_logged_timestamp()
            last_ts = max(
                (ts for ts in (self._last_logged_ts, stored_ts) if ts is not None),
                default=None,
            )
            fresh = [s for s in samples if last_ts is None or s.timestamp > last_ts]
            if not fresh:
                return 0

            with self._session_factory() as session:
                session.add_all([
                    PositionLog(
                        satellite_id=self.satellite_id,
                        timestamp=s.timestamp,
                        latitude=s.latitude,
                        longitude=s.longitude,
                        altitude_km=s.altitude_km,
                    )
                    for s in fresh
                ])
                session.commit()

            self._last_logged_ts = max(s.timestamp for s in fresh)

        logger.debug(f'Logged {len(fresh)} new samples')
        return len(fresh)

    def history(self, limit: int = 50) -> List[PositionSample]:
        """Logged samples for this satellite, newest first."""
        with self._session_factory() as session:
            rows = session.execute(
                select(PositionLog)
                .where(PositionLog.satellite_id == self.satellite_id)
                .order_by(PositionLog.timestamp.desc())
                .limit(limit)
            ).scalars().all()

        return [
            PositionSample(
                latitude=r.latitude,
                longitude=r.longitude,
                altitude_km=r.altitude_km,
                timestamp=r.timestamp,
            )
            for r in rows
        ]

    # -------------------------------------------------------------------------
    # Loop control
    # -------------------------------------------------------------------------

    def run_continuous(self, interval: Optional[float] = None) -> None:
        """
        Poll continuously.

        This method blocks - use start_background() for non-blocking.
        """
        interval = interval or config.tracker.poll_interval
        self._running = True

        logger.info(f'Tracking satellite {self.satellite_id} (interval={interval}s)')

        while self._running:
            self.poll_once()
            time.sleep(interval)

        logger.info('Tracking stopped')

    def start_background(self, interval: Optional[float] = None) -> None:
        """Start polling in a background thread."""
        if self._thread and self._thread.is_alive():
            logger.warning('Tracker already running')
            return

        self._thread = threading.Thread(
            target=self.run_continuous,
            args=(interval,),
            daemon=True,
        )
        self._thread.start()
        logger.info('Background tracking started')

    def stop(self) -> None:
        """Stop polling and wait for in-flight geocode lookups."""
        self._running = False
        with self._lock:
            self._closed = True
        if self._thread:
            self._thread.join(timeout=10)
        self._executor.shutdown(wait=True)

    def snapshot(self) -> dict:
        """JSON-friendly view of the current state."""
        latest = self.latest
        center = self.map_center
        return {
            'satellite_id': self.satellite_id,
            'latest': latest.to_dict() if latest else None,
            'sample_count': len(self.samples),
            'location': self.location,
            'map_center': list(center) if center else None,
            'centered': self.is_centered,
            'follow': self.follow,
            'stats': self.stats,
        }

    @property
    def stats(self) -> dict:
        """Get polling statistics."""
        return {
            'poll_count': self._poll_count,
            'error_count': self._error_count,
            'last_poll_time': self._last_poll_time,
            'running': self._running,
        }
