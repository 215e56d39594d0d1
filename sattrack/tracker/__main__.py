"""
Run the tracker in the foreground.

Usage:
    python -m sattrack.tracker

Satellite, observer and backend URL come from the TRACKER_* settings.
"""

import logging

from sattrack.config import config
from sattrack.tracker.poller import SatelliteTracker

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)
logger = logging.getLogger('sattrack.tracker')


def log_snapshot(tracker: SatelliteTracker) -> None:
    latest = tracker.latest
    if latest is None:
        return
    logger.info(
        f'{", ".join(latest.describe())} | {tracker.location} | '
        f'{"centered" if tracker.is_centered else "off-center"}'
    )


def main():
    tracker = SatelliteTracker()
    tracker.add_update_callback(log_snapshot)
    try:
        tracker.run_continuous()
    except KeyboardInterrupt:
        logger.info('Interrupted')
    finally:
        tracker.stop()


if __name__ == '__main__':
    main()
