"""Background expiry sweeper

Runs `URLRegistry.sweep()` on a daemon thread at a fixed interval so expired
records are deactivated even when nobody looks them up.

Example:
    >>> sweeper = ExpirySweeper(registry, interval=60)
    >>> sweeper.start()
    >>> sweeper.running
    True
    >>> sweeper.stop()
"""

import logging
import threading

from snapshortener.constants import Defaults
from snapshortener.registry import URLRegistry


logger = logging.getLogger(__name__)


class ExpirySweeper:
    def __init__(self, registry: URLRegistry, interval: float = Defaults.SWEEP_INTERVAL_SECONDS):
        if interval <= 0:
            raise ValueError(f'Interval must be positive (given value: {interval}).')

        self.registry = registry
        self.interval = interval
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def tick(self) -> int:
        """Run one sweep. Failures are logged so the next tick still happens."""
        try:
            return self.registry.sweep()
        except Exception:
            logger.exception('Expiry sweep failed.')
            return 0

    def start(self) -> 'ExpirySweeper':
        if self.running:
            return self

        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name='snapshortener-expiry-sweeper', daemon=True)
        self._thread.start()
        logger.debug('Started expiry sweeper.', extra={'interval': self.interval})
        return self

    def stop(self, timeout: float | None = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        logger.debug('Stopped expiry sweeper.')

    def _run(self) -> None:
        # Event.wait() returns True as soon as stop() is called
        while not self._stop.wait(self.interval):
            cleaned = self.tick()
            if cleaned:
                logger.debug('Expiry sweep deactivated %s URL(s).', cleaned, extra={'count': cleaned})
