"""
Keep-Alive Loop
===============

The store (and the host the proxy runs on) idle out when nobody calls them.
During the daily window this loop pings the store's ``renderTask`` action at
a fixed interval; outside the window it sleeps until the window reopens.
No backoff and no coordination with request traffic.
"""

import logging
import threading
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from printbee.core import get_config_value, logger as db_logger
from printbee.modules.store import ScriptStoreService, StoreError

logger = logging.getLogger(__name__)


class KeepAliveWindow:
    """Daily [start_hour, end_hour) window in a fixed timezone"""

    def __init__(self, start_hour=8, end_hour=22, timezone='Asia/Kolkata'):
        if not (0 <= start_hour <= 23 and 0 <= end_hour <= 24):
            raise ValueError(f"Invalid keep-alive window {start_hour}-{end_hour}")
        self.start_hour = start_hour
        self.end_hour = end_hour
        self.timezone = timezone
        self.tz = ZoneInfo(timezone)

    @classmethod
    def from_config(cls):
        return cls(
            start_hour=int(get_config_value('KEEPALIVE_START_HOUR', 8)),
            end_hour=int(get_config_value('KEEPALIVE_END_HOUR', 22)),
            timezone=get_config_value('KEEPALIVE_TIMEZONE', 'Asia/Kolkata'),
        )

    def now(self):
        return datetime.now(self.tz)

    def localize(self, moment):
        if moment.tzinfo is None:
            return moment.replace(tzinfo=self.tz)
        return moment.astimezone(self.tz)

    def is_open(self, moment=None):
        moment = self.localize(moment or self.now())
        hour = moment.hour
        if self.start_hour == self.end_hour:
            return True
        if self.start_hour < self.end_hour:
            return self.start_hour <= hour < self.end_hour
        # Window wraps past midnight
        return hour >= self.start_hour or hour < self.end_hour

    def seconds_until_open(self, moment=None):
        """0 inside the window, else seconds until the next start_hour"""
        moment = self.localize(moment or self.now())
        if self.is_open(moment):
            return 0
        opening = moment.replace(hour=self.start_hour, minute=0, second=0, microsecond=0)
        if opening <= moment:
            opening += timedelta(days=1)
        return (opening - moment).total_seconds()

    def label(self):
        end = self.end_hour % 24
        return f"{self.start_hour:02d}:00-{end:02d}:00"


class KeepAlive:
    """Fixed-interval pinger, run in a daemon thread"""

    def __init__(self, app, store=None, window=None, interval=None):
        self.app = app
        # Own session, separate from the one request handlers use
        self.store = store or ScriptStoreService()
        self.window = window
        self.interval = interval
        self._stop = threading.Event()
        self._thread = None

    def _resolve(self):
        with self.app.app_context():
            window = self.window or KeepAliveWindow.from_config()
            interval = self.interval or int(get_config_value('KEEPALIVE_INTERVAL', 600))
        return window, interval

    def ping(self):
        """One renderTask call. Returns True when the store answered."""
        with self.app.app_context():
            try:
                self.store.render_task()
            except StoreError as e:
                logger.warning(f"Keep-alive ping failed: {e}")
                db_logger.warning('keepalive', f"Ping failed: {e}")
                return False
            logger.debug("Keep-alive ping ok")
            return True

    def next_delay(self, window, interval, moment=None):
        """Run one step of the loop and return how long to sleep afterwards"""
        moment = moment or window.now()
        if window.is_open(moment):
            self.ping()
            return interval
        delay = window.seconds_until_open(moment)
        logger.info(f"Keep-alive outside window {window.label()}, sleeping {int(delay)}s")
        return delay

    def run(self):
        window, interval = self._resolve()
        logger.info(f"Keep-alive started: every {interval}s during {window.label()} ({window.timezone})")
        while not self._stop.is_set():
            delay = self.next_delay(window, interval)
            self._stop.wait(delay)
        logger.info("Keep-alive stopped")

    def start(self):
        if self._thread and self._thread.is_alive():
            return self._thread
        self._stop.clear()
        self._thread = threading.Thread(target=self.run, name='printbee-keepalive', daemon=True)
        self._thread.start()
        return self._thread

    def stop(self, timeout=None):
        self._stop.set()
        if self._thread:
            self._thread.join(timeout)

    @property
    def running(self):
        return bool(self._thread and self._thread.is_alive())


def render_status(window=None, moment=None):
    """Time-of-day status reported by GET /render-status"""
    window = window or KeepAliveWindow.from_config()
    moment = window.localize(moment or window.now())
    active = window.is_open(moment)

    if active:
        message = (f"Server is awake. Keep-alive runs {window.label()} "
                   f"({window.timezone}).")
    else:
        message = (f"Server may be sleeping; the first request can take a while. "
                   f"It stays awake {window.label()} ({window.timezone}).")

    return {
        'success': True,
        'active': active,
        'status': 'awake' if active else 'sleeping',
        'message': message,
        'window': window.label(),
        'time': moment.strftime('%H:%M'),
    }
