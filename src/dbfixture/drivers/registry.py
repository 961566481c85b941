"""Driver registry: dialect name -> shared ``Driver`` instance.

A registry is an ordinary value.  Applications build one at start-up,
register the dialects they need, and pass it to ``new_session``; tests
build their own isolated registries.

Example::

    from dbfixture.drivers import create_registry
    from dbfixture.drivers.mysql import MySQLDriver

    registry = create_registry(builtins=False)
    registry.register("mysql", MySQLDriver(prepared=False))
    driver = registry.lookup("mysql")
"""

from __future__ import annotations

import threading

from dbfixture.drivers.base import Driver
from dbfixture.errors import DuplicateDriverError, UnknownDriverError
from dbfixture.logging import get_logger

logger = get_logger(__name__)


class DriverRegistry:
    """Thread-safe, write-once-per-name registry of drivers.

    Registration usually happens once per dialect during start-up, lookups
    later from request paths; both go through the same lock.
    """

    def __init__(self) -> None:
        self._drivers: dict[str, Driver] = {}
        self._lock = threading.RLock()

    def register(self, name: str, driver: Driver) -> None:
        """Register ``driver`` under ``name`` (lower-cased).

        Raises:
            DuplicateDriverError: If ``name`` is empty or already registered,
                or ``driver`` is missing or does not implement ``Driver``.
        """
        key = name.strip().lower() if name else ""
        if not key:
            raise DuplicateDriverError(name, "Failed to register driver: empty name")
        if driver is None or not isinstance(driver, Driver):
            raise DuplicateDriverError(
                key, f"Failed to register driver {key!r}: not a Driver ({driver!r})"
            )

        with self._lock:
            if key in self._drivers:
                raise DuplicateDriverError(key)
            self._drivers[key] = driver

        logger.debug("driver.registered", dialect=key, driver=repr(driver))

    def lookup(self, name: str) -> Driver:
        """Return the driver registered under ``name``.

        Raises:
            UnknownDriverError: If nothing is registered under ``name``.
        """
        key = name.strip().lower() if name else ""
        with self._lock:
            driver = self._drivers.get(key)
            if driver is None:
                raise UnknownDriverError(name, sorted(self._drivers))
            return driver

    def names(self) -> list[str]:
        """Registered dialect names, sorted."""
        with self._lock:
            return sorted(self._drivers)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        with self._lock:
            return name.strip().lower() in self._drivers

    def __len__(self) -> int:
        with self._lock:
            return len(self._drivers)

    def __repr__(self) -> str:
        return f"DriverRegistry({self.names()})"


def create_registry(*, builtins: bool = True) -> DriverRegistry:
    """Build a registry, optionally registering the built-in dialects.

    The built-ins are ``mysql``, ``postgresql`` (alias ``postgres``) and
    ``sqlite``.  Each dialect module registers itself through its
    ``register(registry)`` function; nothing is registered on import.
    """
    registry = DriverRegistry()
    if builtins:
        from dbfixture.drivers import mysql, postgresql, sqlite

        for module in (mysql, postgresql, sqlite):
            module.register(registry)
    return registry


__all__ = [
    "DriverRegistry",
    "create_registry",
]
