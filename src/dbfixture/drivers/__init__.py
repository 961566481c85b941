"""Dialect drivers and the registry that maps dialect names to them."""

from dbfixture.drivers.base import Driver
from dbfixture.drivers.mysql import MySQLDriver
from dbfixture.drivers.postgresql import PostgreSQLDriver
from dbfixture.drivers.registry import DriverRegistry, create_registry
from dbfixture.drivers.sqlite import SQLiteDriver

__all__ = [
    "Driver",
    "DriverRegistry",
    "create_registry",
    "MySQLDriver",
    "PostgreSQLDriver",
    "SQLiteDriver",
]
