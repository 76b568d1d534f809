"""Directed Edge Python Client.

A Python client for the Directed Edge recommendation web services.

Usage:
    from directededge import Database, Exporter, Item, Updater, UpdateMethod

    database = Database("mydb", "password")

    # Bulk import
    exporter = Exporter("mydb.xml")
    exporter.export(Item("product1", tags={"product"}))
    exporter.finish()
    database.import_from_file("mydb.xml")

    # Read a resource
    related = database.get(["product1", "related"], {"tags": "product"})

    # Incremental update
    updater = Updater(database, UpdateMethod.ADD)
    customer = Item("customer1")
    customer.link_to("product1")
    updater.export(customer)
    updater.finish()
"""

from .config import DatabaseConfig
from .database import Database
from .exceptions import DirectedEdgeError, ResourceException
from .exporter import Exporter
from .types import Item, Protocol, UpdateMethod
from .updater import Updater

__version__ = "0.1.0"
__all__ = [
    "Database",
    "DatabaseConfig",
    "DirectedEdgeError",
    "Exporter",
    "Item",
    "Protocol",
    "ResourceException",
    "UpdateMethod",
    "Updater",
]
