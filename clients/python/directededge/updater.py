"""Incremental batch updates."""

import logging
from typing import TYPE_CHECKING, Iterable

from .exceptions import ResourceException
from .exporter import Exporter
from .types import Item, UpdateMethod

if TYPE_CHECKING:
    from .database import Database

logger = logging.getLogger(__name__)


class Updater:
    """Makes incremental updates to a Directed Edge database.

    Item changes are collected with :meth:`export` and pushed live in one
    POST by :meth:`finish`. The server applies the whole batch under a single
    :class:`UpdateMethod`.

    The pending changes are held in memory, so keep an eye on batch sizes.
    An updater is good for exactly one batch: calling :meth:`finish` again
    logs a warning and sends nothing.

    Example:
        >>> updater = Updater(database, UpdateMethod.REPLACE)
        >>> item = Item("customer1")
        >>> item.link_to("product42")
        >>> updater.export(item)
        >>> updater.finish()
    """

    def __init__(self, database: "Database", method: UpdateMethod | str = UpdateMethod.ADD):
        self.database = database
        self.method = UpdateMethod(method)
        # In-memory buffer; the database is only contacted from finish().
        self._exporter = Exporter()
        self._finished = False

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def count(self) -> int:
        return self._exporter.count

    def write(self, fragment: str) -> None:
        """Append an already serialised item fragment to the batch."""
        self._exporter.write(fragment)

    def export(self, item: Item) -> None:
        """Add one changed item to the batch."""
        self._exporter.export(item)

    def export_many(self, items: Iterable[Item]) -> None:
        self._exporter.export_many(items)

    def finish(self) -> None:
        """Push the pending changes to the database.

        Raises:
            ResourceException: The batch was rejected or could not be sent.
                The updater is finished regardless and the batch is dropped.
        """
        if self._finished:
            logger.warning("Updater already finished, not sending the batch again")
            return

        self._finished = True
        document = self._exporter.close_document()

        try:
            self.database.post([], document, {"updateMethod": self.method.value})
        except ResourceException:
            logger.error(
                "Update of %d items (%s) to %s failed",
                self._exporter.count,
                self.method.value,
                self.database.name,
                exc_info=True,
            )
            raise

        logger.debug("Sent %d updated items (%s)", self._exporter.count, self.method.value)
