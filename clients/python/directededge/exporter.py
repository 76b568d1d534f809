"""XML export of items, to a file or straight into a database."""

import io
import logging
import os
from typing import TYPE_CHECKING, Any, Iterable, TextIO

from .types import Item

if TYPE_CHECKING:
    from .database import Database

logger = logging.getLogger(__name__)

XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n<directededge version="0.1">\n'
XML_FOOTER = "</directededge>\n"


class Exporter:
    """Writes items into a Directed Edge XML document.

    With a file path as target the document is written to that file. With a
    :class:`Database` as target it is collected in memory and imported into
    the database by :meth:`finish`, replacing the database contents. Without
    a target the document is only kept in memory (see :meth:`close_document`).

    Example:
        >>> exporter = Exporter("dump.xml")
        >>> exporter.export(Item("product1", tags={"product"}))
        >>> exporter.finish()
        >>> database.import_from_file("dump.xml")
    """

    def __init__(self, target: "str | os.PathLike[str] | Database | None" = None):
        if target is None:
            self.database = None
            self.path = None
            self._stream: TextIO = io.StringIO()
        elif isinstance(target, (str, os.PathLike)):
            self.database = None
            self.path = target
            self._stream = open(target, "w", encoding="utf-8")
        else:
            self.database = target
            self.path = None
            self._stream = io.StringIO()
        self._count = 0
        self._finished = False
        self.begin()

    @property
    def count(self) -> int:
        """Number of fragments written so far."""
        return self._count

    @property
    def finished(self) -> bool:
        return self._finished

    def begin(self) -> None:
        self._stream.write(XML_HEADER)

    def write(self, fragment: str) -> None:
        """Append an already serialised fragment."""
        if self._finished:
            raise RuntimeError("Exporter has already been finished")
        self._stream.write(fragment)
        self._count += 1

    def export(self, item: Item) -> None:
        """Append one item."""
        self.write(item.to_xml())

    def export_many(self, items: Iterable[Item]) -> None:
        for item in items:
            self.export(item)

    def close_document(self) -> str | None:
        """Write the footer and close the buffer.

        Returns:
            The document text for in-memory exports, ``None`` for files.
        """
        self._stream.write(XML_FOOTER)
        self._finished = True

        if isinstance(self._stream, io.StringIO):
            document = self._stream.getvalue()
            self._stream.close()
            return document

        self._stream.close()
        return None

    def finish(self) -> None:
        """Complete the document and, for a database target, import it."""
        if self._finished:
            logger.warning("Exporter already finished, ignoring")
            return

        document = self.close_document()
        logger.debug("Exported %d items", self._count)

        if self.database is not None and document is not None:
            self.database.put([], document)

    def close(self) -> None:
        """Release the buffer without completing the document.

        A file target is left without its footer and nothing is imported.
        """
        if not self._stream.closed:
            self._stream.close()
        self._finished = True

    def __enter__(self) -> "Exporter":
        return self

    def __exit__(self, exc_type: Any, *args: Any) -> None:
        if exc_type is None and not self._finished:
            self.finish()
        else:
            self.close()
