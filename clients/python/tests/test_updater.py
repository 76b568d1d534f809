import logging

import pytest

from directededge import Database, Item, ResourceException, UpdateMethod, Updater
from directededge.exporter import XML_FOOTER, XML_HEADER


def test_replace_batch_is_one_post(database: Database, server) -> None:
    updater = Updater(database, UpdateMethod.REPLACE)
    updater.write("A")
    updater.write("B")
    assert server.requests == []

    updater.finish()

    assert len(server.requests) == 1
    request = server.last
    assert request.method == "POST"
    assert request.url.raw_path == b"/api/v1/testdb/?updateMethod=replace"
    assert request.headers["Content-Type"] == "text/xml"
    assert request.content.decode("utf-8") == XML_HEADER + "AB" + XML_FOOTER


def test_default_method_is_add(database: Database, server) -> None:
    updater = Updater(database)
    assert updater.method is UpdateMethod.ADD
    updater.finish()
    assert server.last.url.params["updateMethod"] == "add"


@pytest.mark.parametrize("method", ["add", "subtract", "replace", "delete"])
def test_method_sent_lowercase(database: Database, server, method: str) -> None:
    updater = Updater(database, method)
    updater.finish()
    assert server.last.url.params["updateMethod"] == method


def test_exported_items_in_write_order(database: Database, server) -> None:
    first = Item("customer1")
    first.link_to("product1")
    second = Item("customer2")

    updater = Updater(database, UpdateMethod.ADD)
    updater.export(first)
    updater.export_many([second])
    assert updater.count == 2
    updater.finish()

    body = server.last.content.decode("utf-8")
    assert body == XML_HEADER + first.to_xml() + second.to_xml() + XML_FOOTER


def test_second_finish_does_not_resend(database: Database, server, caplog) -> None:
    updater = Updater(database, UpdateMethod.REPLACE)
    updater.write("A")
    updater.finish()

    with caplog.at_level(logging.WARNING, logger="directededge.updater"):
        updater.finish()

    assert len(server.requests) == 1
    assert "already finished" in caplog.text


def test_write_after_finish_rejected(database: Database) -> None:
    updater = Updater(database)
    updater.finish()
    with pytest.raises(RuntimeError):
        updater.write("late")


def test_failed_batch_is_logged_and_raised(database: Database, server, caplog) -> None:
    server.status_code = 500
    updater = Updater(database, UpdateMethod.DELETE)
    updater.write("A")

    with caplog.at_level(logging.ERROR, logger="directededge.updater"):
        with pytest.raises(ResourceException) as exc_info:
            updater.finish()

    assert exc_info.value.method == "POST"
    assert "updateMethod=delete" in exc_info.value.url
    assert "failed" in caplog.text
    assert updater.finished

    # The batch is dropped, not retried.
    updater.finish()
    assert len(server.requests) == 1
