import httpx
import pytest

from directededge import Database


class StubServer:
    """Records requests and answers each with a canned status and body."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body = ""
        self.error: Exception | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, text=self.body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def server() -> StubServer:
    return StubServer()


@pytest.fixture
def database(server: StubServer):
    db = Database(
        "testdb",
        "secret",
        host="example.test",
        transport=httpx.MockTransport(server),
    )
    yield db
    db.close()
