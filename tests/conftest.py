"""Shared fixtures: CSV builders and fake HTTP transports."""

from collections.abc import Callable

import httpx
import pytest

from sheet_leaderboard.config import GROUP_A, GROUP_B, SOURCES
from sheet_leaderboard.fetch.sheets import SheetFetcher


def sheet_row(name: str, score: str, score_index: int = 8) -> str:
    """One gviz-style CSV row with the name in column 0 and the score at ``score_index``."""
    fields = [f'"{name}"'] + ['""'] * (score_index - 1) + [f'"{score}"']
    return ",".join(fields)


def sheet_csv(*rows: tuple[str, str], score_index: int = 8) -> str:
    return "\n".join(sheet_row(n, s, score_index) for n, s in rows) + "\n"


MSCI_CSV = sheet_csv(("Anan", "42"), ("Boon", "57"), ("Chai", "13"), ("Dao", "57"), ("Ek", "8"))
SSCI_CSV = sheet_csv(("Fah", "30"), ("Gift", "50"))


def routes(responses: dict[str, httpx.Response]) -> Callable[[httpx.Request], httpx.Response]:
    """Handler answering by sheet name (the ``sheet`` query parameter)."""

    def handler(request: httpx.Request) -> httpx.Response:
        sheet = request.url.params.get("sheet", "")
        return responses.get(sheet, httpx.Response(404))

    return handler


@pytest.fixture
def make_fetcher() -> Callable[..., SheetFetcher]:
    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> SheetFetcher:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return SheetFetcher(SOURCES, client=client)

    return factory


@pytest.fixture
def ok_handler() -> Callable[[httpx.Request], httpx.Response]:
    return routes(
        {
            GROUP_A.title: httpx.Response(200, text=MSCI_CSV),
            GROUP_B.title: httpx.Response(200, text=SSCI_CSV),
        }
    )
