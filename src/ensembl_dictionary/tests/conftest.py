import json
import os
from collections.abc import AsyncGenerator, Callable, Generator
from pathlib import Path

import httpx
import pytest
import respx
from fastapi import FastAPI

from ensembl_dictionary.platform.types import JSONValue
from ensembl_dictionary.services.dictionary import EnsemblDictionary
from ensembl_dictionary.tests.fixtures.recording_fetcher import RecordingFetcher

TEST_BASE_URL = "http://test"
FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session", autouse=True)
def _test_env_defaults() -> None:
    # Keep tests deterministic and never point at the public service by accident.
    os.environ.setdefault("EBI_SEARCH_BASE_URL", TEST_BASE_URL)
    os.environ.setdefault("LOG_FORMAT", "console")


@pytest.fixture
def load_fixture() -> Callable[[str], JSONValue]:
    def _load(name: str) -> JSONValue:
        with (FIXTURES_DIR / name).open(encoding="utf-8") as handle:
            payload: JSONValue = json.load(handle)
        return payload

    return _load


@pytest.fixture
def fetcher() -> RecordingFetcher:
    return RecordingFetcher()


@pytest.fixture
def dictionary(fetcher: RecordingFetcher) -> EnsemblDictionary:
    return EnsemblDictionary({"baseURL": TEST_BASE_URL, "log": True}, fetch=fetcher)


@pytest.fixture
def ebi_respx() -> Generator[respx.Router]:
    """respx router for mocking outbound EBI Search httpx requests."""
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture
async def http_dictionary() -> AsyncGenerator[EnsemblDictionary]:
    """Dictionary wired to a real ``EbiSearchClient`` (mock it with ``ebi_respx``)."""
    dictionary = EnsemblDictionary({"baseURL": TEST_BASE_URL})
    yield dictionary
    await dictionary.close()


@pytest.fixture
def app(http_dictionary: EnsemblDictionary) -> FastAPI:
    # Ensure settings reads current env, not cached values from prior imports.
    from ensembl_dictionary.platform.config import get_settings

    get_settings.cache_clear()

    from ensembl_dictionary.main import create_app

    return create_app(http_dictionary)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://api") as c:
        yield c
