import pytest

from flaggraph.models.client_config import API_PREFIX_ENV, INSECURE_ENV, TIMEOUT_ENV, URL_ENV


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch):
    for name in (URL_ENV, INSECURE_ENV, TIMEOUT_ENV, API_PREFIX_ENV):
        monkeypatch.delenv(name, raising=False)
