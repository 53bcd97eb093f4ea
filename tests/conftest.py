import pytest

from bulkbridge.dispatch import Dispatcher
from bulkbridge.services import BridgeServices


@pytest.fixture(autouse=True)
def isolated_home(request, monkeypatch, tmp_path):
    """Point BULKBRIDGE_HOME at an empty directory so no user config leaks in."""
    home = tmp_path / "bulkbridge_home"
    monkeypatch.setenv("BULKBRIDGE_HOME", str(home))
    return home


@pytest.fixture
def services():
    """In-memory collaborators with no-op loaders."""
    return BridgeServices.in_memory()


@pytest.fixture
def dispatcher(services):
    return Dispatcher(services)
