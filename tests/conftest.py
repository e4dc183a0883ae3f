import pytest

import fsprovider.environment
from fsprovider import FileSystemProvider, ProviderOptions, reset_provider
from fsprovider.environment import ENVIRONMENT_VARIABLES


@pytest.fixture
def production_env(monkeypatch):
    """Remove every non-production signal: env vars and debugger."""
    for name in ENVIRONMENT_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(fsprovider.environment, "is_debugger_attached", lambda: False)


@pytest.fixture
def provider():
    """Provider with the production guard disabled."""
    p = FileSystemProvider(ProviderOptions(throw_on_test_mode_in_production=False))
    yield p
    p.reset_to_default()


@pytest.fixture(autouse=True)
def _clean_global_provider():
    yield
    reset_provider()
