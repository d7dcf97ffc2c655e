import pytest
from hypothesis import settings

# Prevent Hypothesis from writing a local example database (e.g. `.hypothesis/`) during tests.
settings.register_profile("hermes-update-tests", database=None)
settings.load_profile("hermes-update-tests")


@pytest.fixture
def clean_env(monkeypatch):
    """Keep settings resolution away from the developer's environment."""
    monkeypatch.delenv("HERMES_UPDATE_REPO_ROOT", raising=False)
    monkeypatch.delenv("HERMES_UPDATE_CONFIG", raising=False)
    return monkeypatch
