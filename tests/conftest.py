import pytest
from deferlite.env import ENV_DEFERLITE_STRICT


@pytest.fixture(autouse=True)
def _default_settlement(monkeypatch: pytest.MonkeyPatch):  # pyright: ignore[reportUnusedFunction]
	monkeypatch.delenv(ENV_DEFERLITE_STRICT, raising=False)
