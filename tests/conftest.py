import pytest


@pytest.fixture(autouse=True)
def fixed_username(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make the OS user lookup deterministic."""
    monkeypatch.setattr("getpass.getuser", lambda: "osuser")
