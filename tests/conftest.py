"""Root conftest for all tests."""

import pytest

# Shared test constants
ZERO_KEY = "AAAAAAAAAAAAAAAAAAAAAA=="
MAPS_KEY = "vNIXE0xscrmjlyV-12Nj_BvUPaw="
MAPS_URL = "https://maps.example.com/maps/api/geocode/json?address=test"


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep signer settings from the host environment out of tests."""
    monkeypatch.delenv("URLSIGNER_KEY", raising=False)
    monkeypatch.delenv("URLSIGNER_CONFIG_DIR", raising=False)
