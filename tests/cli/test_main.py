import os
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from tests.conftest import MAPS_KEY, MAPS_URL, ZERO_KEY
from urlsigner.cli.main import main
from urlsigner.signer import sign_url


def run_cli(*args: str) -> None:
    main(list(args))


def test_sign_with_key(capsys: pytest.CaptureFixture[str]) -> None:
    """Test signing a URL with a key on the command line."""
    run_cli("sign", MAPS_URL, "--key", ZERO_KEY)

    captured = capsys.readouterr()
    assert captured.out.strip() == sign_url(MAPS_URL, ZERO_KEY)


def test_sign_with_env_key(capsys: pytest.CaptureFixture[str]) -> None:
    """Test signing a URL with the key from the environment."""
    with patch.dict(os.environ, {"URLSIGNER_KEY": MAPS_KEY}):
        run_cli("sign", MAPS_URL)

    captured = capsys.readouterr()
    assert captured.out.strip() == sign_url(MAPS_URL, MAPS_KEY)


def test_sign_with_config_dir(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Test signing a URL with the key from a config file."""
    with open(tmp_path / "config.yaml", "w") as f:
        yaml.safe_dump({"key": MAPS_KEY}, f)

    run_cli("sign", MAPS_URL, "--config-dir", str(tmp_path))

    captured = capsys.readouterr()
    assert captured.out.strip() == sign_url(MAPS_URL, MAPS_KEY)


def test_sign_invalid_key(capsys: pytest.CaptureFixture[str]) -> None:
    """Test that an invalid key is reported and exits non-zero."""
    with pytest.raises(SystemExit) as exc_info:
        run_cli("sign", MAPS_URL, "--key", "not-valid-base64!!!")

    assert exc_info.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Error: Failed parsing key" in captured.err


def test_sign_invalid_url(capsys: pytest.CaptureFixture[str]) -> None:
    """Test that an invalid URL is reported and exits non-zero."""
    with pytest.raises(SystemExit) as exc_info:
        run_cli("sign", "http://[invalid", "--key", ZERO_KEY)

    assert exc_info.value.code == 1
    assert "Error: Failed parsing url" in capsys.readouterr().err


def test_sign_missing_key(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Test that signing without any key is reported."""
    with pytest.raises(SystemExit) as exc_info:
        run_cli("sign", MAPS_URL, "--config-dir", str(tmp_path))

    assert exc_info.value.code == 1
    assert "No signing key configured" in capsys.readouterr().err


def test_no_command(capsys: pytest.CaptureFixture[str]) -> None:
    """Test that running without a command prints help."""
    with pytest.raises(SystemExit) as exc_info:
        run_cli()

    assert exc_info.value.code == 1
    assert "usage: urlsigner" in capsys.readouterr().out
