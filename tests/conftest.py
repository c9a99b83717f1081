"""Root conftest — shared fixtures."""

from __future__ import annotations

from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def isolated_home(tmp_path):
    """Keep config and classification logs out of the real home directory."""
    config_file = tmp_path / "config" / "config.toml"
    log_root = tmp_path / "logs"
    with patch("sqlshape.settings._CONFIG_FILE", config_file), patch(
        "sqlshape.classlog._LOG_ROOT", log_root
    ):
        yield {"config_file": config_file, "log_root": log_root}
