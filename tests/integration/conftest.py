from __future__ import annotations

import textwrap
from pathlib import Path

import pytest


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """Config that mirrors a production deployment of the site forms."""

    path = tmp_path / "config.yaml"
    path.write_text(
        textwrap.dedent(
            f"""
            scoring:
              presets:
                contact: contact
                event: event
              extra_keywords:
                - seo services
            logging:
              level: info
              log_dir: {tmp_path}/logs
            """
        ),
        encoding="utf-8",
    )
    return path
