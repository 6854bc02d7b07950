from __future__ import annotations

import logging

from motoin.infra.config import log_level

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger once; later calls leave existing handlers alone."""
    logging.basicConfig(level=level or log_level(), format=LOG_FORMAT)
