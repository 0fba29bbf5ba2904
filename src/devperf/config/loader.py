"""
Reading `config.toml` from disk.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict

from ..validation import handle_config_error, ErrorSeverity

logger = logging.getLogger(__name__)


def load_toml_file(config_path: Path) -> Dict[str, Any]:
    """
    Parse the devperf configuration file into raw tables.

    Raises:
        FileNotFoundError: If ``config_path`` does not exist
        tomllib.TOMLDecodeError: If the file is not valid TOML
    """
    config_path = Path(config_path)
    logger.info(f"Loading devperf configuration from: {config_path}")

    if not config_path.is_file():
        raise FileNotFoundError(f"devperf configuration not found: {config_path}")

    with open(config_path, "rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            handle_config_error(
                error=e,
                context=f"parsing {config_path.name}",
                severity=ErrorSeverity.CRITICAL,
                logger=logger,
            )
            raise
