from __future__ import annotations

__version__ = "0.9.0"
__name__ = "card_counter"

from pathlib import Path

from chromatrace import LoggingConfig, LoggingSettings

from card_counter.utils.basic_logger import loguru_logger


CARD_COUNTER_HOME = Path.home() / ".card-counter"


logging_config = LoggingConfig(
    settings=LoggingSettings(
        application_level="INFO",
        enable_tracing=True,
        ignore_nan_trace=True,
        log_level="INFO",
        file_path=str(CARD_COUNTER_HOME / "card-counter.log"),
        enable_file_logging=False,
        max_bytes=10 * 1024 * 1024,
        backup_count=5,
    )
)
LOGGER = logging_config.get_logger(__name__)


__all__ = ["__version__", "__name__", "loguru_logger", "CARD_COUNTER_HOME", "LOGGER"]
