import sys
import logging
from typing import Any

from loguru import logger

from rosterwatch.config.settings import settings

SENSITIVE_KEYS = ["key", "token", "password", "secret"]


def _mask(value: str) -> str:
    if len(value) > 8:
        return value[:4] + "****" + value[-4:]
    return "********"


def sensitive_data_filter(record: dict[str, Any]) -> bool:
    """Filter function to mask sensitive data in log records."""

    def mask_value(value: Any) -> Any:
        if isinstance(value, dict):
            masked = {}
            for key, item in value.items():
                if isinstance(item, str) and any(sk in key.lower() for sk in SENSITIVE_KEYS):
                    masked[key] = _mask(item)
                else:
                    masked[key] = mask_value(item)
            return masked
        if isinstance(value, list):
            return [mask_value(item) for item in value]
        return value

    # Apply masking to the 'extra' dictionary
    if "extra" in record and isinstance(record["extra"], dict):
        record["extra"] = mask_value(record["extra"])

    # Configured secrets never reach a sink verbatim
    sensitive_settings = [
        settings.expo_push_token,
        settings.twitter_access_token,
        settings.supabase_key,
    ]
    for original in sensitive_settings:
        if original and original in record["message"]:
            record["message"] = record["message"].replace(original, "********")

    return True


class InterceptHandler(logging.Handler):
    """Routes standard logging records (httpx, postgrest, ...) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # Get corresponding Loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging() -> None:
    """Configures Loguru logger based on application settings."""
    logger.remove()  # Remove default handler

    logger.add(
        sys.stderr,
        level=settings.log_level.upper(),
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
        backtrace=True,
        diagnose=True,
        filter=sensitive_data_filter,
    )

    logger.info(f"Logging initialized with level: {settings.log_level}")

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    # httpx logs every request at INFO; one line per sheet poll is noise
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logger.info("Standard logging intercepted.")
