"""Client configuration and logging setup."""

import logging
import sys

import structlog
from pydantic import Field
from pydantic_settings import BaseSettings


class ClientSettings(BaseSettings):
    """Catalog client settings."""

    catalog_api_url: str = Field(
        default="http://localhost:8000",
        description="Product Catalog API base URL",
    )
    request_timeout: float = Field(
        default=30.0,
        description="HTTP request timeout in seconds",
    )
    search_debounce_seconds: float = Field(
        default=0.3,
        description="Quiet period before a typed search term is queried",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    model_config = {
        "env_prefix": "CATALOG_CLIENT_",
        "env_file": ".env",
        "extra": "ignore",
    }


settings = ClientSettings()


def configure_logging(log_level: str | None = None) -> None:
    """Configure stdlib logging and structlog for client applications.

    Args:
        log_level: Minimum level to emit; defaults to the configured level.
    """
    level = (log_level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(message)s",
        stream=sys.stderr,
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
