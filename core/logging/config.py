"""Structlog configuration for dual output: JSON files and colored console."""

import logging
import logging.handlers
import os
from pathlib import Path

import structlog

from core.logging.processors import (
    add_process_info,
    add_request_context,
    add_service_context,
    console_renderer,
)

MAX_LOG_FILE_BYTES = 50 * 1024 * 1024
LOG_FILE_BACKUP_COUNT = 20


def setup_logging() -> None:
    """Configure structlog with JSON file logs and colored console logs.

    File output is one JSON object per line with request, service and
    process metadata, rotated at MAX_LOG_FILE_BYTES. Console output is
    rendered by console_renderer.

    Environment Variables:
    - LOG_FILE_PATH: Path to log file
      (default: ./logs/notification-preference-service.log)
    - LOG_LEVEL: Logging level (default: INFO)
    - SERVICE_NAME: Service name for metadata
    - ENVIRONMENT: Deployment environment (default: development)
    """
    log_file_path = os.getenv(
        "LOG_FILE_PATH", "./logs/notification-preference-service.log"
    )
    log_level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_name, logging.INFO)

    Path(log_file_path).parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.handlers.RotatingFileHandler(
        filename=log_file_path,
        maxBytes=MAX_LOG_FILE_BYTES,
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(log_level)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)

    shared_processors = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_request_context,
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            add_service_context,
            add_process_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Records from libraries that log through the stdlib get the same
    # metadata via foreign_pre_chain
    file_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
            foreign_pre_chain=[
                *shared_processors,
                add_service_context,
                add_process_info,
            ],
        )
    )
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=console_renderer,
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)
    root_logger.setLevel(log_level)

    structlog.get_logger(__name__).info(
        "Logging configured",
        log_file=log_file_path,
        log_level=log_level_name,
        max_file_size_mb=MAX_LOG_FILE_BYTES // (1024 * 1024),
        backup_count=LOG_FILE_BACKUP_COUNT,
    )
