"""Custom structlog processors for request context and service metadata."""

import os
import threading

from colorama import Fore, Style, just_fix_windows_console
from structlog.typing import EventDict, WrappedLogger

from core.logging.context import get_request_id

DEFAULT_SERVICE_NAME = "notification-preference-service"

LEVEL_COLORS = {
    "DEBUG": Fore.CYAN,
    "INFO": Fore.GREEN,
    "WARNING": Fore.YELLOW,
    "ERROR": Fore.RED,
    "CRITICAL": Fore.RED + Style.BRIGHT,
}

# Shown in the console prefix or only useful in the JSON file
CONSOLE_HIDDEN_FIELDS = frozenset(
    {
        "level",
        "timestamp",
        "request_id",
        "logger",
        "event",
        "process_id",
        "thread_id",
        "service_name",
        "environment",
    }
)

just_fix_windows_console()


def add_request_context(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Add the current request ID, when one is bound, to log events."""
    request_id = get_request_id()
    if request_id:
        event_dict["request_id"] = request_id
    return event_dict


def add_service_context(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service_name and environment to log events."""
    event_dict["service_name"] = os.getenv("SERVICE_NAME", DEFAULT_SERVICE_NAME)
    event_dict["environment"] = os.getenv("ENVIRONMENT", "development")
    return event_dict


def add_process_info(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Add process and thread identifiers to log events.

    Dispatch fans channel sends out to worker threads, so thread_id is what
    ties a sender's log lines to its channel.
    """
    event_dict["process_id"] = os.getpid()
    event_dict["thread_id"] = threading.get_ident()
    return event_dict


def console_renderer(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> str:
    """Render log events as colored single lines for the console.

    Format: [LEVEL] timestamp | request_id | logger_name | message key=value...

    Args:
        _logger: The wrapped logger instance (unused).
        _method_name: The name of the method called on the logger (unused).
        event_dict: The event dictionary to be logged.

    Returns:
        A formatted, colored string for console output.
    """
    level = str(event_dict.get("level", "INFO")).upper()
    level_color = LEVEL_COLORS.get(level, Fore.WHITE)

    formatted = (
        f"{level_color}[{level:<8}]{Style.RESET_ALL} "
        f"{Fore.WHITE}{event_dict.get('timestamp', '')}{Style.RESET_ALL} | "
        f"{Fore.MAGENTA}{event_dict.get('request_id', '-')}{Style.RESET_ALL} | "
        f"{Fore.BLUE}{event_dict.get('logger', 'root')}{Style.RESET_ALL} | "
        f"{event_dict.get('event', '')}"
    )

    extra = " ".join(
        f"{key}={value}"
        for key, value in event_dict.items()
        if key not in CONSOLE_HIDDEN_FIELDS
    )
    if extra:
        formatted += f" {Fore.YELLOW}{extra}{Style.RESET_ALL}"

    return formatted
