"""
Logging configuration
"""

import logging
import logging.handlers

from pathlib import Path


class LoggingConfig:
    """Logging configuration and management"""
    def __init__(self, logs_dir: str = "logs"):
        self.logs_dir = Path(logs_dir)
        self.app_log_file = self.logs_dir / "ragcheck.log"
        self.error_log_file = self.logs_dir / "ragcheck_errors.log"
        self.checks_log_file = self.logs_dir / "ragcheck_checks.log"

    def setup_logging(self, console_level: int = logging.WARNING):
        """Setup logging configuration"""
        self.logs_dir.mkdir(parents=True, exist_ok=True)

        root_logger = logging.getLogger()
        root_logger.setLevel(logging.DEBUG)

        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)
        formatter = logging.Formatter(
            fmt='%(asctime)s | %(name)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        # stdout belongs to the check lines, keep the console handler quiet
        console_handler = logging.StreamHandler()
        console_handler.setLevel(console_level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

        app_handler = logging.handlers.RotatingFileHandler(
            self.app_log_file,
            maxBytes=10*1024*1024,
            backupCount=5,
            encoding='utf-8'
        )
        app_handler.setLevel(logging.DEBUG)
        app_handler.setFormatter(formatter)
        root_logger.addHandler(app_handler)

        error_handler = logging.handlers.RotatingFileHandler(
            self.error_log_file,
            maxBytes=5*1024*1024,
            backupCount=3,
            encoding='utf-8'
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)
        root_logger.addHandler(error_handler)

        checks_logger = logging.getLogger("checks")
        checks_logger.setLevel(logging.INFO)
        checks_logger.propagate = False
        for handler in checks_logger.handlers[:]:
            checks_logger.removeHandler(handler)
            handler.close()

        checks_handler = logging.handlers.RotatingFileHandler(
            self.checks_log_file,
            maxBytes=10*1024*1024,
            backupCount=5,
            encoding='utf-8'
        )
        checks_formatter = logging.Formatter(
            fmt='%(asctime)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        checks_handler.setFormatter(checks_formatter)
        checks_logger.addHandler(checks_handler)

        return root_logger


# Default logging configuration instance
_logging_config = LoggingConfig()


def setup_logging(console_level: int = logging.WARNING):
    return _logging_config.setup_logging(console_level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def get_logging_config(logs_dir: str = None) -> LoggingConfig:
    """Get logging configuration, switching to logs_dir when one is given"""
    global _logging_config
    if logs_dir is not None and Path(logs_dir) != _logging_config.logs_dir:
        _logging_config = LoggingConfig(logs_dir)
    return _logging_config


def format_check_record(suite: str, check: str, status: str, url: str = None,
                        status_code: int = None, response_time: float = None,
                        error: str = None) -> str:
    log_parts = [
        f"suite={suite}",
        f"check={check}",
        f"status={status}",
        f"url={url or 'N/A'}",
        f"http_status={status_code or 'N/A'}",
    ]

    if response_time is not None:
        log_parts.append(f"response_time={response_time:.3f}s")

    if error:
        log_parts.append(f"error={error}")

    return " | ".join(log_parts)


def log_check_result(suite: str, check: str, status: str, url: str = None,
                     status_code: int = None, response_time: float = None,
                     error: str = None):
    checks_logger = logging.getLogger("checks")
    message = format_check_record(suite, check, status, url, status_code, response_time, error)

    if status == "failed":
        checks_logger.warning(message)
    else:
        checks_logger.info(message)


def log_run_boundary(suite: str, event: str, **fields):
    checks_logger = logging.getLogger("checks")

    log_parts = [f"suite={suite}", f"run={event}"]
    log_parts.extend(f"{key}={value}" for key, value in fields.items())

    checks_logger.info(" | ".join(log_parts))
