# rentdrive/logging_config.py
import logging
import logging.handlers
import os
import re


class RedactingFilter(logging.Filter):
    """Mask credentials before a record reaches any handler."""
    SENSITIVE_PATTERNS = [
        r'(password)["\']?\s*[:=]\s*["\']?([^"\'\s,}]+)',
        r'(secret)["\']?\s*[:=]\s*["\']?([^"\'\s,}]+)',
        r'(token)["\']?\s*[:=]\s*["\']?([^"\'\s,}]+)',
    ]

    def filter(self, record):
        message = record.getMessage()
        for pattern in self.SENSITIVE_PATTERNS:
            message = re.sub(pattern, r'\1: [REDACTED]', message, flags=re.IGNORECASE)
        record.msg = message
        record.args = None
        return True


def setup_logging(app):
    """Configure the ``rentdrive`` logger tree for the application."""
    log_level = getattr(logging, app.config.get('LOG_LEVEL', 'INFO').upper(), logging.INFO)
    if app.debug:
        log_level = logging.DEBUG

    logger = logging.getLogger('rentdrive')
    logger.setLevel(log_level)

    # create_app may run more than once per process (tests)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    redacting_filter = RedactingFilter()

    detailed_formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    simple_formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(simple_formatter)
    console_handler.addFilter(redacting_filter)
    logger.addHandler(console_handler)

    if not app.testing:
        log_dir = app.config.get('LOG_DIR', 'logs')
        os.makedirs(log_dir, exist_ok=True)

        app_file_handler = logging.handlers.RotatingFileHandler(
            os.path.join(log_dir, 'application.log'),
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding='utf-8'
        )
        app_file_handler.setLevel(logging.INFO)

        error_file_handler = logging.handlers.RotatingFileHandler(
            os.path.join(log_dir, 'error.log'),
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding='utf-8'
        )
        error_file_handler.setLevel(logging.ERROR)

        for handler in (app_file_handler, error_file_handler):
            handler.setFormatter(detailed_formatter)
            handler.addFilter(redacting_filter)
            logger.addHandler(handler)

    logger.propagate = False
    return logger
