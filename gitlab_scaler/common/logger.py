import os
import logging
import json

# Attributes every LogRecord has; anything else was passed through `extra`
_RESERVED_ATTRS = {
    'args', 'asctime', 'created', 'exc_info', 'exc_text', 'filename',
    'funcName', 'id', 'levelname', 'levelno', 'lineno', 'module',
    'msecs', 'message', 'msg', 'name', 'pathname', 'process',
    'processName', 'relativeCreated', 'stack_info', 'taskName', 'thread', 'threadName'
}


def use_json_logs() -> bool:
    """JSON output is used when asked for explicitly or when running in a Kubernetes pod."""
    if os.environ.get('LOG_FORMAT', '').lower() == 'json':
        return True
    return os.environ.get('KUBERNETES_SERVICE_HOST') is not None


def setup_logging(level=None):
    """
    Set up logging, with JSON formatting for log collectors in cluster deployments.

    Args:
        level: Optional log level override (default: uses LOG_LEVEL env var or INFO)
    """
    if level is None:
        level = os.environ.get('LOG_LEVEL', 'INFO').upper()

    numeric_level = getattr(logging, level, logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        format='%(asctime)s [%(levelname)s] %(name)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    if use_json_logs():
        root_logger = logging.getLogger()
        for handler in root_logger.handlers:
            handler.setFormatter(JsonFormatter())

    # Silence noisy loggers
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('requests').setLevel(logging.WARNING)

    logging.debug("Logging initialized")


class JsonFormatter(logging.Formatter):
    """
    Format logs as one JSON object per line.
    """

    def format(self, record):
        log_record = {
            'timestamp': self.formatTime(record, self.datefmt),
            'level': record.levelname,
            'name': record.name,
            'message': record.getMessage(),
            'file': record.pathname,
            'line': record.lineno,
            'function': record.funcName
        }

        if record.exc_info:
            log_record['exception'] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_record[key] = value

        return json.dumps(log_record, default=str)
