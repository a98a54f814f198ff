import os
import re
from typing import Mapping, NamedTuple, Optional

DEFAULT_GITLAB_URL = 'https://gitlab.com'
DEFAULT_PENDING_JOBS_PER_RUNNER = 10
DEFAULT_PORT = 8080

_INT_PATTERN = re.compile(r'[+-]?[0-9]+')


class Config(NamedTuple):
    """Configuration for the runner scaler."""
    # GitLab API
    gitlab_url: str
    gitlab_token: str

    # Scaling parameters
    pending_jobs_per_runner: int
    runner_tag: str
    runner_id: Optional[int]

    # Server
    port: int
    log_level: str


def _get_int(environ: Mapping[str, str], key: str, default: Optional[int]) -> Optional[int]:
    """
    Parse an integer setting, falling back to the default on a missing or malformed value.

    Only an optional sign followed by ASCII digits is accepted; surrounding
    whitespace and underscore separators count as malformed.
    """
    value = environ.get(key, '')
    if not _INT_PATTERN.fullmatch(value):
        return default
    return int(value)


def load_config(environ: Mapping[str, str] = None) -> Config:
    """
    Load configuration from environment variables.

    Missing or invalid values never fail; they fall back to defaults. An
    invalid token only shows up later as an API error.

    Args:
        environ: Optional mapping to read instead of os.environ

    Returns:
        Config: Configuration object with all scaler settings
    """
    environ = os.environ if environ is None else environ

    gitlab_url = (environ.get('GITLAB_URL') or DEFAULT_GITLAB_URL).rstrip('/')
    gitlab_token = environ.get('GITLAB_TOKEN', '')

    # Capacity must stay positive since it is used as a divisor
    pending_jobs_per_runner = _get_int(environ, 'PENDING_JOBS_PER_RUNNER', DEFAULT_PENDING_JOBS_PER_RUNNER)
    if pending_jobs_per_runner <= 0:
        pending_jobs_per_runner = DEFAULT_PENDING_JOBS_PER_RUNNER

    runner_tag = environ.get('GITLAB_RUNNER_TAG', '')
    runner_id = _get_int(environ, 'GITLAB_RUNNER_ID', None)

    port = _get_int(environ, 'PORT', DEFAULT_PORT)
    log_level = environ.get('LOG_LEVEL', 'INFO').upper()

    return Config(
        gitlab_url=gitlab_url,
        gitlab_token=gitlab_token,
        pending_jobs_per_runner=pending_jobs_per_runner,
        runner_tag=runner_tag,
        runner_id=runner_id,
        port=port,
        log_level=log_level
    )
