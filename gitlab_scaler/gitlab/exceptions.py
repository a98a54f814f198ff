class GitLabAPIError(Exception):
    """Base class for failures talking to the GitLab API."""

    def __init__(self, message: str, url: str = None):
        super().__init__(message)
        self.url = url


class TransportError(GitLabAPIError):
    """The request never produced a response (connection error, DNS, timeout)."""


class UpstreamStatusError(GitLabAPIError):
    """GitLab answered with a status other than 200."""

    def __init__(self, status_code: int, url: str = None):
        super().__init__(f"GitLab API returned non-200 status: {status_code}", url)
        self.status_code = status_code


class DecodeError(GitLabAPIError):
    """The response body was not the JSON array we expected."""
