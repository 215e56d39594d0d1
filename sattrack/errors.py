"""
Error types shared by the upstream clients and the API layer.

Two failure classes reach the HTTP surface:
- ConfigurationError: a required credential is missing. The message names
  the environment variable so the operator knows what to set.
- UpstreamError: the third-party call failed (timeout, network, non-2xx,
  unreadable body). The cause is logged where it happens; callers only
  ever see a fixed generic message.
"""


class ConfigurationError(Exception):
    """Required configuration value is absent."""

    def __init__(self, variable: str, hint: str = ''):
        self.variable = variable
        message = f'{variable} not set'
        if hint:
            message = f'{message} {hint}'
        super().__init__(message)


class UpstreamError(Exception):
    """Third-party API call failed."""

    def __init__(self, service: str, cause: Exception = None):
        self.service = service
        self.cause = cause
        super().__init__(f'{service} request failed: {cause}')
