"""Exceptions raised across the loading and reporting pipeline.

Only the conditions below propagate to callers. Faults in a single line,
repository or scan root are reported as skipped units instead.
"""


class BeadviewError(Exception):
    """Base exception for beadview errors."""

    pass


class AuthenticationError(BeadviewError):
    """The remote source rejected the access token, or none was supplied."""

    pass


class SourceConfigurationError(BeadviewError):
    """The configured issue source cannot be used."""

    pass
