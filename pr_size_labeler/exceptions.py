"""Custom exceptions for the PR size labeler."""


class LabelerError(Exception):
    """Base exception for all labeler errors."""


class ConfigError(LabelerError):
    """Invalid or unreadable labeler configuration."""


class EventError(LabelerError):
    """Triggering event could not be resolved to a pull request."""
