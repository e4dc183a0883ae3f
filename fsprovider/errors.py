"""Exceptions raised by FileSystemProvider operations."""

from __future__ import annotations

from enum import Enum


class ProviderErrorType(Enum):
    """Category of a provider failure."""

    FACTORY_RETURNS_NONE = "factory_returns_none"
    TEST_MODE_IN_PRODUCTION = "test_mode_in_production"
    INVALID_CONFIGURATION = "invalid_configuration"


class FileSystemProviderError(Exception):
    """Base class for provider errors.

    Attributes:
        error_type: The failure category. Defaults to INVALID_CONFIGURATION.
    """

    default_type = ProviderErrorType.INVALID_CONFIGURATION

    def __init__(self, message: str = "", error_type: ProviderErrorType | None = None):
        super().__init__(message)
        self.error_type = error_type or self.default_type


class InvalidArgumentError(FileSystemProviderError, TypeError):
    """A required factory argument was missing or not callable."""


class ProductionTestModeError(FileSystemProviderError, RuntimeError):
    """Override mode requested while running in production."""

    default_type = ProviderErrorType.TEST_MODE_IN_PRODUCTION


class FactoryReturnedNoneError(FileSystemProviderError, RuntimeError):
    """The installed factory produced no filesystem."""

    default_type = ProviderErrorType.FACTORY_RETURNS_NONE
