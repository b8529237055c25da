"""Exceptions raised while building a mechanism simulation."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when a simulation cannot be built from the supplied settings."""


class UnknownMotorError(ConfigurationError):
    """Raised when a motor name is missing from the motor catalog."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown motor type: {name}")
        self.name = name


class UnknownMechanismError(ConfigurationError):
    """Raised for mechanism kinds the simulator has no plant model for."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown mechanism type: {name}")
        self.name = name


__all__ = ["ConfigurationError", "UnknownMotorError", "UnknownMechanismError"]
