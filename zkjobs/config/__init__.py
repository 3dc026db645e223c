"""
Configuration Module
====================

Centralized configuration management using Pydantic Settings.
Loads from environment variables with type validation and defaults.

Usage:
    from zkjobs.config import get_settings

    settings = get_settings()
    print(settings.prover.endpoint)
    print(settings.circuit.max_value)
"""

from zkjobs.config.settings import (
    CircuitSettings,
    Environment,
    LedgerSettings,
    LogLevel,
    ProverSettings,
    Settings,
    get_settings,
)


__all__ = [
    "Settings",
    "get_settings",
    "Environment",
    "LogLevel",
    "ProverSettings",
    "CircuitSettings",
    "LedgerSettings",
]
