# Core package initialization
# Cross-cutting concerns: configuration, errors, logging, security, locking.

from . import config, exceptions, security

__all__ = [
    "config",
    "exceptions",
    "security",
]
