"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask or HTTP
helpers. Services translate them into response intents; they never reach the
transport layer.
"""

from __future__ import annotations

from dataclasses import dataclass

# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from domain helpers and caught by services.
    """

    pass


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class PatchApplicationError(ServiceError):
    """
    Raised when a patch operation cannot be applied to a projection.

    :param key: Error-map key, a wire field name or ``"patch"``.
    :type key: str
    :param message: Human-readable explanation.
    :type message: str
    """

    key: str
    message: str

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.key}: {self.message}"
