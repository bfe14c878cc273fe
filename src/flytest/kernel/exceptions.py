"""Unified exception hierarchy for flytest.

All toolkit exceptions inherit from FlyTestException, so a test harness can
catch every toolkit error in one place or target a specific subclass.

Categories:
- ConflictException: operation conflicts with current state
- InvalidRequestException: request is well-formed but semantically wrong
- InfrastructureException: database and other collaborator failures
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class FlyTestException(Exception):
    """Base exception for all flytest errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "MOCK_DUPLICATE").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Usage Exceptions
# =============================================================================


class ConflictException(FlyTestException):
    """Operation conflicts with current state (e.g. duplicate registration)."""


class InvalidRequestException(FlyTestException):
    """Request is syntactically valid but semantically incorrect."""


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(FlyTestException):
    """Database, fixture and other collaborator failures."""
