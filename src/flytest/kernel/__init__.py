"""flytest Kernel — shared exception hierarchy."""

from flytest.kernel.exceptions import (
    ConflictException,
    FlyTestException,
    InfrastructureException,
    InvalidRequestException,
)

__all__ = [
    "ConflictException",
    "FlyTestException",
    "InfrastructureException",
    "InvalidRequestException",
]
