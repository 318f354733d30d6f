"""Status codes and error type of the internal RPC contract.

The gateway reports every failure as an ``RpcError``; transports hosting the
gateway translate ``StatusCode`` into their own wire representation.
"""

from __future__ import annotations

from enum import Enum

from booking_adapter.domain.entities.error_codes import InvalidParameter


class StatusCode(str, Enum):
    OK = "ok"
    INVALID_ARGUMENT = "invalid_argument"
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    OUT_OF_RANGE = "out_of_range"
    PERMISSION_DENIED = "permission_denied"
    UNAUTHENTICATED = "unauthenticated"
    DEADLINE_EXCEEDED = "deadline_exceeded"
    UNAVAILABLE = "unavailable"
    INTERNAL = "internal"
    UNKNOWN = "unknown"


class RpcError(Exception):
    def __init__(
        self,
        code: StatusCode,
        message: str,
        parameter: InvalidParameter | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.parameter = parameter

    def __str__(self) -> str:
        return f"rpc error: code = {self.code.value} desc = {self.message}"
