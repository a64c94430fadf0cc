"""BaseError – root of every exception plank raises or reports."""

from __future__ import annotations

import json
from typing import Any


class BaseError(Exception):
    """Exception carrying a stable code and structured context.

    ``str()`` of an instance is one JSON line, so it can be dropped as-is
    into the diagnostic log or the structlog system mirror.

    Args:
        message: What went wrong, for humans.
        code: Stable slug; ``default_code`` of the class when omitted.
        detail: Extra context; must be JSON-friendly or ``repr``-able.
        cause: The exception being wrapped, chained as ``__cause__``.
    """

    default_code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else self.default_code
        self.detail: dict[str, Any] = dict(detail) if detail else {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> dict[str, Any]:
        """``code``, ``message`` and ``detail``, plus ``cause`` when wrapping."""
        payload: dict[str, Any] = {"code": self.code, "message": self.message, "detail": self.detail}
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


__all__ = ["BaseError"]
