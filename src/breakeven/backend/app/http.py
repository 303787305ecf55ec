"""JSON error payloads shared by the blueprints and the error handlers."""

from __future__ import annotations

from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Mapping

from flask import jsonify


@dataclass(frozen=True)
class ProblemResponse:
    """Error body carrying a machine-readable code and an HTTP status.

    ``title`` is the standard reason phrase for ``status``.
    """

    error: str
    status: int
    message: str | None = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    @property
    def title(self) -> str:
        try:
            return HTTPStatus(self.status).phrase
        except ValueError:
            return "Error"

    def as_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.error, "title": self.title, "status": self.status}
        if self.message:
            body["message"] = self.message
        body.update(self.extra)
        return body

    def to_response(self) -> tuple[Any, int]:
        return jsonify(self.as_dict()), self.status


def problem_response(
    error: str,
    *,
    status: int,
    message: str | None = None,
    **extra: Any,
) -> ProblemResponse:
    """Keyword ``extra`` values are merged into the response body."""

    return ProblemResponse(error=error, status=status, message=message, extra=extra)


__all__ = ["ProblemResponse", "problem_response"]
