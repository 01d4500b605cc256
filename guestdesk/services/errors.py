from __future__ import annotations


class NotFound(LookupError):
    """Requested row does not exist (rendered as 404 by the routers)."""


class Conflict(ValueError):
    """Request is well-formed but clashes with stored state (409)."""
