"""Application factory for the Access Gate service.

``create_app`` builds a FastAPI application whose every browser-facing request
passes through the access gate before any route handler runs:

* ``RequestIdMiddleware`` (outermost) assigns a correlation id and logs one
  ``request.completed`` line per request, including what the gate decided.
* ``AccessGateMiddleware`` skips API and asset paths, then either lets the
  request continue or redirects it to the login or landing page depending on
  whether the ``auth-token`` cookie is present.

Application routes are expected to be registered on the returned app by the
caller. The factory itself only exposes ``/api/health``, which sits under the
excluded ``/api`` prefix so load balancer probes never get redirected.
"""

from __future__ import annotations

from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.errors import http_exception_handler
from .core.gate import AccessGate, Continue, Decision, GateConfig, PresenceOnlyAuthPolicy, RedirectTo
from .core.settings import GateSettings, get_settings
from .middlewares import AccessGateMiddleware, RequestIdMiddleware


def create_app(settings: GateSettings | None = None) -> FastAPI:
    settings = settings or get_settings()
    gate = AccessGate(settings.gate_config(), PresenceOnlyAuthPolicy())

    app = FastAPI(title=settings.APP_NAME)
    app.state.settings = settings
    app.state.gate = gate

    # Starlette wraps in reverse order of registration: the last one added runs first.
    app.add_middleware(
        AccessGateMiddleware,
        gate=gate,
        redirect_status_code=settings.REDIRECT_STATUS_CODE,
    )
    app.add_middleware(RequestIdMiddleware)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    @app.get("/api/health")
    async def health() -> dict[str, bool]:
        return {"ok": True}

    return app


__all__ = [
    "AccessGate",
    "Continue",
    "Decision",
    "GateConfig",
    "GateSettings",
    "PresenceOnlyAuthPolicy",
    "RedirectTo",
    "create_app",
]
