from __future__ import annotations

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response
from starlette.types import ASGIApp

from ..core.gate import AccessGate, RedirectTo
from .request_id import gate_decision_ctx_var

logger = logging.getLogger("access_gate.gate")


def redirect_target(request: Request, location: str) -> str:
    """Absolute URL for ``location`` on the same origin as ``request``."""
    return str(request.url.replace(path=location, query="", fragment=""))


class AccessGateMiddleware(BaseHTTPMiddleware):
    """Redirect browser requests based on the ``auth-token`` cookie.

    Paths the gate skips (API routes, framework assets) go straight through.
    Anything else is classified by ``AccessGate.decide`` and either handed to
    the next handler or answered with a redirect.
    """

    def __init__(self, app: ASGIApp, gate: AccessGate | None = None, redirect_status_code: int = 307) -> None:
        super().__init__(app)
        self.gate = gate or AccessGate()
        self.redirect_status_code = redirect_status_code

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if not self.gate.should_invoke(path):
            logger.debug("gate.skipped", extra={"extra_data": {"path": path}})
            return await call_next(request)

        credential = request.cookies.get(self.gate.config.credential_cookie)
        decision = self.gate.decide(path, credential)
        request.state.gate_decision = decision.label
        gate_decision_ctx_var.set(decision.label)

        if isinstance(decision, RedirectTo):
            logger.info(
                "gate.redirect",
                extra={
                    "extra_data": {
                        "path": path,
                        "location": decision.location,
                        "credential_present": self.gate.policy.is_authenticated(credential),
                    }
                },
            )
            return RedirectResponse(
                url=redirect_target(request, decision.location), status_code=self.redirect_status_code
            )

        return await call_next(request)
