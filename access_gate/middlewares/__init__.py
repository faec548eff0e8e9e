from __future__ import annotations

from .access_gate import AccessGateMiddleware, redirect_target
from .request_id import RequestIdMiddleware, gate_decision_ctx_var, request_id_ctx_var

__all__ = [
    "AccessGateMiddleware",
    "RequestIdMiddleware",
    "redirect_target",
    "request_id_ctx_var",
    "gate_decision_ctx_var",
]
