"""Decision logic for gating browser requests on a session cookie.

The gate runs in two stages. ``should_invoke`` filters out paths the gate never
looks at (API routes, framework assets, the favicon). ``decide`` then classifies
the path as public or protected and combines that with whether a credential was
sent. The result is a small value object the middleware turns into a response.

Nothing here performs I/O or keeps state between calls, so a single
``AccessGate`` can be shared by every request.
"""

from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

DEFAULT_PUBLIC_PATH_PREFIXES: tuple[str, ...] = ("/login", "/register")
DEFAULT_EXCLUDED_PATH_PREFIXES: tuple[str, ...] = ("/api", "/_next/static", "/_next/image", "/favicon.ico")


class Continue(BaseModel):
    """Let the request through to the next handler."""

    model_config = ConfigDict(frozen=True)

    @property
    def label(self) -> str:
        return "continue"


class RedirectTo(BaseModel):
    """Send the browser to ``location`` instead of serving the request."""

    model_config = ConfigDict(frozen=True)

    location: str

    @property
    def label(self) -> str:
        return f"redirect:{self.location}"


Decision = Union[Continue, RedirectTo]


class GateConfig(BaseModel):
    """Immutable routing rules for the gate.

    Construction fails when the login page would itself require a credential,
    or when the post-login landing page would bounce signed-in users back to
    it. Either case would leave the browser stuck in a redirect loop.
    """

    model_config = ConfigDict(frozen=True)

    public_path_prefixes: tuple[str, ...] = DEFAULT_PUBLIC_PATH_PREFIXES
    excluded_path_prefixes: tuple[str, ...] = DEFAULT_EXCLUDED_PATH_PREFIXES
    login_path: str = "/login"
    home_path: str = "/todos"
    credential_cookie: str = "auth-token"

    @field_validator("public_path_prefixes", "excluded_path_prefixes")
    @classmethod
    def check_prefixes_absolute(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        for prefix in value:
            if not prefix.startswith("/"):
                raise ValueError(f"path prefix must start with '/': {prefix!r}")
        return value

    @field_validator("login_path", "home_path")
    @classmethod
    def check_path_absolute(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError(f"path must start with '/': {value!r}")
        return value

    @field_validator("credential_cookie")
    @classmethod
    def check_cookie_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("credential cookie name must not be blank")
        return value

    @model_validator(mode="after")
    def check_no_redirect_loops(self) -> "GateConfig":
        if not self.is_public(self.login_path):
            raise ValueError(f"login path {self.login_path!r} must match a public path prefix")
        if self.is_public(self.home_path):
            raise ValueError(f"home path {self.home_path!r} must not match a public path prefix")
        return self

    def is_public(self, path: str) -> bool:
        # Prefix match, not segment match: "/login-help" counts as public.
        return any(path.startswith(prefix) for prefix in self.public_path_prefixes)

    def is_excluded(self, path: str) -> bool:
        return any(path.startswith(prefix) for prefix in self.excluded_path_prefixes)


class PresenceOnlyAuthPolicy:
    """Treat any non-empty credential as an authenticated session.

    No signature, expiry or lookup is performed. An empty cookie value counts
    as absent, the same as a missing cookie.
    """

    def is_authenticated(self, credential: str | None) -> bool:
        return bool(credential)


class AccessGate:
    def __init__(self, config: GateConfig | None = None, policy: PresenceOnlyAuthPolicy | None = None) -> None:
        self.config = config or GateConfig()
        self.policy = policy or PresenceOnlyAuthPolicy()

    def should_invoke(self, path: str) -> bool:
        """Mirror of the framework matcher ``/((?!api|_next/static|_next/image|favicon.ico).*)``."""
        return path.startswith("/") and not self.config.is_excluded(path)

    def decide(self, path: str, credential: str | None) -> Decision:
        is_public = self.config.is_public(path)
        authenticated = self.policy.is_authenticated(credential)
        if not authenticated and not is_public:
            return RedirectTo(location=self.config.login_path)
        if authenticated and is_public:
            return RedirectTo(location=self.config.home_path)
        return Continue()


__all__ = [
    "AccessGate",
    "Continue",
    "Decision",
    "GateConfig",
    "PresenceOnlyAuthPolicy",
    "RedirectTo",
    "DEFAULT_PUBLIC_PATH_PREFIXES",
    "DEFAULT_EXCLUDED_PATH_PREFIXES",
]
