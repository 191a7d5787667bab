"""Path Prefix Middleware — serves one route table under every serverless mount point.

Invariants:
    - A request to <prefix> or <prefix>/<rest> is routed as / or /<rest>
    - Paths outside every prefix pass through unchanged
    - Prefixes are matched on segment boundaries ("/api/generate-resumes" is not stripped)
"""

from starlette.types import ASGIApp, Receive, Scope, Send


class PathPrefixMiddleware:
    """Pure ASGI middleware stripping the first matching mount prefix."""

    def __init__(self, app: ASGIApp, prefixes: list[str]):
        self.app = app
        self.prefixes = sorted(prefixes, key=len, reverse=True)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] in ("http", "websocket"):
            stripped = strip_prefix(scope["path"], self.prefixes)
            if stripped != scope["path"]:
                scope = dict(scope)
                scope["path"] = stripped
                scope["raw_path"] = stripped.encode("utf-8")
        await self.app(scope, receive, send)


def strip_prefix(path: str, prefixes: list[str]) -> str:
    for prefix in prefixes:
        if path == prefix or path.startswith(prefix + "/"):
            return path[len(prefix):] or "/"
    return path
