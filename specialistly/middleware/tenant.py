"""
Tenant Rewrite Middleware for FastAPI

Rewrites requests arriving on a specialist subdomain to the tenant route:

    acme.specialistly.com/            -> /specialist/acme
    acme.specialistly.com/services?x  -> /specialist/acme/services?x

The rewrite happens in the ASGI scope, so it is invisible to the client:
no redirect is issued, the Host header and query string are untouched.
"""

import logging
from typing import Callable, Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from specialistly.core.tenant import rewrite_path, resolve_tenant, tenant_path

logger = logging.getLogger(__name__)


def _tenant_raw_path(tenant: str, raw_path: Optional[bytes], path: str) -> bytes:
    """Prefix the still percent-encoded request path with the tenant route."""
    prefix = tenant_path(tenant).encode("utf-8")
    if raw_path is None:
        raw_path = path.encode("utf-8")
    raw_path = raw_path.split(b"?", 1)[0]
    if raw_path in (b"", b"/"):
        return prefix
    return prefix + raw_path


class TenantRewriteMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        host = request.headers.get("host", "")
        path = request.scope["path"]

        new_path = rewrite_path(host, path)
        if new_path is None:
            request.state.tenant = None
            return await call_next(request)

        tenant = resolve_tenant(host)
        request.state.tenant = tenant
        request.scope["path"] = new_path
        request.scope["raw_path"] = _tenant_raw_path(tenant, request.scope.get("raw_path"), path)
        logger.debug(f"Tenant rewrite {host}{path} -> {new_path}")

        return await call_next(request)
