"""
Subdomain based tenant resolution.

Every specialist is served from their own subdomain, e.g.
``acme.specialistly.com``. Requests on such a host are rewritten server-side
to the tenant route ``/specialist/acme`` while the browser keeps showing the
original host.
"""

import ipaddress
from typing import Iterable, Optional

from specialistly.core.config import settings


def strip_port(host: Optional[str]) -> str:
    """Drop a trailing ``:port`` from a Host header value."""
    if not host:
        return ""
    host = host.strip()
    # Bracketed IPv6 literal, e.g. [::1]:8000
    if host.startswith("["):
        return host.split("]", 1)[0] + "]"
    return host.rsplit(":", 1)[0] if ":" in host else host


def _is_ip_address(hostname: str) -> bool:
    try:
        ipaddress.ip_address(hostname.strip("[]"))
    except ValueError:
        return False
    return True


def resolve_tenant(host: Optional[str], reserved: Optional[Iterable[str]] = None) -> Optional[str]:
    """
    Derive the tenant from a Host header.

    Returns the first label of a host with at least three dot-separated
    labels, unless that label is a reserved subdomain. Returns None when the
    request should pass through unchanged, including for a missing host.
    """
    reserved_labels = {label.lower() for label in (reserved if reserved is not None else settings.RESERVED_SUBDOMAINS)}

    hostname = strip_port(host)
    if _is_ip_address(hostname):
        return None

    labels = hostname.split(".")
    if len(labels) < 3:
        return None

    candidate = labels[0].lower()
    if not candidate or candidate in reserved_labels:
        return None

    return candidate


def is_excluded_path(path: str, excluded: Optional[Iterable[str]] = None) -> bool:
    """API routes and static assets are never tenant-rewritten."""
    for prefix in excluded if excluded is not None else settings.TENANT_EXCLUDED_PATHS:
        if path == prefix or path.startswith(prefix.rstrip("/") + "/"):
            return True
    return False


def tenant_path(tenant: str, path: str = "/") -> str:
    """Build the tenant-scoped path, keeping any sub-path after the tenant root."""
    base = f"{settings.TENANT_ROUTE_PREFIX}/{tenant}"
    if not path or path == "/":
        return base
    return base + (path if path.startswith("/") else "/" + path)


def rewrite_path(host: Optional[str], path: str) -> Optional[str]:
    """
    Decide the rewrite target for a request.

    Returns the tenant-scoped path, or None to pass the request through.
    """
    if is_excluded_path(path):
        return None

    tenant = resolve_tenant(host)
    if tenant is None:
        return None

    return tenant_path(tenant, path)
