import pytest

from specialistly.core.tenant import (
    resolve_tenant, rewrite_path, is_excluded_path, strip_port, tenant_path
)

@pytest.mark.parametrize("host, tenant", [
    ("acme.specialistly.com", "acme"),
    ("siva-pickelballcoach.specialistly.com", "siva-pickelballcoach"),
    ("acme.specialistly.com:443", "acme"),
    ("ACME.Specialistly.com", "acme"),
    ("coach.staging.specialistly.com", "coach"),
])
def test_resolves_first_label_as_tenant(host, tenant):
    assert resolve_tenant(host) == tenant

@pytest.mark.parametrize("host", [
    "specialistly.com",
    "localhost",
    "localhost:3000",
    "127.0.0.1:8000",
    "10.0.0.12",
    "[::1]:8000",
    "",
    None,
])
def test_hosts_without_subdomain_pass_through(host):
    assert resolve_tenant(host) is None

@pytest.mark.parametrize("label", ["www", "api", "admin", "mail", "ftp", "localhost", "specialistly"])
def test_reserved_subdomains_pass_through(label):
    assert resolve_tenant(f"{label}.specialistly.com") is None
    assert resolve_tenant(f"{label.upper()}.specialistly.com") is None

def test_custom_reserved_set():
    assert resolve_tenant("demo.specialistly.com", reserved=["demo"]) is None
    assert resolve_tenant("www.specialistly.com", reserved=[]) == "www"

def test_strip_port():
    assert strip_port("localhost:3000") == "localhost"
    assert strip_port("acme.specialistly.com") == "acme.specialistly.com"
    assert strip_port("[::1]:8000") == "[::1]"
    assert strip_port(None) == ""

def test_root_path_rewrites_to_tenant_route():
    assert rewrite_path("acme.specialistly.com", "/") == "/specialist/acme"
    assert rewrite_path("acme.specialistly.com", "") == "/specialist/acme"

def test_sub_path_is_kept_after_tenant_route():
    assert rewrite_path("acme.specialistly.com", "/services/42") == "/specialist/acme/services/42"

def test_reserved_host_is_unchanged():
    assert rewrite_path("www.specialistly.com", "/pricing") is None

def test_localhost_is_unchanged():
    assert rewrite_path("localhost:3000", "/dashboard") is None

def test_missing_host_is_unchanged():
    assert rewrite_path(None, "/dashboard") is None
    assert rewrite_path("", "/") is None

@pytest.mark.parametrize("path", [
    "/api",
    "/api/v1/appointments",
    "/_next/static/chunks/main.js",
    "/_next/image",
    "/favicon.ico",
    "/robots.txt",
    "/sitemap.xml",
])
def test_excluded_paths_bypass_resolver(path):
    assert is_excluded_path(path)
    assert rewrite_path("acme.specialistly.com", path) is None

def test_excluded_prefix_matches_whole_segments_only():
    assert not is_excluded_path("/apiary")
    assert rewrite_path("acme.specialistly.com", "/apiary") == "/specialist/acme/apiary"

def test_tenant_prefix_in_path_stays_scoped_to_host_tenant():
    assert rewrite_path("acme.specialistly.com", "/specialist/bob") == "/specialist/acme/specialist/bob"

def test_tenant_path():
    assert tenant_path("acme") == "/specialist/acme"
    assert tenant_path("acme", "about") == "/specialist/acme/about"
