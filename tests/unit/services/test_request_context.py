"""
Unit tests for RequestContext client IP resolution
"""

from src.adapter.services.geoip_locator import build_geo_locator
from src.app.services.geo_locator import NullGeoLocator
from src.app.services.request_context import RequestContext
from src.domain.entities import AuditSource


def test_client_ip_prefers_direct_connection():
    context = RequestContext(
        remote_addr="10.0.0.5", forwarded_for="203.0.113.7", real_ip="198.51.100.1"
    )
    assert context.client_ip == "10.0.0.5"


def test_client_ip_falls_back_to_first_forwarded_entry():
    context = RequestContext(forwarded_for="203.0.113.7, 10.0.0.1", real_ip="198.51.100.1")
    assert context.client_ip == "203.0.113.7"


def test_client_ip_falls_back_to_real_ip():
    context = RequestContext(real_ip="198.51.100.1")
    assert context.client_ip == "198.51.100.1"


def test_client_ip_none_when_nothing_known():
    assert RequestContext().client_ip is None


def test_source_is_mobile_when_app_version_sent():
    assert RequestContext(app_version="2.4.1").source == AuditSource.mobile
    assert RequestContext().source == AuditSource.web


def test_build_geo_locator_without_database_disables_lookup(tmp_path):
    assert isinstance(build_geo_locator(""), NullGeoLocator)
    assert isinstance(build_geo_locator(str(tmp_path / "missing.mmdb")), NullGeoLocator)
