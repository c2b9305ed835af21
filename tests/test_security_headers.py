"""Tests for HTTP security headers.

These tests verify that security headers are set on JSON API responses.
"""


class TestSecurityHeaders:
    """Test suite for security header middleware."""

    def test_x_content_type_options(self, client):
        """Verify X-Content-Type-Options is set to prevent MIME sniffing."""
        response = client.get("/hog-status")
        assert response.headers.get("X-Content-Type-Options") == "nosniff"

    def test_x_frame_options(self, client):
        """Verify X-Frame-Options is set to prevent clickjacking."""
        response = client.get("/hog-status")
        assert response.headers.get("X-Frame-Options") == "DENY"

    def test_csp_includes_required_directives(self, client):
        """Verify CSP includes the restrictive directives."""
        response = client.get("/hog-status")
        csp = response.headers.get("Content-Security-Policy")

        assert "default-src 'self'" in csp
        assert "frame-ancestors 'none'" in csp
        assert "base-uri 'self'" in csp

    def test_referrer_policy(self, client):
        response = client.get("/hog-status")
        assert response.headers.get("Referrer-Policy") == "strict-origin-when-cross-origin"

    def test_status_is_never_cached(self, client):
        """Hog status changes underneath clients, so responses are no-store."""
        response = client.post("/hog-resources")
        assert response.headers.get("Cache-Control") == "no-store, max-age=0"

    def test_no_hsts_in_debug_mode(self, client):
        """HSTS is omitted in debug mode (local development without TLS)."""
        response = client.get("/hog-status")
        assert "Strict-Transport-Security" not in response.headers

    def test_hsts_in_production_mode(self, client_production):
        """HSTS is set outside debug mode."""
        response = client_production.get("/hog-status")
        hsts = response.headers.get("Strict-Transport-Security")
        assert hsts == "max-age=31536000; includeSubDomains"

    def test_headers_on_error_responses(self, client):
        """Security headers are applied to 404 responses too."""
        response = client.get("/nonexistent")
        assert response.status_code == 404
        assert response.headers.get("X-Frame-Options") == "DENY"
