"""
Tests for post-deployment instructions.
"""

import pytest

from content_deploy.deployment.instructions import (
    ENDPOINT_PLACEHOLDER,
    TROUBLESHOOTING_STEPS,
    extract_api_endpoint,
    render_next_steps,
)


class TestExtractApiEndpoint:
    """Test endpoint extraction."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("https://api.contoso.io", "api.contoso.io"),
            ("https://api.contoso.io/", "api.contoso.io"),
            ('"https://api.contoso.io/"', "api.contoso.io"),
            ("api.contoso.io", "api.contoso.io"),
            ("", None),
            ("https://", None),
        ],
    )
    def test_values(self, value, expected):
        assert extract_api_endpoint({"SERVICE_API_URI": value}) == expected

    def test_missing_key(self):
        assert extract_api_endpoint({"AZURE_LOCATION": "centralus"}) is None


class TestRenderNextSteps:
    """Test the instructions block."""

    def test_contains_all_sections(self):
        text = render_next_steps("api.contoso.io")

        for heading in [
            "Step 1: Register Schema Files",
            "Step 2: Import Sample Data",
            "Step 3: Configure Authentication",
            "Useful Commands:",
            "Documentation:",
        ]:
            assert heading in text

    def test_endpoint_in_urls(self):
        text = render_next_steps("api.contoso.io")

        assert "https://api.contoso.io/schemavault/" in text
        assert (
            "./upload_files.sh https://api.contoso.io/contentprocessor/submit "
            "./propertyclaims <CLAIM_SCHEMA_ID>"
        ) in text

    def test_placeholder(self):
        text = render_next_steps(ENDPOINT_PLACEHOLDER)

        assert "https://<YOUR-API-ENDPOINT>/contentprocessor/submit" in text

    def test_troubleshooting_steps(self):
        assert len(TROUBLESHOOTING_STEPS) == 4
        assert TROUBLESHOOTING_STEPS[1].endswith("./docs/quota_check.md")
