"""
Post-deployment instructions.

Builds the follow-up steps printed once `azd up` succeeds, with the deployed
API endpoint substituted into the sample commands.
"""

from typing import Dict, List, Optional

import click

API_ENDPOINT_KEY = "SERVICE_API_URI"
ENDPOINT_PLACEHOLDER = "<YOUR-API-ENDPOINT>"

SECTION_RULE = "─" * 64

TROUBLESHOOTING_STEPS: List[str] = [
    "1. Check the error message above",
    "2. Verify quota availability: ./docs/quota_check.md",
    "3. Review troubleshooting guide: ./docs/TroubleShootingSteps.md",
    "4. Check Azure Portal for resource status",
]


def extract_api_endpoint(values: Dict[str, str]) -> Optional[str]:
    """
    Get the API host from environment values.

    The scheme and trailing slash are removed so the host can be dropped into
    the URL templates below. Returns None when the value is missing or empty.
    """
    raw = values.get(API_ENDPOINT_KEY, "").strip().strip('"')
    endpoint = raw.removeprefix("https://").removesuffix("/")
    return endpoint or None


def _section(title: str) -> List[str]:
    return [click.style(title, fg="blue"), SECTION_RULE]


def render_next_steps(api_endpoint: str) -> str:
    """Render the post-deployment instructions block."""
    base_url = f"https://{api_endpoint}"
    lines: List[str] = [
        "",
        click.style("✓ Deployment Complete!", fg="green"),
        "",
        click.style(
            "⚠️  IMPORTANT: Complete these steps before using the application:",
            fg="yellow",
        ),
        "",
        *_section("Step 1: Register Schema Files"),
        "cd src/ContentProcessorAPI/samples/schemas",
        f"./register_schema.sh {base_url}/schemavault/ schema_info_sh.json",
        "",
        *_section("Step 2: Import Sample Data"),
        "cd src/ContentProcessorAPI/samples",
        "",
        "# Upload invoices (replace <INVOICE_SCHEMA_ID> with ID from Step 1)",
        f"./upload_files.sh {base_url}/contentprocessor/submit ./invoices <INVOICE_SCHEMA_ID>",
        "",
        "# Upload property claims (replace <CLAIM_SCHEMA_ID> with ID from Step 1)",
        f"./upload_files.sh {base_url}/contentprocessor/submit ./propertyclaims <CLAIM_SCHEMA_ID>",
        "",
        *_section("Step 3: Configure Authentication"),
        "Follow the guide: ./docs/ConfigureAppAuthentication.md",
        "(Note: Authentication changes can take up to 10 minutes)",
        "",
        *_section("Useful Commands:"),
        "View environment values:     azd env get-values",
        "View deployment status:      azd show",
        "Open Azure Portal:           azd show --output table",
        "Clean up resources:          azd down",
        "",
        *_section("Documentation:"),
        "Sample Workflow:             ./docs/SampleWorkflow.md",
        "Customize Schemas:           ./docs/CustomizeSchemaData.md",
        "API Documentation:           ./docs/API.md",
        "Troubleshooting:             ./docs/TroubleShootingSteps.md",
        "",
    ]
    return "\n".join(lines)
