#!/usr/bin/env python3
"""
Deployment CLI command.
"""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import click

from .. import __version__
from ..azd import AzdCli, DeploymentTool, HostTools
from ..config import DEFAULT_ENV_NAME, LOCATION, SUBSCRIPTION_ID, TENANT_ID, load_deployment_config
from ..console import Console
from ..deployment import DeploymentOrchestrator
from ..deployment.orchestrator import Prompt
from ..exceptions import ConfigurationError

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

EPILOG = f"""\b
Examples:
    content-deploy                       # Standard deployment
    content-deploy -e my-env-name        # Deploy with custom environment name
    content-deploy --skip-auth           # Skip authentication

\b
Configuration:
    Tenant ID:      {TENANT_ID}
    Subscription:   {SUBSCRIPTION_ID}
    Location:       {LOCATION}
"""


@dataclass
class DeployDependencies:
    """Collaborators for the deploy command; None selects the real one."""
    tool: Optional[DeploymentTool] = None
    host: Optional[HostTools] = None
    prompt: Optional[Prompt] = None


class DeployCommand(click.Command):
    """Command that reports bad usage with the full help and exit status 1.

    A help flag that appears before the bad token still wins, so
    `-h --bogus` shows help and exits 0.
    """

    def help_requested(self, ctx: click.Context, args: List[str]) -> bool:
        """Check whether a help flag comes before any unknown option."""
        known = set()
        takes_value = set()
        for param in self.get_params(ctx):
            if isinstance(param, click.Option):
                known.update(param.opts)
                if not param.is_flag and not param.count:
                    takes_value.update(param.opts)

        tokens = iter(args)
        for token in tokens:
            if token == "--":
                return False
            if token in ctx.help_option_names:
                return True
            name = token.split("=", 1)[0]
            if name in takes_value and "=" not in token:
                next(tokens, None)
            elif token.startswith("-") and name not in known:
                return False
        return False

    def parse_args(self, ctx: click.Context, args: List[str]) -> List[str]:
        # The parser consumes the list it is given
        original_args = list(args)
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            if self.help_requested(ctx, original_args):
                click.echo(self.get_help(ctx))
                ctx.exit(0)
            Console().error(e.format_message())
            click.echo(self.get_help(ctx))
            ctx.exit(1)


@click.command(cls=DeployCommand, context_settings=CONTEXT_SETTINGS, epilog=EPILOG)
@click.option(
    "--env-name",
    "-e",
    metavar="NAME",
    help=f"Specify environment name (default: {DEFAULT_ENV_NAME})",
)
@click.option(
    "--skip-auth",
    "-s",
    is_flag=True,
    help="Skip authentication step (if already authenticated)",
)
@click.option("--location", "-l", metavar="REGION", help=f"Azure region (default: {LOCATION})")
@click.option(
    "--config",
    "-c",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file overriding tenant, subscription, location or default environment",
)
@click.option("--dry-run", is_flag=True, help="Print azd commands instead of running them")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.version_option(version=__version__, prog_name="content-deploy")
@click.pass_context
def main(
    ctx: click.Context,
    env_name: Optional[str],
    skip_auth: bool,
    location: Optional[str],
    config_file: Optional[Path],
    dry_run: bool,
    verbose: bool,
) -> None:
    """Deploy the Content Processing Solution Accelerator to Azure."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    console = Console()

    try:
        config = load_deployment_config(config_file, location=location)
    except ConfigurationError as e:
        console.error(e.message)
        for hint in e.hints:
            click.echo(f"  - {hint}")
        sys.exit(1)

    deps = ctx.obj if isinstance(ctx.obj, DeployDependencies) else DeployDependencies()

    console.banner()
    if dry_run:
        console.warning("DRY RUN: azd commands are printed, not executed")

    orchestrator = DeploymentOrchestrator(
        config=config,
        tool=deps.tool or AzdCli(dry_run=dry_run),
        host=deps.host or HostTools(),
        env_name=env_name,
        skip_auth=skip_auth,
        prompt=deps.prompt,
        console=console,
    )
    result = orchestrator.execute()

    if not result.success:
        sys.exit(result.exit_code)


if __name__ == "__main__":
    main()
