"""
CLI interface for bulkbridge.

Lets the sidebar operations be invoked from a shell, which is how the bridge
is exercised outside the spreadsheet host:

    bulkbridge invoke initializeJob '{}'
    echo '{"offset": 0, "jobs": [...]}' | bulkbridge invoke writeLogs -
"""

import sys
from typing import Optional

import click

from bulkbridge import __version__
from bulkbridge.errors import JobFailure


@click.group()
@click.version_option(version=__version__, prog_name="bulkbridge")
@click.option("--log-level", default=None, help="Override the configured log level")
@click.pass_context
def main(ctx, log_level: Optional[str]):
    """
    bulkbridge - Bridge between the bulk editor sidebar and its operations.
    """
    from bulkbridge.config import load_config
    from bulkbridge.utils import setup_logging

    ctx.ensure_object(dict)
    try:
        config = load_config()
        ctx.obj["config"] = config
        setup_logging(
            log_file=config.get_log_file_path(),
            log_level=log_level or config.log_level,
            log_format=config.log_format,
        )
    except Exception as e:
        # init and --dry-run work without a config; other commands check config_error
        ctx.obj["config_error"] = str(e)
        setup_logging(log_level=log_level or "WARNING")


def _read_payload(payload: Optional[str]) -> Optional[str]:
    if payload == "-":
        return sys.stdin.read()
    return payload


@main.command("invoke")
@click.argument("operation")
@click.argument("payload", required=False)
@click.option("--dry-run", is_flag=True, help="Use an in-memory workbook and no-op loaders")
@click.pass_context
def invoke(ctx, operation: str, payload: Optional[str], dry_run: bool):
    """
    Invoke a sidebar operation.

    OPERATION is the operation name (see `bulkbridge ops`). PAYLOAD is the job
    as JSON, a bare string for goToTab, or "-" to read it from stdin.

    Examples:

        bulkbridge invoke initializeJob '{}'

        bulkbridge invoke goToTab Campaign

        bulkbridge invoke cmLoad '{"entity": "Campaign", "idsToLoad": [1, 2]}'
    """
    from bulkbridge.config import BulkbridgeConfig
    from bulkbridge.dispatch import Dispatcher
    from bulkbridge.services import build_services

    config = ctx.obj.get("config")
    if config is None:
        if not dry_run:
            click.echo(f"✗ Config not loaded: {ctx.obj.get('config_error', 'Unknown error')}", err=True)
            click.echo("Run 'bulkbridge init' to create a configuration file.", err=True)
            raise SystemExit(1)
        config = BulkbridgeConfig()

    dispatcher = Dispatcher(build_services(config, dry_run=dry_run))

    try:
        click.echo(dispatcher.invoke(operation, _read_payload(payload)))
    except JobFailure as failure:
        click.echo(failure.payload, err=True)
        raise SystemExit(1)


@main.command("ops")
def list_ops():
    """List the operations the sidebar can invoke."""
    from bulkbridge.operations import Operation

    for op in Operation:
        suffix = " (entity loader)" if op.uses_loader else ""
        click.echo(f"  {op.value}{suffix}")


@main.command("include")
@click.argument("filename")
@click.pass_context
def include_cmd(ctx, filename: str):
    """Print a sidebar UI file (FILENAME is relative to the UI root)."""
    from bulkbridge.errors import PermanentError
    from bulkbridge.html import include

    config = ctx.obj.get("config")
    ui_root = config.ui_root if config is not None else None
    try:
        click.echo(include(filename, ui_root), nl=False)
    except PermanentError as e:
        click.echo(f"✗ {e}", err=True)
        raise SystemExit(1)


@main.command("init")
@click.option("--force", is_flag=True, help="Overwrite existing configuration")
def init(force: bool):
    """Initialize bulkbridge configuration."""
    from bulkbridge.config import BulkbridgeConfig, get_bulkbridge_home
    import yaml

    home = get_bulkbridge_home()
    if not home.exists():
        home.mkdir(parents=True)

    cfg_path = home / "config.yaml"
    if cfg_path.exists() and not force:
        click.echo(f"Config already exists at {cfg_path}. Use --force to overwrite.", err=True)
        raise SystemExit(1)

    defaults = BulkbridgeConfig()
    default_cfg = {
        "sqlite_path": str(home / "workbook.db"),
        "user": defaults.user,
        "ui_root": None,
        "log_sheet": defaults.log_sheet,
        "store_sheet": defaults.store_sheet,
        "loaders": {},
        "allowed_loader_modules": defaults.allowed_loader_modules,
        "log_level": "INFO",
        "log_file": None,
        "log_format": "pretty",
        "env_file": str(home / ".env"),
    }
    cfg_path.write_text(yaml.safe_dump(default_cfg, sort_keys=False))

    env_path = home / ".env"
    if not env_path.exists():
        env_path.write_text("# Credentials for loader packages, e.g.\n# GOOGLE_APPLICATION_CREDENTIALS=...\n")

    click.echo(f"Initialized bulkbridge config at {cfg_path}")


if __name__ == "__main__":
    main()
