"""
shellenv: CLI entrypoint.

Usage:
    python -m shellenv.main --help
    python -m shellenv.main provision Z_AI_API_KEY --settings ~/.app/settings.json
    python -m shellenv.main status Z_AI_API_KEY
    python -m shellenv.main detect
    python -m shellenv.main config check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from shellenv import __version__
from shellenv.core.config.loader import ConfigError, find_config_file, load_config, load_or_default
from shellenv.core.models import (
    ProvisionRequest,
    ProvisionResult,
    SettingsSource,
    ShellenvConfig,
    VariableSpec,
)
from shellenv.core.observability.logging_config import (
    ENV_FILE,
    ENV_FILE_LEVEL,
    ENV_LEVEL,
    setup_logging,
)
from shellenv.core.persistence.settings_file import settings_path

_STATUS_STYLE = {
    "updated": ("✅", "green"),
    "skipped": ("⏭️ ", "yellow"),
    "failed": ("❌", "red"),
}


@click.group()
@click.version_option(version=__version__, prog_name="shellenv")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to shellenv.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """shellenv: write environment variables into your shell profile, once."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get(ENV_LEVEL, "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get(ENV_FILE),
        log_file_level=os.environ.get(ENV_FILE_LEVEL),
    )


# ── Helpers ─────────────────────────────────────────────────────


def _load(ctx: click.Context) -> ShellenvConfig:
    """Load configuration or exit with a readable error."""
    try:
        return load_or_default(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


def _build_requests(
    config: ShellenvConfig,
    names: tuple[str, ...],
    value: str | None = None,
    profile: str | None = None,
    settings: str | None = None,
    settings_key: str | None = None,
    placeholders: tuple[str, ...] = (),
    label: str | None = None,
    config_dir: str | None = None,
) -> list[ProvisionRequest]:
    """One independent request per variable name (all configured if none)."""
    if config_dir and not settings:
        settings = str(settings_path(Path(config_dir).expanduser()))

    if settings or settings_key:
        config = config.model_copy(update={
            "settings": SettingsSource(
                file=settings or config.settings.file,
                key=settings_key or config.settings.key,
            ),
        })

    if not names:
        if not config.variables:
            raise click.UsageError("No variable given and none configured in shellenv.yml.")
        if value is not None:
            raise click.UsageError("--value needs an explicit variable name.")
        specs = list(config.variables)
    else:
        try:
            specs = [config.get_variable(n) or VariableSpec(name=n) for n in names]
        except ValidationError as e:
            raise click.BadParameter(e.errors()[0]["msg"], param_hint="NAME") from e

    updates: dict = {}
    if placeholders:
        updates["placeholders"] = list(placeholders)
    if label:
        updates["label"] = label
    if updates:
        specs = [s.model_copy(update=updates) for s in specs]

    profile_path = Path(profile).expanduser() if profile else None
    return [config.build_request(s, value=value, profile=profile_path) for s in specs]


def _echo_result(result: ProvisionResult) -> None:
    icon, color = _STATUS_STYLE[result.status]
    click.secho(f"{icon} {result.variable}: ", fg=color, nl=False, bold=True)
    click.echo(result.message)
    if result.path and result.status != "updated":
        click.echo(f"   Profile: {result.path}")


# ── Commands ────────────────────────────────────────────────────


@cli.command()
@click.argument("names", nargs=-1)
@click.option("--value", default=None, help="Value to provision (default: settings lookup).")
@click.option("--profile", type=click.Path(dir_okay=False), default=None, help="Profile file to edit.")
@click.option("--settings", type=click.Path(dir_okay=False), default=None, help="JSON settings sidecar.")
@click.option(
    "--config-dir", type=click.Path(file_okay=False), default=None,
    help="Tool config directory; its settings.json is the default sidecar.",
)
@click.option("--settings-key", default=None, help="Dotted key inside the settings file.")
@click.option("--placeholder", "placeholders", multiple=True, help="Value treated as 'not set'.")
@click.option("--label", default=None, help="Marker label (default: variable name).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def provision(
    ctx: click.Context,
    names: tuple[str, ...],
    value: str | None,
    profile: str | None,
    settings: str | None,
    config_dir: str | None,
    settings_key: str | None,
    placeholders: tuple[str, ...],
    label: str | None,
    as_json: bool,
) -> None:
    """Export variables from the shell profile (idempotent)."""
    from shellenv.core.use_cases.provision import ensure_shell_env

    config = _load(ctx)
    requests = _build_requests(
        config, names, value=value, profile=profile, settings=settings,
        settings_key=settings_key, placeholders=placeholders, label=label,
        config_dir=config_dir,
    )

    # Each variable is provisioned independently, in order.
    results = [ensure_shell_env(r) for r in requests]

    if as_json:
        click.echo(json.dumps([r.to_dict() for r in results], indent=2))
    else:
        for result in results:
            _echo_result(result)

    if any(r.failed for r in results):
        sys.exit(1)


@cli.command()
@click.argument("name")
@click.option("--profile", type=click.Path(dir_okay=False), default=None, help="Profile file to inspect.")
@click.option("--placeholder", "placeholders", multiple=True, help="Value treated as 'not set'.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(
    ctx: click.Context,
    name: str,
    profile: str | None,
    placeholders: tuple[str, ...],
    as_json: bool,
) -> None:
    """Show how a variable is configured, without changing anything."""
    from shellenv.core.use_cases.status import check_status

    config = _load(ctx)
    request = _build_requests(config, (name,), profile=profile, placeholders=placeholders)[0]
    result = check_status(request)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    mark = "✅" if result.configured else "⚠️ "
    click.secho(f"\n{mark} {name}", fg="green" if result.configured else "yellow", bold=True)
    click.echo(f"   Shell:        {result.dialect.value}")
    click.echo(f"   Profile:      {result.profile}{'' if result.profile_exists else ' (missing)'}")
    click.echo(f"   Environment:  {'set' if result.in_environment else 'not set'}")
    click.echo(f"   In profile:   {'yes' if result.in_profile else 'no'}")
    click.echo(f"   Marked block: {'yes' if result.has_block else 'no'}")
    for a in result.assignments:
        state = "effective" if a.effective else "placeholder/empty"
        click.echo(f"     • line {a.line_number}: {state}")
    click.echo()


@cli.command()
@click.option("--profile", type=click.Path(dir_okay=False), default=None, help="Classify this profile path.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def detect(profile: str | None, as_json: bool) -> None:
    """Detect the shell dialect and the profile that would be edited."""
    from shellenv.core.models import EnvironmentSnapshot
    from shellenv.core.use_cases.provision import locate_target

    snapshot = EnvironmentSnapshot.capture()
    dialect, path = locate_target(snapshot, Path(profile) if profile else None)

    if as_json:
        click.echo(json.dumps({
            "dialect": dialect.value,
            "family": dialect.family,
            "profile": str(path) if path else None,
            "platform": snapshot.platform,
        }, indent=2))
        return

    click.echo(f"Shell:   {dialect.value} ({dialect.family})")
    if path is None:
        click.secho("Profile: none (unsupported shell; set variables manually)", fg="yellow")
    else:
        click.echo(f"Profile: {path}")


@cli.group()
def config() -> None:
    """Configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate shellenv.yml."""
    path = ctx.obj.get("config_path") or find_config_file()
    errors: list[str] = []
    loaded: ShellenvConfig | None = None

    if path is None:
        errors.append("No shellenv.yml found.")
    else:
        try:
            loaded = load_config(path)
        except ConfigError as e:
            errors.append(str(e))

    if as_json:
        click.echo(json.dumps({
            "valid": not errors,
            "config_path": str(path) if path else None,
            "errors": errors,
            "variables": [v.name for v in loaded.variables] if loaded else [],
        }, indent=2))
        sys.exit(0 if not errors else 1)

    if errors:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in errors:
            click.echo(f"   • {err}")
        sys.exit(1)

    assert loaded is not None  # guaranteed when no errors
    click.secho("✅ Configuration is valid", fg="green", bold=True)
    click.echo(f"   File: {path}")
    click.echo(f"   Tool: {loaded.tool}")
    click.echo(f"   Variables: {', '.join(v.name for v in loaded.variables) or '(none)'}")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
