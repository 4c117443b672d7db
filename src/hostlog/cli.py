"""CLI root — entry point for all hostlog subcommands.

Entry points:
  uv run hostlog          (recommended)
  python -m hostlog

Command surface:
  hostlog properties      print the host properties this process would log
  hostlog demo            run the sample add-in and print its log display
  hostlog config show     print resolved configuration
"""

import typer

from hostlog import __version__
from hostlog.logging import get_logger

app = typer.Typer(
    name="hostlog",
    help="Host-environment enrichers for structured logs.",
    no_args_is_help=True,
)

_log = get_logger(__name__)


# ---------------------------------------------------------------------------
# Global callback — runs before every subcommand
# ---------------------------------------------------------------------------


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"hostlog {__version__}")
        raise typer.Exit()


@app.callback()
def _main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Print version and exit.",
    ),
) -> None:
    """Host-environment enrichers for structured logs."""
    # Eager options (--version) raise typer.Exit() before this body runs,
    # so configure_logging() is only called for real subcommands.
    from hostlog.logging import configure_logging

    configure_logging()


# ---------------------------------------------------------------------------
# properties
# ---------------------------------------------------------------------------


@app.command("properties")
def properties(
    no_bitness: bool = typer.Option(
        False,
        "--no-bitness",
        help="Leave the bitness suffix off HostVersionName.",
    ),
) -> None:
    """Print the host properties attached to every log event.

    Runs the enrichers enabled in settings against an empty event and prints
    one line per property.  Properties whose host fact is unavailable (for
    example, no host version has been reported) are listed as unavailable.
    """
    from hostlog.config import get_settings
    from hostlog.pipeline import EnrichmentBuilder

    settings = get_settings()
    if no_bitness:
        settings = settings.model_copy(
            update={"enrich": settings.enrich.model_copy(update={"include_bitness": False})}
        )

    builder = EnrichmentBuilder.from_settings(settings)
    pipeline = builder.build()
    event = pipeline.enrich({})

    names = [getattr(e, "PROPERTY_NAME", type(e).__name__) for e in pipeline.enrichers]
    if not names:
        typer.echo("  no enrichers enabled")
        return

    width = max(len(n) for n in names)
    for name in names:
        value = event.get(name, "<unavailable>")
        typer.echo(f"  {name.ljust(width)} = {value}")

    _log.info(
        "properties computed",
        enabled=len(names),
        available=sum(1 for n in names if n in event),
    )


# ---------------------------------------------------------------------------
# demo
# ---------------------------------------------------------------------------


@app.command("demo")
def demo() -> None:
    """Load the sample add-in, disconnect it, and print its log display.

    The display order and output template come from the [display] settings.
    """
    from hostlog.addin import AddIn

    addin = AddIn()
    addin.auto_open()
    addin.on_disconnection()
    addin.auto_close()

    typer.echo(addin.display.render())
    _log.info("demo finished", entries=len(addin.display))


# ---------------------------------------------------------------------------
# config subcommands
# ---------------------------------------------------------------------------

_config_app = typer.Typer(help="Inspect resolved configuration.")
app.add_typer(_config_app, name="config")


@_config_app.command("show")
def config_show() -> None:
    """Print the fully-resolved configuration and exit.

    Shows which config file was loaded and the final value of every setting
    after environment-variable overrides are applied.  Useful for confirming
    that HOSTLOG_* overrides are being picked up correctly.
    """
    from hostlog.config import _config_file, get_settings

    settings = get_settings()

    typer.echo(f"\n  config : {_config_file()}\n")

    for section_name, section in settings.model_dump().items():
        typer.echo(f"  [{section_name}]")
        width = max(len(k) for k in section)
        for key, val in section.items():
            typer.echo(f"  {key.ljust(width)} = {val}")
        typer.echo()
