"""CLI entry point for loggo.

Invoked as::

    loggo [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m loggo.cli.main

Commands
--------
<plugin>    Any ``loggo-<plugin>`` executable found next to ``loggo``
            and known to the command registry (e.g. ``gcp-stream``)
plugins     List the plugin commands found on disk
version     Show version information

The command tree is built at startup by ``build_cli``: plugins are
discovered and cross-checked against the registry before any argument
of the actual invocation is parsed.
"""
from __future__ import annotations

import platform
import signal
import sys
from collections.abc import Sequence
from importlib import metadata
from pathlib import Path

import click
from rich.markup import escape
from rich.table import Table

from loggo.cli.utils import configure_logging, console, err_console
from loggo.core.context import ExecutionContext, SystemContext
from loggo.core.errors import DispatchCancelled, StartupError, UnregisteredPluginError
from loggo.core.settings import LOG_LEVELS, HostSettings
from loggo.dispatch.dispatcher import (
    DISPATCH_FAILURE_EXIT_CODE,
    Dispatcher,
    DispatchRequest,
)
from loggo.plugins.locator import PluginFile, scan
from loggo.plugins.registry import CommandDescriptor, CommandRegistry, default_registry

DIST_NAME = "loggo"

ROOT_HELP = """Stream json logs as rich TUI.

l'oGGo provides a rich Terminal User Interface for streaming json based
logs and a toolset to assist you tailoring the display format.
"""


# ---------------------------------------------------------------------------
# Plugin-backed commands
# ---------------------------------------------------------------------------


class PassthroughCommand(click.Command):
    """A command whose arguments are never parsed by the host.

    Every token after the command name, ``--help`` and ``--`` included,
    reaches the callback as the ``args`` parameter in its original order.
    """

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        ctx.params["args"] = tuple(args)
        return ctx.args


def _dispatch_and_exit(ctx: click.Context, dispatcher: Dispatcher, request: DispatchRequest) -> None:
    """Run ``request`` and end the invocation with the plugin's exit code."""
    try:
        result = dispatcher.run(request)
    except DispatchCancelled as exc:
        ctx.exit(exc.exit_code)
    except KeyboardInterrupt:
        ctx.exit(128 + signal.SIGINT)

    if not result.ok:
        err_console.print(
            f"[red]Failed to run subcommand {escape(request.name)}:[/red] "
            f"{escape(str(result.launch_error))}"
        )
        ctx.exit(DISPATCH_FAILURE_EXIT_CODE)
    ctx.exit(result.exit_code)


def make_plugin_command(descriptor: CommandDescriptor, dispatcher: Dispatcher) -> click.Command:
    """Return the click command that forwards ``descriptor.name`` to its plugin."""

    @click.pass_context
    def run(ctx: click.Context, args: tuple[str, ...]) -> None:
        _dispatch_and_exit(ctx, dispatcher, DispatchRequest(name=descriptor.name, args=tuple(args)))

    short_help = descriptor.short_help or None
    if descriptor.passthrough:
        return PassthroughCommand(
            name=descriptor.name,
            callback=run,
            help=descriptor.help or descriptor.short_help,
            short_help=short_help,
            add_help_option=False,
        )
    return click.Command(
        name=descriptor.name,
        callback=run,
        params=[click.Argument(["args"], nargs=-1, type=click.UNPROCESSED)],
        help=descriptor.help or descriptor.short_help,
        short_help=short_help,
        context_settings={"ignore_unknown_options": True},
    )


# ---------------------------------------------------------------------------
# Native commands
# ---------------------------------------------------------------------------


def installed_version() -> str:
    """Return the version recorded in the installed ``loggo`` distribution."""
    return metadata.version(DIST_NAME)


def make_version_command(directory: Path, plugins: Sequence[PluginFile]) -> click.Command:
    """Return the ``version`` command for a host serving ``directory``."""

    @click.command(name="version")
    def version_command() -> None:
        """Show the host version and where plugins are loaded from."""
        table = Table(show_header=False, box=None)
        table.add_row("[bold]loggo[/bold]", f"v{installed_version()}")
        table.add_row("Python", platform.python_version())
        table.add_row("Plugin directory", escape(str(directory)))
        table.add_row("Plugins", str(len(plugins)))
        console.print(table)

    return version_command


def make_plugins_command(plugins: Sequence[PluginFile], registry: CommandRegistry) -> click.Command:
    """Return the ``plugins`` command listing what startup discovered."""

    @click.command(name="plugins")
    def plugins_command() -> None:
        """List the plugin commands found next to the loggo executable."""
        if not plugins:
            console.print("[bold]Plugins:[/bold]")
            console.print(
                "  (No plugins found. Install loggo-* executables next to loggo to see entries here.)"
            )
            return

        table = Table(title="Plugins")
        table.add_column("Command", style="bold", no_wrap=True)
        table.add_column("Flags", no_wrap=True)
        table.add_column("Executable")
        table.add_column("Path", overflow="fold")
        for plugin in plugins:
            descriptor = registry.get(plugin.name)
            executable = "[green]yes[/green]" if plugin.is_executable() else "[red]no[/red]"
            table.add_row(
                escape(plugin.name),
                descriptor.flag_policy.value,
                executable,
                escape(str(plugin.path)),
            )
        console.print(table)

    return plugins_command


# ---------------------------------------------------------------------------
# Command tree
# ---------------------------------------------------------------------------


def _make_root_group() -> click.Group:
    @click.group(name="loggo", help=ROOT_HELP, context_settings={"help_option_names": ["-h", "--help"]})
    @click.version_option(package_name=DIST_NAME, prog_name="loggo")
    @click.option(
        "--log-level",
        type=click.Choice(LOG_LEVELS, case_sensitive=False),
        default=None,
        help="Verbosity of host diagnostics (default: LOGGO_LOG_LEVEL or WARNING).",
    )
    def cli(log_level: str | None) -> None:
        if log_level:
            configure_logging(log_level)

    return cli


def build_cli(
    context: ExecutionContext | None = None,
    registry: CommandRegistry | None = None,
    settings: HostSettings | None = None,
) -> click.Group:
    """Discover plugins and return the complete ``loggo`` command group.

    Parameters
    ----------
    context:
        Where to look for plugins and how to start them. Defaults to a
        ``SystemContext`` built from ``settings``.
    registry:
        The sanctioned commands. Defaults to ``default_registry()``.
    settings:
        Host settings. Defaults to ``HostSettings()``.

    Raises
    ------
    SelfPathError
        If the plugin directory cannot be determined.
    DiscoveryError
        If the plugin directory cannot be listed.
    UnregisteredPluginError
        If a plugin on disk has no descriptor in ``registry``.
    """
    settings = settings or HostSettings.from_env()
    context = context or SystemContext(settings)
    registry = registry if registry is not None else default_registry()

    directory = context.self_directory()
    plugins = scan(directory)
    descriptors: list[CommandDescriptor] = []
    for plugin in plugins:
        descriptor = registry.lookup(plugin.name)
        if descriptor is None:
            raise UnregisteredPluginError(plugin.name, plugin.path)
        descriptors.append(descriptor)

    dispatcher = Dispatcher(context, terminate_timeout=settings.terminate_timeout)
    cli = _make_root_group()
    cli.add_command(make_version_command(directory, plugins))
    cli.add_command(make_plugins_command(plugins, registry))
    for descriptor in descriptors:
        cli.add_command(make_plugin_command(descriptor, dispatcher))
    return cli


def main(argv: Sequence[str] | None = None) -> None:
    """Console-script entry point."""
    try:
        settings = HostSettings.from_env()
        configure_logging(settings.log_level)
        cli = build_cli(settings=settings)
    except StartupError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        sys.exit(1)

    cli.main(args=list(argv) if argv is not None else None, prog_name="loggo")


if __name__ == "__main__":
    main()
