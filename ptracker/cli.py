"""
ptracker CLI - Command line entry point.

Each invocation loads the snapshot, runs one command against the session or
report service and saves the snapshot again if the command changed it.

Usage:
    ptracker create my_website
    ptracker start my_website
    ptracker stop my_website
    ptracker report
"""

import logging
import sys
from typing import Optional

import click

from ptracker import __version__
from ptracker.domain.errors import CorruptStateError, TrackerError
from ptracker.domain.models import TrackerData
from ptracker.infra.clock import Clock, UtcClock
from ptracker.infra.config import Settings, get_settings
from ptracker.infra.store import JsonStore
from ptracker.services.report_service import ReportService
from ptracker.services.session_service import SessionService
from ptracker.utils import read_help_text

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
START_TIME_FORMAT = "%d %b %y %H:%M %Z"


class AppContext:
    """
    Collaborators shared by the commands of one invocation.

    Tests build one with a temporary data directory and a fixed clock and
    pass it as ``obj``.
    """

    def __init__(self, settings: Optional[Settings] = None, clock: Optional[Clock] = None,
                 store: Optional[JsonStore] = None):
        self.settings = settings or get_settings()
        self.clock = clock or UtcClock()
        self.store = store or JsonStore(self.settings.data_file)
        self.sessions = SessionService()
        self.reports = ReportService()

    def load(self) -> TrackerData:
        try:
            return self.store.load()
        except CorruptStateError as e:
            logger.error(str(e))
            raise click.ClickException(str(e))
        except OSError as e:
            logger.error(f"Failed to read {self.store.path}: {e}")
            raise click.ClickException(f"Error reading data: {e}")

    def save(self, tracker: TrackerData) -> None:
        try:
            self.store.save(tracker)
        except OSError as e:
            logger.error(f"Failed to save {self.store.path}: {e}")
            raise click.ClickException(f"Error saving data: {e}")


def _name_missing(name: Optional[str]) -> bool:
    """Print the usage text when a command that needs a project got none"""
    if name:
        return False
    click.echo("Project name required.")
    click.echo(read_help_text())
    return True


class TrackerGroup(click.Group):
    """Command group that answers unknown verbs with a hint instead of a usage error"""

    def resolve_command(self, ctx: click.Context, args):
        if args and not args[0].startswith("-") and self.get_command(ctx, args[0]) is None:
            return args[0], unknown_command, args[1:]
        return super().resolve_command(ctx, args)


@click.command(context_settings={"ignore_unknown_options": True, "allow_extra_args": True})
def unknown_command():
    click.echo("Unknown command. Use 'help'.")


def configure_logging(settings: Settings) -> None:
    """Send the package's log records to the log file in the data directory"""
    package_logger = logging.getLogger("ptracker")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    handler = logging.FileHandler(settings.log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(settings.log_level_value)


@click.group(cls=TrackerGroup, invoke_without_command=True)
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx: click.Context):
    """ptracker - Personal Time Tracker CLI

    Track time spent on your projects with simple commands.
    """
    if ctx.obj is None:
        ctx.obj = AppContext()
    app: AppContext = ctx.obj

    configure_logging(app.settings)
    logger.info(f"Invoked: {sys.argv}")

    if ctx.invoked_subcommand is None:
        click.echo("No command provided. Use 'help'.")


@cli.command()
@click.argument("name", required=False)
@click.pass_obj
def create(app: AppContext, name: Optional[str]):
    """Create a new project."""
    if _name_missing(name):
        return
    tracker = app.load()
    try:
        app.sessions.create(tracker, name)
    except TrackerError as e:
        click.echo(str(e))
        return

    app.save(tracker)
    logger.info(f"Created project '{name}'")
    click.echo(f"Project '{name}' created.")


@cli.command()
@click.argument("name", required=False)
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_obj
def delete(app: AppContext, name: Optional[str], yes: bool):
    """Delete a project and all its logs."""
    if _name_missing(name):
        return
    tracker = app.load()
    try:
        app.sessions.get(tracker, name)
    except TrackerError as e:
        click.echo(str(e))
        return

    if app.settings.preferences.confirm_delete and not yes:
        if not click.confirm(f"Delete '{name}'?", default=False):
            click.echo("Cancelled.")
            return

    app.sessions.delete(tracker, name)
    app.save(tracker)
    logger.info(f"Deleted project '{name}'")
    click.echo(f"Deleted '{name}'.")


@cli.command()
@click.argument("name", required=False)
@click.pass_obj
def start(app: AppContext, name: Optional[str]):
    """Start tracking time on a project."""
    if _name_missing(name):
        return
    tracker = app.load()
    now = app.clock.now()
    try:
        entry = app.sessions.start(tracker, name, now)
    except TrackerError as e:
        click.echo(str(e))
        return

    app.save(tracker)
    logger.info(f"Started '{name}' at {entry.start.isoformat()}")
    click.echo(f"Started '{name}' at {entry.start.strftime(START_TIME_FORMAT)}")


@cli.command()
@click.argument("name", required=False)
@click.pass_obj
def stop(app: AppContext, name: Optional[str]):
    """Stop tracking the specified project."""
    if _name_missing(name):
        return
    tracker = app.load()
    now = app.clock.now()
    try:
        duration = app.sessions.stop(tracker, name, now)
    except TrackerError as e:
        click.echo(str(e))
        return

    app.save(tracker)
    project = app.sessions.get(tracker, name)
    if duration.total_seconds() < 0:
        logger.warning(f"Negative session length for '{name}': {duration}")
    logger.info(f"Stopped '{name}' after {duration}")
    click.echo(
        f"Stopped '{name}': {duration.total_seconds() / 60:.2f}min "
        f"(Total: {project.total_time.total_seconds() / 60:.2f}min)"
    )


@cli.command()
@click.pass_obj
def status(app: AppContext):
    """Show active tracking sessions."""
    tracker = app.load()
    click.echo(app.reports.render_status(
        tracker,
        app.clock.now(),
        time_format=app.settings.preferences.status_time_format
    ))


@cli.command()
@click.argument("name", required=False)
@click.pass_obj
def stats(app: AppContext, name: Optional[str]):
    """View time log for a project."""
    if _name_missing(name):
        return
    tracker = app.load()
    try:
        project = app.sessions.get(tracker, name)
    except TrackerError as e:
        click.echo(str(e))
        return

    click.echo(app.reports.render_stats(
        project,
        app.clock.now(),
        timestamp_format=app.settings.preferences.timestamp_format
    ))


@cli.command()
@click.option("--sort", is_flag=True, help="Rank projects by total time")
@click.pass_obj
def report(app: AppContext, sort: bool):
    """Show a summary of total time spent across all projects."""
    tracker = app.load()
    if not tracker.projects:
        click.echo("No projects.")
        return

    sort = sort or app.settings.preferences.sort_report
    click.echo(app.reports.render_report(tracker, app.clock.now(), sort_by_total=sort))


@cli.command(name="list")
@click.pass_obj
def list_projects(app: AppContext):
    """List all tracked projects."""
    tracker = app.load()
    click.echo("Projects:")
    for name in tracker.names():
        click.echo(f"-  {name}")


@cli.command(name="help")
def help_command():
    """Show this help message."""
    click.echo(read_help_text())


def main():
    """Console script entry point"""
    return cli()


if __name__ == "__main__":
    sys.exit(main())
