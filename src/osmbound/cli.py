import logging
import re
from collections.abc import Callable
from typing import Annotated, Optional

import typer

from . import __version__
from .config.admin_levels import ADMIN_LEVELS
from .config.countries import CountryCatalog, CountryInfo
from .config.settings import Config, ConfigurationError
from .config_loader import load_config
from .domain.enums import Key, MenuAction, WizardState
from .inventory import FileSystemInventory
from .pipeline.runner import BoundaryPipeline
from .screens import (
    remark_warning,
    render_confirm,
    render_country_list,
    render_fetching,
    render_inventory,
    render_level_select,
    render_levels,
    render_main_menu,
    render_outcome,
    render_search_prompt,
)
from .types import BoundaryError, CatalogError
from .utils import setup_logging
from .wizard import FetchWizard, MainMenu

logger = logging.getLogger(__name__)

app = typer.Typer(help="OSM administrative boundaries: Overpass -> GeoJSON")

ConfigOption = Annotated[Optional[str], typer.Option("--config", "-c", help="Path to YAML settings file")]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Enable detailed logging output")]
LogFileOption = Annotated[bool, typer.Option("--log-to-file", help="Create timestamped log files")]

QCODE_PATTERN = re.compile(r"^Q\d+$")

# Raw sequences returned by getchar on POSIX terminals and the Windows console
KEY_SEQUENCES = {
    "\x1b[A": Key.UP, "\x1bOA": Key.UP, "\xe0H": Key.UP, "\x00H": Key.UP,
    "\x1b[B": Key.DOWN, "\x1bOB": Key.DOWN, "\xe0P": Key.DOWN, "\x00P": Key.DOWN,
    "\r": Key.ENTER, "\n": Key.ENTER, "\r\n": Key.ENTER,
    "\x1b": Key.ESCAPE,
    "q": Key.QUIT, "Q": Key.QUIT,
}

MULTI_CHAR_SEQUENCES = sorted((s for s in KEY_SEQUENCES if len(s) > 1), key=len, reverse=True)


def decode_key(sequence: str) -> Key:
    """Key for a getchar read; a held key may deliver several sequences at once, only the first counts."""
    if sequence in KEY_SEQUENCES:
        return KEY_SEQUENCES[sequence]
    for known in MULTI_CHAR_SEQUENCES:
        if sequence.startswith(known):
            return KEY_SEQUENCES[known]
    return Key.OTHER


def read_key() -> Key:
    return decode_key(typer.getchar())


def read_search_term() -> str:
    return typer.prompt("Enter search term (or type 'cancel' to go back)", default="", show_default=False)


def show_screen(text: str) -> None:
    typer.clear()
    typer.echo(text)


def wait_for_key(message: str = "Press any key to continue...") -> None:
    typer.echo(f"\n{message}")
    typer.getchar()


def load_runtime(config_path: Optional[str]) -> tuple[Config, CountryCatalog]:
    """Load settings and catalog, exiting with status 1 when either is unusable."""
    try:
        return load_config(config_path)
    except ConfigurationError as e:
        typer.echo(f"ERROR: Invalid configuration: {e}", err=True)
        raise typer.Exit(1)
    except CatalogError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)


def drive_wizard(
    wizard: FetchWizard,
    pipeline: BoundaryPipeline,
    read_key: Callable[[], Key] = read_key,
    read_line: Callable[[], str] = read_search_term,
    show: Callable[[str], None] = show_screen
) -> FetchWizard:
    """
    Run the fetch wizard to completion.

    Renders each state, feeds input back into the wizard and runs the pipeline
    once the download is confirmed. Fetch failures end the wizard with the error
    recorded; they are never raised to the caller.
    """
    while not wizard.finished:
        if wizard.awaiting_search:
            show(render_search_prompt(wizard))
            wizard.submit_search(read_line())
        elif wizard.state == WizardState.SELECT_COUNTRY:
            show(render_country_list(wizard))
            wizard.press(read_key())
        elif wizard.state == WizardState.SELECT_LEVEL:
            show(render_level_select(wizard))
            wizard.press(read_key())
        elif wizard.state == WizardState.CONFIRM:
            show(render_confirm(wizard))
            wizard.press(read_key())
        elif wizard.state == WizardState.FETCHING:
            show(render_fetching(wizard))
            try:
                result = pipeline.run(wizard.country.code, wizard.level, wizard.country.label)
            except BoundaryError as e:
                logger.error(f"Fetch failed: {e}")
                wizard.fail(e)
            else:
                wizard.complete(result)

    return wizard


def choose_menu_action(read_key: Callable[[], Key] = read_key, show: Callable[[str], None] = show_screen) -> MenuAction:
    menu = MainMenu()
    while True:
        show(render_main_menu(menu))
        action = menu.press(read_key())
        if action is not None:
            return action


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context):
    """Download OpenStreetMap administrative boundaries. Starts the interactive menu when no command is given."""
    if ctx.invoked_subcommand is None:
        menu()


@app.command("menu")
def menu(
    config: ConfigOption = None,
    verbose: VerboseOption = False,
    log_to_file: LogFileOption = False,
):
    """
    Interactive main menu: view downloaded boundaries, fetch a new one, or quit.
    """
    # Log lines would interleave with the redrawn screens, so only a file is used
    log_file = setup_logging(verbose, enable_file_logging=log_to_file, console=False, log_name="menu")

    cfg, catalog = load_runtime(config)
    pipeline = BoundaryPipeline.from_config(cfg)
    inventory = FileSystemInventory(cfg.output.root, catalog, filename=cfg.output.filename)

    if log_file:
        typer.echo(f"Logging to: {log_file}")

    try:
        while True:
            action = choose_menu_action()

            if action == MenuAction.QUIT:
                break

            if action == MenuAction.VIEW:
                show_screen("Downloaded Boundaries\n")
                typer.echo(render_inventory(inventory.scan()))
                wait_for_key("Press any key to return to main menu...")

            elif action == MenuAction.FETCH:
                wizard = FetchWizard(catalog, exists=pipeline.exporter.exists)
                drive_wizard(wizard, pipeline)
                typer.echo(render_outcome(wizard))
                wait_for_key()
    except KeyboardInterrupt:
        pass

    typer.echo("Goodbye!")


def resolve_country(catalog: CountryCatalog, identifier: str) -> CountryInfo:
    """Catalog entry for a code or name; unknown Wikidata codes are used as-is."""
    country = catalog.resolve(identifier)
    if country is not None:
        return country

    if QCODE_PATTERN.match(identifier.upper()):
        code = identifier.upper()
        return CountryInfo(uri=code, label=code, code=code)

    typer.echo(f"ERROR: Unknown country: {identifier}", err=True)
    suggestions = catalog.search(identifier)
    if suggestions:
        typer.echo("Did you mean: " + ", ".join(c.display for c in suggestions[:10]), err=True)
    raise typer.Exit(1)


@app.command("fetch")
def fetch(
    country: Annotated[str, typer.Option("--country", help="Wikidata code or country name (e.g. 'Q30', 'France')")],
    level: Annotated[int, typer.Option("--level", "-l", help="OSM admin_level (2-10)")] = 8,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Overwrite an existing download without asking")] = False,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
    log_to_file: LogFileOption = False,
):
    """
    Fetch one country's administrative boundaries at one level and save them as GeoJSON.
    """
    setup_logging(verbose, enable_file_logging=log_to_file, log_name="fetch")

    cfg, catalog = load_runtime(config)
    target = resolve_country(catalog, country)

    if level not in ADMIN_LEVELS:
        logger.warning(f"Admin level {level} is outside the usual range 2-10; the result may be empty")

    pipeline = BoundaryPipeline.from_config(cfg)
    if pipeline.exporter.exists(target.code, level) and not yes:
        if not typer.confirm(f"{target.display} level {level} already exists and will be overwritten. Continue?"):
            typer.echo("Download cancelled.")
            return

    try:
        result = pipeline.run(target.code, level, target.label)
    except BoundaryError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)

    if result.remark:
        typer.echo(remark_warning(result.remark), err=True)
    typer.echo(f"Saved {result.features_written} features to {result.output_path} ({result.duration_s:.1f}s)")


@app.command("list")
def list_downloaded(
    config: ConfigOption = None,
    verbose: VerboseOption = False,
):
    """
    List downloaded boundaries with feature counts, file sizes and dates.
    """
    setup_logging(verbose)

    cfg, catalog = load_runtime(config)
    inventory = FileSystemInventory(cfg.output.root, catalog, filename=cfg.output.filename)

    typer.echo(f"Downloaded boundaries in: {cfg.output.root}")
    typer.echo(render_inventory(inventory.scan()))


@app.command("countries")
def countries(
    term: Annotated[Optional[str], typer.Argument(help="Case-insensitive part of the country name")] = None,
    config: ConfigOption = None,
):
    """
    Search the country catalog.
    """
    _, catalog = load_runtime(config)
    matches = catalog.search(term) if term else list(catalog)

    if not matches:
        typer.echo("No countries found.")
        return

    for country in matches:
        typer.echo(country.display)
    typer.echo(f"\n{len(matches)} of {len(catalog)} countries")


@app.command("levels")
def levels():
    """Show the administrative levels offered for download."""
    typer.echo(render_levels())


@app.command("version")
def version():
    """Display version information."""
    typer.echo(f"osmbound version: {__version__}")


if __name__ == "__main__":
    app()
