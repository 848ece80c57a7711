"""
Text rendering for the interactive screens and the inventory table.

Every function returns a string; the CLI decides where it goes.
"""

from .config.admin_levels import ADMIN_LEVELS
from .domain.models import DownloadedBoundary
from .inventory import group_by_country
from .utils import format_file_size
from .wizard import FetchWizard, MainMenu

BOX_WIDTH = 38
NAV_HINT = "Use ↑/↓ arrow keys to navigate"
RULE = "─" * 37

INVENTORY_HEADERS = ("Country", "Code", "Level", "Features", "Size", "Downloaded")


def banner(title: str) -> str:
    return "\n".join([
        "╔" + "═" * BOX_WIDTH + "╗",
        "║" + title.center(BOX_WIDTH) + "║",
        "╚" + "═" * BOX_WIDTH + "╝",
        "",
    ])


def _marked(lines: list[str], selected: int, arrow: str = "→ ", blank: str = "  ") -> list[str]:
    return [f"{arrow if i == selected else blank}{line}" for i, line in enumerate(lines)]


def render_main_menu(menu: MainMenu) -> str:
    lines = [
        "Boundary Downloader - Main Menu",
        f"{NAV_HINT}, Enter to select",
        "=" * 40,
    ]
    lines.extend(_marked(menu.labels, menu.cursor.index))
    return "\n".join(lines)


def render_search_prompt(wizard: FetchWizard) -> str:
    lines = [banner("Fetch New Boundary - Step 1 of 3")]
    if wizard.message:
        lines.append(f"{wizard.message}\n")
    lines.extend(["Search for a country", RULE])
    return "\n".join(lines)


def render_country_list(wizard: FetchWizard) -> str:
    cursor = wizard.country_cursor
    count = len(wizard.matches)
    lines = [
        banner("Select Country"),
        f"Found {count} matching {'country' if count == 1 else 'countries'}",
        NAV_HINT,
        "Press Enter to select, ESC to go back",
        RULE,
        "",
    ]

    start, end = cursor.window()
    if start > 0:
        lines.append(f"    ... ({start} more above)")
    for i in range(start, end):
        prefix = "  → " if i == cursor.index else "    "
        lines.append(f"{prefix}{wizard.matches[i].display}")
    if end < count:
        lines.append(f"    ... ({count - end} more below)")

    return "\n".join(lines)


def render_level_select(wizard: FetchWizard) -> str:
    lines = [
        banner("Fetch New Boundary - Step 2 of 3"),
        f"Selected Country: {wizard.country.display}",
        "",
        NAV_HINT,
        "Press Enter to select, ESC to cancel",
        RULE,
        "",
    ]
    for i, level in enumerate(wizard.level_values):
        prefix = "  → " if i == wizard.level_cursor.index else "    "
        lines.append(f"{prefix}Level {level}: {wizard.levels[level]}")
    return "\n".join(lines)


def render_confirm(wizard: FetchWizard) -> str:
    lines = [
        banner("Fetch New Boundary - Step 3 of 3"),
        "Summary:",
        RULE,
        f"  Country:     {wizard.country.label}",
        f"  Code:        {wizard.country.code}",
        f"  Admin Level: {wizard.level}",
        "",
    ]
    if wizard.overwrite:
        lines.extend(["Warning: This boundary already exists and will be overwritten!", ""])

    lines.extend(["Do you want to proceed with the download?", "", f"{NAV_HINT}, Enter to select", ""])
    marks = ["✓ ", "✗ "]
    options = [marks[i] + option for i, option in enumerate(wizard.CONFIRM_OPTIONS)]
    lines.extend(_marked(options, wizard.confirm_cursor.index))
    return "\n".join(lines)


def render_fetching(wizard: FetchWizard) -> str:
    return "\n".join([
        banner("Downloading Boundary"),
        f"Country: {wizard.country.display}",
        f"Level:   {wizard.level}",
        "",
        "Please wait...",
        "",
    ])


def remark_warning(remark: str) -> str:
    return f"Warning: Overpass reported \"{remark}\"; the result may be incomplete."


def render_outcome(wizard: FetchWizard) -> str:
    if wizard.cancel_reason:
        return "\n".join([banner("Cancelled"), wizard.cancel_reason])

    if wizard.error is not None:
        return f"Error: {wizard.error}"

    result = wizard.result
    lines = [
        f"Received {result.elements_received} boundary elements.",
        f"Exported {result.features_written} features to {result.output_path}",
        "",
    ]
    if result.remark:
        lines.extend([remark_warning(result.remark), ""])
    lines.append("Success! Boundary downloaded successfully.")
    return "\n".join(lines)


def render_inventory(records: list[DownloadedBoundary]) -> str:
    """
    Table of downloaded boundaries grouped by country.

    The country label and code are printed on each group's first row only.
    """
    if not records:
        return "No downloaded boundaries found."

    groups = []
    for country_code, country_label, entries in group_by_country(records):
        rows = []
        for i, entry in enumerate(entries):
            rows.append((
                country_label if i == 0 else "",
                country_code if i == 0 else "",
                str(entry.admin_level),
                f"{entry.features:,}",
                format_file_size(entry.file_size),
                entry.modified.isoformat(),
            ))
        groups.append(rows)

    widths = [len(h) for h in INVENTORY_HEADERS]
    for rows in groups:
        for row in rows:
            widths = [max(w, len(cell)) for w, cell in zip(widths, row)]

    def fmt(row) -> str:
        return "| " + " | ".join(cell.ljust(w) for cell, w in zip(row, widths)) + " |"

    separator = "+" + "+".join("-" * (w + 2) for w in widths) + "+"
    lines = [separator, fmt(INVENTORY_HEADERS), separator]
    for rows in groups:
        lines.extend(fmt(row) for row in rows)
        lines.append(separator)

    total_features = sum(r.features for r in records)
    total_size = sum(r.file_size for r in records)
    lines.append(
        f"Total: {len(records)} boundaries, {total_features:,} features, {format_file_size(total_size)}"
    )
    return "\n".join(lines)


def render_levels() -> str:
    return "\n".join(f"Level {level:>2}: {label}" for level, label in ADMIN_LEVELS.items())
