"""
Interactive flow as explicit state machines.

FetchWizard drives select-country -> select-level -> confirm -> fetching -> done,
with cancellation possible from every selection step. Input arrives as Key
events and search strings, so the flow runs without a terminal; the CLI only
renders the current state and feeds input back in.
"""

import logging
from collections.abc import Callable
from typing import Optional

from .config.admin_levels import ADMIN_LEVELS, DEFAULT_ADMIN_LEVEL
from .config.countries import CountryCatalog, CountryInfo
from .domain.enums import Key, MenuAction, WizardState
from .types import FetchResult

logger = logging.getLogger(__name__)

MAX_DISPLAY = 15
CANCEL_TERMS = {"cancel", "quit"}


class ListCursor:
    """Selection index over a fixed-size list with a scrolling display window."""

    def __init__(self, size: int, index: int = 0):
        self.size = size
        self.index = max(0, min(index, size - 1)) if size else 0

    def up(self) -> None:
        if self.index > 0:
            self.index -= 1

    def down(self) -> None:
        if self.index < self.size - 1:
            self.index += 1

    def window(self, max_display: int = MAX_DISPLAY) -> tuple[int, int]:
        """
        Visible slice [start, end) keeping the cursor near the middle.

        Lists shorter than max_display are shown whole.
        """
        if self.size <= max_display:
            return 0, self.size

        start = self.index - max_display // 2 if self.index > max_display // 2 else 0
        end = start + max_display
        if end > self.size:
            end = self.size
            start = max(0, end - max_display)
        return start, end


class MainMenu:
    """Top-level menu: view, fetch or quit."""

    OPTIONS = [
        ("View Downloaded Boundaries", MenuAction.VIEW),
        ("Fetch New Boundary", MenuAction.FETCH),
        ("Quit", MenuAction.QUIT),
    ]

    def __init__(self):
        self.cursor = ListCursor(len(self.OPTIONS))

    @property
    def labels(self) -> list[str]:
        return [label for label, _ in self.OPTIONS]

    def press(self, key: Key) -> Optional[MenuAction]:
        """Apply a key; returns the chosen action once one is selected."""
        if key == Key.UP:
            self.cursor.up()
        elif key == Key.DOWN:
            self.cursor.down()
        elif key == Key.ENTER:
            return self.OPTIONS[self.cursor.index][1]
        elif key in (Key.ESCAPE, Key.QUIT):
            return MenuAction.QUIT
        return None


class FetchWizard:
    """
    State machine for choosing and downloading one boundary.

    States and transitions:
        SELECT_COUNTRY --search--> (match list) --ENTER--> SELECT_LEVEL
        SELECT_COUNTRY --'cancel'/ESC without list--> CANCELLED
        SELECT_LEVEL --ENTER--> CONFIRM, --ESC/q--> CANCELLED
        CONFIRM --ENTER on yes--> FETCHING, --ENTER on no/ESC/q--> CANCELLED
        FETCHING --complete/fail--> DONE
    """

    CONFIRM_OPTIONS = ["Yes, proceed", "No, cancel"]

    def __init__(
        self,
        catalog: CountryCatalog,
        exists: Optional[Callable[[str, int], bool]] = None,
        levels: Optional[dict[int, str]] = None,
        default_level: int = DEFAULT_ADMIN_LEVEL
    ):
        self.catalog = catalog
        self.exists = exists or (lambda code, level: False)
        self.levels = levels or ADMIN_LEVELS
        self.level_values = sorted(self.levels)
        default_index = self.level_values.index(default_level) if default_level in self.level_values else 0

        self.state = WizardState.SELECT_COUNTRY
        self.matches: list[CountryInfo] = []
        self.country_cursor: Optional[ListCursor] = None
        self.level_cursor = ListCursor(len(self.level_values), default_index)
        self.confirm_cursor = ListCursor(len(self.CONFIRM_OPTIONS))

        self.country: Optional[CountryInfo] = None
        self.level: Optional[int] = None
        self.message: Optional[str] = None
        self.cancel_reason: Optional[str] = None
        self.result: Optional[FetchResult] = None
        self.error: Optional[Exception] = None

        self._transitions: dict[tuple[WizardState, Key], Callable[[], None]] = {
            (WizardState.SELECT_COUNTRY, Key.UP): self._country_up,
            (WizardState.SELECT_COUNTRY, Key.DOWN): self._country_down,
            (WizardState.SELECT_COUNTRY, Key.ENTER): self._select_country,
            (WizardState.SELECT_COUNTRY, Key.ESCAPE): self._leave_country_list,
            (WizardState.SELECT_COUNTRY, Key.QUIT): self._leave_country_list,
            (WizardState.SELECT_LEVEL, Key.UP): self.level_cursor.up,
            (WizardState.SELECT_LEVEL, Key.DOWN): self.level_cursor.down,
            (WizardState.SELECT_LEVEL, Key.ENTER): self._select_level,
            (WizardState.SELECT_LEVEL, Key.ESCAPE): self._cancel_level,
            (WizardState.SELECT_LEVEL, Key.QUIT): self._cancel_level,
            (WizardState.CONFIRM, Key.UP): self.confirm_cursor.up,
            (WizardState.CONFIRM, Key.DOWN): self.confirm_cursor.down,
            (WizardState.CONFIRM, Key.ENTER): self._confirm,
            (WizardState.CONFIRM, Key.ESCAPE): self._cancel_download,
            (WizardState.CONFIRM, Key.QUIT): self._cancel_download,
        }

    # -- queries ---------------------------------------------------------

    @property
    def finished(self) -> bool:
        return self.state in (WizardState.DONE, WizardState.CANCELLED)

    @property
    def awaiting_search(self) -> bool:
        """True while the country step needs a search term rather than keys."""
        return self.state == WizardState.SELECT_COUNTRY and self.country_cursor is None

    @property
    def highlighted_country(self) -> Optional[CountryInfo]:
        if self.country_cursor is None or not self.matches:
            return None
        return self.matches[self.country_cursor.index]

    @property
    def highlighted_level(self) -> int:
        return self.level_values[self.level_cursor.index]

    @property
    def overwrite(self) -> bool:
        """Whether the selected country/level already has a downloaded file."""
        if self.country is None or self.level is None:
            return False
        return self.exists(self.country.code, self.level)

    # -- input -----------------------------------------------------------

    def submit_search(self, term: str) -> WizardState:
        """Filter the catalog by label; 'cancel' or 'quit' abandons the wizard."""
        if not self.awaiting_search:
            return self.state

        term = term.strip()
        self.message = None

        if term in CANCEL_TERMS:
            self._cancel("Country selection cancelled")
        elif not term:
            self.message = "Please enter a search term."
        else:
            self.matches = self.catalog.search(term)
            if not self.matches:
                self.message = "No countries found. Try again."
            else:
                self.country_cursor = ListCursor(len(self.matches))

        return self.state

    def press(self, key: Key) -> WizardState:
        """Apply a key event; keys without a transition in the current state are ignored."""
        handler = self._transitions.get((self.state, key))
        if handler is not None:
            handler()
        return self.state

    def complete(self, result: FetchResult) -> WizardState:
        if self.state == WizardState.FETCHING:
            self.result = result
            self.state = WizardState.DONE
        return self.state

    def fail(self, error: Exception) -> WizardState:
        if self.state == WizardState.FETCHING:
            self.error = error
            self.state = WizardState.DONE
        return self.state

    # -- transitions -----------------------------------------------------

    def _cancel(self, reason: str) -> None:
        self.cancel_reason = reason
        self.state = WizardState.CANCELLED
        logger.debug(f"Wizard cancelled: {reason}")

    def _country_up(self) -> None:
        if self.country_cursor is not None:
            self.country_cursor.up()

    def _country_down(self) -> None:
        if self.country_cursor is not None:
            self.country_cursor.down()

    def _select_country(self) -> None:
        country = self.highlighted_country
        if country is None:
            return
        self.country = country
        self.state = WizardState.SELECT_LEVEL

    def _leave_country_list(self) -> None:
        # Back to the search prompt when a list is shown, otherwise abandon
        if self.country_cursor is None:
            self._cancel("Country selection cancelled")
            return
        self.matches = []
        self.country_cursor = None

    def _select_level(self) -> None:
        self.level = self.highlighted_level
        self.state = WizardState.CONFIRM

    def _cancel_level(self) -> None:
        self._cancel("Admin level selection cancelled")

    def _confirm(self) -> None:
        if self.confirm_cursor.index == 0:
            self.state = WizardState.FETCHING
        else:
            self._cancel_download()

    def _cancel_download(self) -> None:
        self._cancel("Download cancelled")
