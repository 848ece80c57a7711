"""
Pipeline Enumerations

Core enums for the upstream element model, the interactive wizard and the main menu.
"""

from enum import Enum


class ElementType(str, Enum):
    """Overpass element kinds."""
    NODE = "node"
    WAY = "way"
    RELATION = "relation"       # Only kind consumed by the assembler


class MemberRole(str, Enum):
    """Relation member roles relevant to boundary assembly."""
    OUTER = "outer"             # Exterior ring of the boundary
    INNER = "inner"             # Hole, not assembled


class MenuAction(str, Enum):
    """Main menu actions."""
    VIEW = "view"
    FETCH = "fetch"
    QUIT = "quit"


class WizardState(str, Enum):
    """States of the fetch wizard."""
    SELECT_COUNTRY = "select_country"
    SELECT_LEVEL = "select_level"
    CONFIRM = "confirm"
    FETCHING = "fetching"
    DONE = "done"
    CANCELLED = "cancelled"


class Key(str, Enum):
    """Terminal-independent key events fed to the wizard and menus."""
    UP = "up"
    DOWN = "down"
    ENTER = "enter"
    ESCAPE = "escape"
    QUIT = "quit"               # 'q' / 'Q'
    OTHER = "other"
