"""
Consolidated Utilities

Sections:
- Logging setup
- Filesystem and path operations
- Display formatting
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

# =============================================================================
# Logging Setup
# =============================================================================

def setup_logging(
    verbose: bool,
    enable_file_logging: bool = False,
    console: bool = True,
    log_name: Optional[str] = None
) -> Optional[Path]:
    """
    Configure logging with optional timestamped file output.

    Args:
        verbose: Enable debug-level logging if True
        enable_file_logging: Create a timestamped log file under logs/
        console: Log to stdout; the interactive menu disables this
        log_name: Prefix for the log file name

    Returns:
        Path of the log file, if one was created
    """
    level = logging.DEBUG if verbose else logging.INFO
    handlers: list[logging.Handler] = []
    log_file = None

    if console:
        handlers.append(logging.StreamHandler(sys.stdout))

    if enable_file_logging:
        logs_dir = Path("logs")
        logs_dir.mkdir(exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = logs_dir / f"{log_name or 'osmbound'}_{timestamp}.log"
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
        force=True
    )
    return log_file


# =============================================================================
# Filesystem and Path Operations
# =============================================================================

def ensure_directory(path: Path) -> Path:
    """
    Create a directory and its parents if needed.

    Args:
        path: Directory path

    Returns:
        The same path
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def boundary_path(output_root: Path, country_code: str, admin_level: int, filename: str) -> Path:
    """Deterministic location of a boundary document."""
    return Path(output_root) / country_code / str(admin_level) / filename


# =============================================================================
# Display Formatting
# =============================================================================

def format_file_size(size_bytes: int) -> str:
    """Format a byte count using 1024-based units with two decimals."""
    kb = 1024
    mb = kb * 1024
    gb = mb * 1024

    if size_bytes >= gb:
        return f"{size_bytes / gb:.2f} GB"
    if size_bytes >= mb:
        return f"{size_bytes / mb:.2f} MB"
    if size_bytes >= kb:
        return f"{size_bytes / kb:.2f} KB"
    return f"{size_bytes} B"
