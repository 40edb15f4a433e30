from pathlib import Path


def get_resource_path(relative_path: str) -> Path:
    """
    Get absolute path to a resource shipped with the package.

    Args:
        relative_path: Relative path from the package root (e.g., "resources/templates")

    Returns:
        Absolute Path object
    """
    # This file is in ptracker/utils.py, so the package root is its directory
    base_path = Path(__file__).parent.absolute()
    return base_path / relative_path


def read_help_text() -> str:
    """The usage text shown by 'help' and on unknown input"""
    return get_resource_path("resources/templates/help.txt").read_text(encoding="utf-8").rstrip("\n")
