"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and global constants.

Why is this file needed?
------------------------
1. Abstraction: The year range, animation cadence and chart geometry live in
   one place instead of being scattered through the views.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find the bundled dataset when the app is frozen into an .exe.

Exports:
    ASSETS_PATH (str): Absolute path to the assets directory.
    DATA_PATH (str): Absolute path to the default dataset.
    ChartSettings: Geometry of the drawing surface.
"""
import sys
import os
from dataclasses import dataclass
from pathlib import Path


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # config.py is in src/animatedscatter/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


# Global Constants
ASSETS_PATH: str = get_resource_path("assets")
DATA_PATH: str = os.path.join(ASSETS_PATH, "data.csv")

MIN_YEAR: int = 1950
MAX_YEAR: int = 2015

# Milliseconds between two years. Also the duration of a position transition,
# so one interpolation completes before the next tick.
ANIMATION_INTERVAL: int = 750

# Column names of the tabular file -> Record fields
COLUMNS: dict[str, str] = {
    "entity_id": "country",
    "year": "year",
    "indicator_x": "total_fertility",
    "indicator_y": "life_expectancy",
    "size": "population",
    "category": "continent",
}


@dataclass(frozen=True)
class ChartSettings:
    """Outer size of the drawing surface (px) and the margins kept for the axes."""
    width: int = 600
    height: int = 400
    margin_top: int = 15
    margin_right: int = 15
    margin_bottom: int = 30
    margin_left: int = 30
    radius_max: float = 60.0
    transition_ms: int = ANIMATION_INTERVAL

    @property
    def inner_width(self) -> int:
        return self.width - self.margin_left - self.margin_right

    @property
    def inner_height(self) -> int:
        return self.height - self.margin_top - self.margin_bottom


DEFAULT_CHART = ChartSettings()
