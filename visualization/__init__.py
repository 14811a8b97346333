"""Visualization utilities for tile assembly."""
from .display import (
    display_assembly,
    display_tiles,
    save_assembly_figure
)
