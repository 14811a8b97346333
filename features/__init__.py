"""Tile features: edge codes and the tile model."""
from .edges import side_codes, reverse_code
from .tiles import Tile, create_tiles
