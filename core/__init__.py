"""Grid, parsing and image utilities."""
from .grid import Grid
from .parsing import ParseError, parse_tile_blocks, parse_pattern
from .image_utils import canvas_to_image, save_image
