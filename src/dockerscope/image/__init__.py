"""Image model, layer discovery and repository mapping."""

from .discovery import discover_layers, iter_layer_config_paths, parse_layer_config
from .image import Image, open_image

__all__ = [
    "Image",
    "discover_layers",
    "iter_layer_config_paths",
    "open_image",
    "parse_layer_config",
]
