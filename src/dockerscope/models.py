"""Data models for image layers."""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List

from .exceptions import NoLayersError


@dataclass(frozen=True)
class Layer:
    """One filesystem layer of an image."""

    id: str  # Name of the directory holding the layer config
    created: datetime


def sort_by_recency(layers: Iterable[Layer]) -> List[Layer]:
    """Return layers ordered most recently created first.

    Layers with equal timestamps keep their relative input order.
    """
    return sorted(layers, key=lambda layer: layer.created, reverse=True)


def latest_layer(layers: Iterable[Layer], source: str = "<layers>") -> Layer:
    """Return the most recently created layer.

    Args:
        layers: Layers to choose from
        source: Path reported in the error when there are no layers

    Raises:
        NoLayersError: If layers is empty
    """
    ordered = sort_by_recency(layers)
    if not ordered:
        raise NoLayersError("latest layer", source, "image has no layers")
    return ordered[0]
