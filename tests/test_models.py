"""Tests for the layer model and recency ordering."""

from datetime import datetime, timezone

import pytest

from dockerscope.exceptions import NoLayersError
from dockerscope.models import Layer, latest_layer, sort_by_recency


def make_layer(layer_id, year, month=1):
    return Layer(id=layer_id, created=datetime(year, month, 1, tzinfo=timezone.utc))


def test_sort_by_recency_most_recent_first():
    """Test layers are ordered newest first."""
    layers = [make_layer("a", 2019), make_layer("c", 2021), make_layer("b", 2020)]

    ordered = sort_by_recency(layers)

    assert [layer.id for layer in ordered] == ["c", "b", "a"]
    # Input is left untouched
    assert [layer.id for layer in layers] == ["a", "c", "b"]


def test_sort_by_recency_keeps_input_order_on_ties():
    """Test equal timestamps keep their relative order."""
    layers = [make_layer("first", 2020), make_layer("second", 2020)]

    assert [layer.id for layer in sort_by_recency(layers)] == ["first", "second"]


def test_latest_layer():
    """Test the newest layer is selected."""
    layers = [make_layer("A", 2020, 1), make_layer("B", 2020, 6)]
    assert latest_layer(layers).id == "B"


def test_latest_layer_empty():
    """Test an empty layer set has no latest layer."""
    with pytest.raises(NoLayersError) as exc_info:
        latest_layer([], "image.tar")

    assert exc_info.value.path == "image.tar"


def test_layer_is_immutable():
    """Test layers cannot be modified after creation."""
    layer = make_layer("a", 2020)
    with pytest.raises(AttributeError):
        layer.id = "b"
