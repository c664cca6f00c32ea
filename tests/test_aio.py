"""Tests for the async image wrapper."""

import asyncio

import pytest

from dockerscope import AsyncImage
from dockerscope.exceptions import NotFoundError, SchemaError
from tests.helpers import create_image_tar, read_member_json


@pytest.mark.asyncio
async def test_async_set_name(two_layer_tar, config):
    """Test renaming through the async wrapper."""
    async with AsyncImage(two_layer_tar, config) as image:
        result = await image.set_name("myapp")
        assert await image.read_repositories() == {"myapp": {"latest": "B"}}
        layers = await image.read_layers()

    assert result == {"myapp": {"latest": "B"}}
    assert {layer.id for layer in layers} == {"A", "B"}
    assert read_member_json(two_layer_tar, "repositories") == result


@pytest.mark.asyncio
async def test_async_close_removes_working_copy(two_layer_tar, config):
    """Test leaving the context removes the working copy."""
    async with AsyncImage(two_layer_tar, config) as image:
        working_copy = image.image.working_copy
        assert working_copy.is_dir()

    assert not working_copy.exists()
    with pytest.raises(RuntimeError):
        image.image


@pytest.mark.asyncio
async def test_async_read_repositories_before_extraction(two_layer_tar, config):
    """Test an unextracted working copy has no mapping."""
    async with AsyncImage(two_layer_tar, config) as image:
        assert await image.read_repositories() == {}


@pytest.mark.asyncio
async def test_async_read_repositories_invalid(two_layer_tar, config):
    """Test a malformed mapping in the working copy is a schema error."""
    async with AsyncImage(two_layer_tar, config) as image:
        image.image.repositories_path.write_text('{"a": {}, "b": {}}')
        with pytest.raises(SchemaError):
            await image.read_repositories()


@pytest.mark.asyncio
async def test_async_open_missing(tmp_path, config):
    """Test opening a missing archive fails."""
    with pytest.raises(NotFoundError):
        async with AsyncImage(tmp_path / "missing.tar", config):
            pass


@pytest.mark.asyncio
async def test_async_renames_serialize(tmp_path, config):
    """Test concurrent renames of one archive from separate images all apply."""
    tar_path = create_image_tar(
        tmp_path / "image.tar",
        layers={"A": "2020-01-01T00:00:00Z"},
        repositories={"start": {"latest": "A", "v1": "A"}},
    )

    async def rename(name):
        async with AsyncImage(tar_path, config) as image:
            return await image.set_name(name)

    results = await asyncio.gather(*(rename(f"name{i}") for i in range(4)))

    assert all(list(result.values()) == [{"latest": "A", "v1": "A"}] for result in results)
    final = read_member_json(tar_path, "repositories")
    assert list(final) in [[f"name{i}"] for i in range(4)]
    assert list(final.values()) == [{"latest": "A", "v1": "A"}]
