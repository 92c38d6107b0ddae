"""Shared test fixtures."""

from unittest.mock import MagicMock

import pytest

from hdfs_retention.ports.delete import DeletePort
from hdfs_retention.ports.listing import ListingPort


@pytest.fixture
def mock_listing() -> MagicMock:
    """Mock listing port with an empty listing."""
    mock = MagicMock(spec=ListingPort)
    mock.list_files.return_value = iter(["Found 0 items"])
    return mock


@pytest.fixture
def mock_deleter() -> MagicMock:
    """Mock delete port building hadoop-like commands."""
    mock = MagicMock(spec=DeletePort)

    def build_command(paths, skip_trash=False):
        return ["hadoop", "fs", "-rm", *(["-skipTrash"] if skip_trash else []), *paths]

    mock.build_command.side_effect = build_command
    return mock
