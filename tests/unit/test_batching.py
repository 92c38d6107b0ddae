"""Unit tests for batch planning."""

import math

import pytest

from hdfs_retention.domain.batching import (
    Batch,
    BatchPlanner,
    check_command_length,
    system_arg_max,
)
from hdfs_retention.domain.errors import CommandTooLongError


def rm_command(paths) -> list[str]:
    return ["hadoop", "fs", "-rm", *paths]


class TestImmediateMode:
    """Tests for batch sizes below 2."""

    @pytest.mark.parametrize("batch_size", [0, 1])
    def test_each_path_released_immediately(self, batch_size: int) -> None:
        planner = BatchPlanner(batch_size, rm_command, arg_max=1000)
        assert not planner.grouped

        first = planner.add("/tmp/a")
        second = planner.add("/tmp/b")

        assert first == Batch(paths=("/tmp/a",), first=1, last=1)
        assert second == Batch(paths=("/tmp/b",), first=2, last=2)
        assert planner.pending == 0
        assert list(planner.drain()) == []


class TestGroupedMode:
    """Tests for batch sizes of 2 and above."""

    def test_nothing_released_while_adding(self) -> None:
        planner = BatchPlanner(50, rm_command, arg_max=100_000)
        for i in range(120):
            assert planner.add(f"/tmp/f{i}") is None
        assert planner.pending == 120

    def test_120_paths_in_batches_of_50(self) -> None:
        planner = BatchPlanner(50, rm_command, arg_max=100_000)
        for i in range(120):
            planner.add(f"/tmp/f{i}")

        batches = list(planner.drain())

        assert [len(b) for b in batches] == [50, 50, 20]
        assert [(b.first, b.last) for b in batches] == [(1, 50), (51, 100), (101, 120)]
        assert planner.pending == 0

    @pytest.mark.parametrize(("count", "size"), [(1, 2), (2, 2), (7, 3), (100, 100), (101, 100)])
    def test_covers_all_paths_in_order(self, count: int, size: int) -> None:
        paths = [f"/tmp/f{i}" for i in range(count)]
        planner = BatchPlanner(size, rm_command, arg_max=100_000)
        for path in paths:
            planner.add(path)

        batches = list(planner.drain())

        assert len(batches) == math.ceil(count / size)
        assert all(len(b) <= size for b in batches)
        assert [p for b in batches for p in b.paths] == paths

    def test_drain_empty(self) -> None:
        planner = BatchPlanner(10, rm_command, arg_max=1000)
        assert list(planner.drain()) == []

    def test_oversized_batch_aborts(self) -> None:
        planner = BatchPlanner(2, rm_command, arg_max=40)
        planner.add("/tmp/a")
        planner.add("/tmp/b")
        planner.add("/tmp/" + "x" * 60)

        batches = planner.drain()
        assert next(batches).paths == ("/tmp/a", "/tmp/b")
        with pytest.raises(CommandTooLongError, match="ARG_MAX"):
            next(batches)


class TestCheckCommandLength:
    """Tests for check_command_length."""

    def test_within_limit(self) -> None:
        check_command_length(["hadoop", "fs", "-rm", "/tmp/a"], arg_max=100)

    def test_exactly_at_limit(self) -> None:
        argv = ["hadoop", "fs", "-rm", "/tmp/a"]
        check_command_length(argv, arg_max=len("hadoop fs -rm /tmp/a"))

    def test_quoting_counts(self) -> None:
        argv = ["hadoop", "fs", "-rm", "/tmp/a b"]
        # quoted form is: hadoop fs -rm '/tmp/a b'
        with pytest.raises(CommandTooLongError) as excinfo:
            check_command_length(argv, arg_max=len("hadoop fs -rm /tmp/a b"))
        assert excinfo.value.command == "hadoop fs -rm '/tmp/a b'"
        assert "reduce the batch size" in str(excinfo.value).lower()


class TestSystemArgMax:
    """Tests for system_arg_max."""

    def test_positive(self) -> None:
        assert system_arg_max() > 0
