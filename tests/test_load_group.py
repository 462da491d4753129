"""Tests for LoadGroup: k/N progress, one-shot completion and the failure path."""

import logging

import pytest

from core.errors import AssetLoadFailure, OverCompletion
from loading.asset_handle import AssetHandle
from loading.load_group import LoadGroup


class Recorder:
    def __init__(self):
        self.progress = []
        self.completed = []
        self.failed = []

    def callbacks(self):
        return {
            "on_progress": lambda f, ident: self.progress.append((f, ident)),
            "on_complete": self.completed.append,
            "on_failed": self.failed.append,
        }


@pytest.fixture
def rec():
    return Recorder()


FACES = [f"flower-{i}.jpg" for i in range(1, 7)]


class TestCompletion:
    def test_six_textures_half_way(self, fake_loader, rec):
        """Three of six faces loaded: half progress and nothing in the scene yet."""
        group = LoadGroup.request("die-0", fake_loader, FACES, **rec.callbacks())
        for handle in group.handles[:3]:
            handle.resolve(1)

        assert group.progress == 0.5
        assert rec.progress[-1] == (0.5, "flower-3.jpg")
        assert rec.completed == []

        for handle in group.handles[3:]:
            handle.resolve(1)
        assert rec.completed == [group]
        assert [f for f, _ in rec.progress] == pytest.approx([1 / 6 * k for k in range(1, 7)])

    def test_completion_fires_exactly_once(self, rec):
        group = LoadGroup("g", 2, **rec.callbacks())
        group.report_one("a")
        group.report_one("b")
        with pytest.raises(OverCompletion):
            group.report_one("c")
        assert len(rec.completed) == 1
        assert group.completed == 2

    def test_progress_is_monotonic_in_any_arrival_order(self, fake_loader, rec):
        group = LoadGroup.request("g", fake_loader, FACES, **rec.callbacks())
        for i in (4, 0, 5, 2, 1, 3):
            group.handles[i].resolve(i)
        fractions = [f for f, _ in rec.progress]
        assert fractions == sorted(fractions)
        # Payload order follows the request, not the arrival
        assert group.payloads() == [0, 1, 2, 3, 4, 5]

    def test_zero_total_completes_immediately(self, rec):
        group = LoadGroup("empty", 0, **rec.callbacks())
        assert group.is_complete
        assert rec.progress == [(1.0, None)]
        assert rec.completed == [group]

    def test_request_with_no_identifiers(self, fake_loader, rec):
        group = LoadGroup.request("empty", fake_loader, [], **rec.callbacks())
        assert rec.completed == [group]
        assert fake_loader.requested == []

    def test_already_loaded_handle_counts_when_tracked(self, rec):
        group = LoadGroup("g", 1, **rec.callbacks())
        handle = AssetHandle("cached.png")
        handle.resolve("tex")
        group.track(handle)
        assert rec.completed == [group]

    def test_cannot_track_more_than_total(self):
        group = LoadGroup("g", 1)
        group.track(AssetHandle("a"))
        with pytest.raises(ValueError):
            group.track(AssetHandle("b"))


class TestFailure:
    def test_one_failure_fails_the_group(self, fake_loader, rec):
        group = LoadGroup.request("die-1", fake_loader, FACES, **rec.callbacks())
        group.handles[0].resolve(1)
        err = FileNotFoundError("flower-2.jpg")
        group.handles[1].fail(err)

        assert group.is_failed
        assert len(rec.failed) == 1
        failure = rec.failed[0]
        assert isinstance(failure, AssetLoadFailure)
        assert failure.identifier == "flower-2.jpg"
        assert failure.cause is err

        # The rest still arrive but the group stays failed and never completes
        for handle in group.handles[2:]:
            handle.resolve(1)
        assert rec.completed == []
        assert len(rec.failed) == 1
        assert not group.is_complete

    def test_second_failure_is_ignored(self, fake_loader, rec):
        group = LoadGroup.request("g", fake_loader, ["a", "b"], **rec.callbacks())
        group.handles[0].fail(IOError("a"))
        group.handles[1].fail(IOError("b"))
        assert [f.identifier for f in rec.failed] == ["a"]

    def test_failure_without_callback_is_logged(self, fake_loader, caplog):
        group = LoadGroup.request("g", fake_loader, ["a"])
        with caplog.at_level(logging.ERROR, logger="loading.load_group"):
            group.handles[0].fail(IOError("gone"))
        assert group.is_failed
        assert "gone" in caplog.text

    def test_failure_after_completion_is_over_completion(self, rec):
        group = LoadGroup("g", 1, **rec.callbacks())
        group.report_one("a")
        with pytest.raises(OverCompletion):
            group.fail(AssetLoadFailure("a"))
        assert rec.failed == []
