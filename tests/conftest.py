import pytest
from unittest.mock import MagicMock

from camera import PerspectiveCamera
from core.object3d import Object3D
from core.scheduler import FrameScheduler
from loading.asset_handle import AssetHandle


class FakeLoader:
    """Loader that hands out pending handles; the test decides when they finish."""

    def __init__(self):
        self.handles = {}
        self.requested = []

    def load(self, identifier):
        handle = AssetHandle(identifier)
        self.requested.append(identifier)
        self.handles.setdefault(identifier, []).append(handle)
        return handle

    def pending(self):
        return [h for hs in self.handles.values() for h in hs if h.is_pending]

    def resolve_all(self, payload=lambda h: f"tex:{h.identifier}"):
        for handle in self.pending():
            handle.resolve(payload(handle))


@pytest.fixture
def fake_loader():
    return FakeLoader()


@pytest.fixture
def renderer():
    """Renderer collaborator; only draw_frame calls are inspected."""
    return MagicMock()


@pytest.fixture
def scene_root():
    return Object3D("root")


@pytest.fixture
def camera():
    return PerspectiveCamera(105, 2, 0.1, 5, position=(0, 0, 2))


@pytest.fixture
def scheduler(renderer, scene_root, camera):
    return FrameScheduler(renderer, scene_root, camera, time_scale=1.0)
