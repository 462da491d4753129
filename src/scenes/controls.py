"""Control-panel wiring for a demo scene.

Every editable scene value goes through a binding:

* camera near/far keep ``far - near >= 0.1`` inside [0.1, 200]; fov rides
  on the same binding so one ``on_change`` rebuilds the projection
* fog near/far keep ``near <= far`` inside [1, 20]
* fog colour is mirrored onto the background colour
* the light angle is shown in degrees and stored in radians
"""

from __future__ import annotations

from binding.bound_property import BoundProperty, ColorProperty, degrees_property
from binding.constrained_binding import Binding, OrderedPairBinding, finite_number
from binding.control_panel import ControlPanel
from camera import PerspectiveCamera
from config import (
    CAMERA_NEAR_FAR_DOMAIN,
    CAMERA_NEAR_FAR_SEPARATION,
    FOG_DOMAIN,
    FOG_SEPARATION,
)
from core.scene import Scene


def camera_binding(camera: PerspectiveCamera) -> OrderedPairBinding:
    binding = OrderedPairBinding(
        BoundProperty(camera, "near"),
        BoundProperty(camera, "far"),
        min_separation=CAMERA_NEAR_FAR_SEPARATION,
        domain=CAMERA_NEAR_FAR_DOMAIN,
        name="camera",
    )
    binding.add_property(BoundProperty(camera, "fov"), finite_number)
    return binding


def fog_binding(scene: Scene) -> OrderedPairBinding:
    binding = OrderedPairBinding(
        BoundProperty(scene.fog, "near"),
        BoundProperty(scene.fog, "far"),
        min_separation=FOG_SEPARATION,
        domain=FOG_DOMAIN,
        name="fog",
    )
    binding.add_property(ColorProperty(scene.fog, "color"))
    binding.add_mirror(
        "color",
        ColorProperty(scene, "background"),
        "fog fades to its colour, so the clear colour must match or the far plane shows",
    )
    return binding


def light_binding(scene: Scene) -> Binding:
    return Binding("light", [degrees_property(scene.lights[0], "yaw", "angle")])


def build_control_panel(scene: Scene, camera: PerspectiveCamera) -> ControlPanel:
    panel = ControlPanel("Scene")

    cam = camera_binding(camera)
    reproject = lambda state: camera.update_projection_matrix()  # noqa: E731
    low, high = CAMERA_NEAR_FAR_DOMAIN
    panel.add(cam, "fov", "fov", 1, 179, 1, on_change=reproject)
    panel.add(cam, "near", "near", low, high, 0.1, on_change=reproject)
    panel.add(cam, "far", "far", low, high, 0.1, on_change=reproject)

    if scene.fog is not None:
        fog = fog_binding(scene)
        low, high = FOG_DOMAIN
        panel.add(fog, "near", "fog near", low, high, 0.5)
        panel.add(fog, "far", "fog far", low, high, 0.5)
        panel.add_color(fog, "color", "fog color")

    if scene.lights:
        panel.add(light_binding(scene), "angle", "light angle", -180, 180, 5)

    return panel
