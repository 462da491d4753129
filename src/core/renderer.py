"""Fixed-function OpenGL renderer for the scene graph.

Implements the scheduler's renderer collaborator: ``draw_frame`` clears to
the scene background, loads the camera projection, sets up fog and lights,
then walks the node tree drawing each node's mesh. Uses the legacy pipeline
with client-side numpy vertex arrays, so no shaders are involved.
"""

from __future__ import annotations

import math

import numpy as np
from OpenGL.GL import (
    glBindTexture,
    glBlendFunc,
    glClear,
    glClearColor,
    glColor4f,
    glDepthMask,
    glDisable,
    glDisableClientState,
    glDrawArrays,
    glEnable,
    glEnableClientState,
    glFogf,
    glFogfv,
    glFogi,
    glLightfv,
    glLoadIdentity,
    glLoadMatrixd,
    glMatrixMode,
    glMultMatrixd,
    glNormalPointer,
    glPopMatrix,
    glPushMatrix,
    glRotatef,
    glScalef,
    glTexCoordPointer,
    glTranslatef,
    glVertexPointer,
    GL_AMBIENT,
    GL_BLEND,
    GL_COLOR_BUFFER_BIT,
    GL_COLOR_MATERIAL,
    GL_DEPTH_BUFFER_BIT,
    GL_DIFFUSE,
    GL_FLOAT,
    GL_FOG,
    GL_FOG_COLOR,
    GL_FOG_END,
    GL_FOG_MODE,
    GL_FOG_START,
    GL_LIGHT0,
    GL_LIGHTING,
    GL_LINEAR,
    GL_MODELVIEW,
    GL_NORMAL_ARRAY,
    GL_ONE_MINUS_SRC_ALPHA,
    GL_POSITION,
    GL_PROJECTION,
    GL_QUADS,
    GL_SRC_ALPHA,
    GL_TEXTURE_2D,
    GL_TEXTURE_COORD_ARRAY,
    GL_VERTEX_ARRAY,
)
from OpenGL.GLU import gluNewQuadric, gluQuadricTexture, gluSphere

from binding.color import to_gl
from core.mesh import BoxMesh, PlaneMesh, SphereMesh
from core.object3d import Object3D
from core.scene import Scene


class GLRenderer:  # pragma: no cover - visual
    def __init__(self, scene: Scene):
        self.scene = scene
        self._quadric = None

    # ------------------------------------------------------------------
    def draw_frame(self, scene_root: Object3D, camera) -> None:
        glClearColor(*to_gl(self.scene.background))
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)

        glMatrixMode(GL_PROJECTION)
        # numpy is row-major; GL wants column-major
        glLoadMatrixd(np.ascontiguousarray(camera.projection_matrix.T))
        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()
        glMultMatrixd(np.ascontiguousarray(camera.view_matrix().T))

        self._setup_fog()
        self._setup_lights()

        opaque, transparent = [], []
        self._collect(scene_root, opaque, transparent)
        for chain in opaque:
            self._draw_chain(chain)
        # Blended meshes last, without depth writes, so they don't hide each other
        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)
        glDepthMask(False)
        for chain in transparent:
            self._draw_chain(chain)
        glDepthMask(True)
        glDisable(GL_BLEND)

    # ------------------------------------------------------------------
    def _setup_fog(self):
        fog = self.scene.fog
        if fog is None:
            glDisable(GL_FOG)
            return
        glEnable(GL_FOG)
        glFogi(GL_FOG_MODE, GL_LINEAR)
        glFogf(GL_FOG_START, fog.near)
        glFogf(GL_FOG_END, fog.far)
        glFogfv(GL_FOG_COLOR, to_gl(fog.color))

    def _setup_lights(self):
        if not self.scene.lights:
            glDisable(GL_LIGHTING)
            return
        light = self.scene.lights[0]
        glEnable(GL_LIGHTING)
        glEnable(GL_LIGHT0)
        glEnable(GL_COLOR_MATERIAL)
        x, y, z = light.position
        c, s = math.cos(light.yaw), math.sin(light.yaw)
        # w = 0 makes it a directional light
        glLightfv(GL_LIGHT0, GL_POSITION, (x * c + z * s, y, -x * s + z * c, 0.0))
        k = min(1.0, light.intensity * 0.5)
        r, g, b, _ = to_gl(light.color)
        glLightfv(GL_LIGHT0, GL_DIFFUSE, (r * k, g * k, b * k, 1.0))
        glLightfv(GL_LIGHT0, GL_AMBIENT, (0.15, 0.15, 0.15, 1.0))

    def _collect(self, node, opaque, transparent, chain=()):
        if not node.visible:
            return
        chain = chain + (node,)
        if node.mesh is not None:
            (transparent if node.opacity < 1.0 else opaque).append(chain)
        for child in node.children:
            self._collect(child, opaque, transparent, chain)

    def _draw_chain(self, chain):
        glPushMatrix()
        for node in chain:
            glTranslatef(node.position.x, node.position.y, node.position.z)
            glRotatef(math.degrees(node.rotation.x), 1, 0, 0)
            glRotatef(math.degrees(node.rotation.y), 0, 1, 0)
            glRotatef(math.degrees(node.rotation.z), 0, 0, 1)
            glScalef(node.scale.x, node.scale.y, node.scale.z)
        node = chain[-1]
        mesh = node.mesh
        r, g, b = mesh.color
        glColor4f(r, g, b, node.opacity)
        if isinstance(mesh, BoxMesh):
            self._draw_box(mesh)
        elif isinstance(mesh, PlaneMesh):
            self._draw_quads(mesh.vertices, mesh.normals, mesh.uvs, [(0, 4, mesh.texture)])
        elif isinstance(mesh, SphereMesh):
            self._draw_sphere(mesh)
        glPopMatrix()

    def _draw_box(self, mesh: BoxMesh):
        runs = [(face * 4, 4, mesh.face_texture(face)) for face in range(6)]
        self._draw_quads(mesh.vertices, mesh.normals, mesh.uvs, runs)

    def _draw_quads(self, vertices, normals, uvs, runs):
        glEnableClientState(GL_VERTEX_ARRAY)
        glEnableClientState(GL_NORMAL_ARRAY)
        glEnableClientState(GL_TEXTURE_COORD_ARRAY)
        glVertexPointer(3, GL_FLOAT, 0, vertices)
        glNormalPointer(GL_FLOAT, 0, normals)
        glTexCoordPointer(2, GL_FLOAT, 0, uvs)
        for first, count, texture in runs:
            if texture is not None:
                glEnable(GL_TEXTURE_2D)
                glBindTexture(GL_TEXTURE_2D, texture)
            else:
                glDisable(GL_TEXTURE_2D)
            glDrawArrays(GL_QUADS, first, count)
        glDisable(GL_TEXTURE_2D)
        glDisableClientState(GL_TEXTURE_COORD_ARRAY)
        glDisableClientState(GL_NORMAL_ARRAY)
        glDisableClientState(GL_VERTEX_ARRAY)

    def _draw_sphere(self, mesh: SphereMesh):
        if self._quadric is None:
            self._quadric = gluNewQuadric()
            gluQuadricTexture(self._quadric, True)
        if mesh.texture is not None:
            glEnable(GL_TEXTURE_2D)
            glBindTexture(GL_TEXTURE_2D, mesh.texture)
        gluSphere(self._quadric, mesh.radius, mesh.slices, mesh.stacks)
        glDisable(GL_TEXTURE_2D)
