"""Texture decoding and upload helpers for OpenGL.

Decoding (file -> RGBA bytes) touches no GL state and can run on loader
threads. Uploading must happen on the thread that owns the GL context.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pygame
from OpenGL.GL import (
    glGenTextures,
    glBindTexture,
    glTexImage2D,
    glTexParameteri,
    GL_TEXTURE_2D,
    GL_RGBA,
    GL_UNSIGNED_BYTE,
    GL_TEXTURE_MIN_FILTER,
    GL_TEXTURE_MAG_FILTER,
    GL_LINEAR,
    GL_NEAREST,
    GL_TEXTURE_WRAP_S,
    GL_TEXTURE_WRAP_T,
    GL_CLAMP_TO_EDGE,
    GL_REPEAT,
)

from textures.resourcepath import CHECKER_ID, GENERATED_PREFIX, ROUND_SHADOW_ID


@dataclass(frozen=True)
class DecodedImage:
    data: bytes
    width: int
    height: int
    smooth: bool = True
    repeat: bool = False


def decode_image(filename: str) -> DecodedImage:
    """Read an image file into flipped RGBA bytes.

    Raises whatever pygame raises for missing or unreadable files; the loader
    turns that into a failed asset handle.
    """
    if filename.startswith(GENERATED_PREFIX):
        return decode_generated(filename)
    surface = pygame.image.load(filename)
    width, height = surface.get_size()
    data = pygame.image.tobytes(surface, "RGBA", True)
    return DecodedImage(data, int(width), int(height))


def decode_generated(identifier: str) -> DecodedImage:
    if identifier == ROUND_SHADOW_ID:
        return make_round_shadow()
    if identifier == CHECKER_ID:
        return make_checker()
    raise FileNotFoundError(identifier)


def make_round_shadow(
    *,
    size_px: int = 128,
    max_alpha: float = 0.9,
    inner_ratio: float = 0.15,
    outer_ratio: float = 0.95,
    falloff_exp: float = 1.8,
) -> DecodedImage:
    """Soft black disc with radial alpha falloff, for blob shadows."""
    size_px = max(8, int(size_px))
    max_alpha = float(max(0.0, min(1.0, max_alpha)))
    inner_ratio = float(max(0.0, min(1.0, inner_ratio)))
    outer_ratio = float(max(inner_ratio, min(1.0, outer_ratio)))

    c = (size_px - 1) * 0.5
    ys, xs = np.mgrid[0:size_px, 0:size_px].astype(np.float32)
    r = np.hypot(xs - c, ys - c)
    r_inner = c * inner_ratio
    r_outer = c * outer_ratio

    t = np.clip((r - r_inner) / max(1e-6, r_outer - r_inner), 0.0, 1.0)
    alpha = (1.0 - np.power(t, falloff_exp)) * 255.0 * max_alpha

    rgba = np.zeros((size_px, size_px, 4), dtype=np.uint8)
    rgba[..., 3] = alpha.astype(np.uint8)
    return DecodedImage(rgba.tobytes(), size_px, size_px)


def make_checker(size_px: int = 2, dark: int = 0x80, light: int = 0xC0) -> DecodedImage:
    """Tiny grey checkerboard, meant to be repeated over a ground plane."""
    ys, xs = np.mgrid[0:size_px, 0:size_px]
    shade = np.where((xs + ys) % 2 == 0, light, dark).astype(np.uint8)
    rgba = np.empty((size_px, size_px, 4), dtype=np.uint8)
    rgba[..., :3] = shade[..., None]
    rgba[..., 3] = 255
    return DecodedImage(rgba.tobytes(), size_px, size_px, smooth=False, repeat=True)


def upload_texture(image: DecodedImage) -> int:
    """Upload decoded RGBA bytes and return the OpenGL texture ID."""
    texture_id = glGenTextures(1)
    glBindTexture(GL_TEXTURE_2D, texture_id)
    glTexImage2D(
        GL_TEXTURE_2D,
        0,
        GL_RGBA,
        image.width,
        image.height,
        0,
        GL_RGBA,
        GL_UNSIGNED_BYTE,
        image.data,
    )

    filt = GL_LINEAR if image.smooth else GL_NEAREST
    glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MIN_FILTER, filt)
    glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MAG_FILTER, filt)
    wrap = GL_REPEAT if image.repeat else GL_CLAMP_TO_EDGE
    glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_WRAP_S, wrap)
    glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_WRAP_T, wrap)

    return int(texture_id)
