"""
Software rasterizer that draws into an (H, W, 3) uint8 numpy frame.
Used for `rgb_array` rendering so frames can be produced without a window.
Text goes through Pillow and is centred on the given point, as in the window.
"""

from __future__ import annotations

import math
from typing import Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw, ImageFont

Color = Sequence[int]


class FrameSurface:
    """Top-left origin drawing surface backed by a numpy array"""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.frame = np.zeros((height, width, 3), dtype=np.uint8)

    def clear(self, color: Color = (0, 0, 0)):
        self.frame[:] = color[:3]

    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color):
        x0, x1 = self._span(x, x + w, self.width)
        y0, y1 = self._span(y, y + h, self.height)
        if x0 >= x1 or y0 >= y1:
            return
        self._paint(np.s_[y0:y1, x0:x1], None, color)

    def fill_circle(self, cx: float, cy: float, r: float, color: Color):
        x0, x1 = self._span(cx - r, cx + r, self.width)
        y0, y1 = self._span(cy - r, cy + r, self.height)
        if x0 >= x1 or y0 >= y1:
            return
        ys, xs = np.mgrid[y0:y1, x0:x1]
        mask = (xs + 0.5 - cx) ** 2 + (ys + 0.5 - cy) ** 2 <= r * r
        self._paint(np.s_[y0:y1, x0:x1], mask, color)

    def fill_triangle(self, p1: Tuple[float, float], p2: Tuple[float, float],
                      p3: Tuple[float, float], color: Color):
        xs_ = (p1[0], p2[0], p3[0])
        ys_ = (p1[1], p2[1], p3[1])
        x0, x1 = self._span(min(xs_), max(xs_), self.width)
        y0, y1 = self._span(min(ys_), max(ys_), self.height)
        if x0 >= x1 or y0 >= y1:
            return
        ys, xs = np.mgrid[y0:y1, x0:x1]
        px, py = xs + 0.5, ys + 0.5

        def edge(a, b):
            return (b[0] - a[0]) * (py - a[1]) - (b[1] - a[1]) * (px - a[0])

        e1, e2, e3 = edge(p1, p2), edge(p2, p3), edge(p3, p1)
        mask = ((e1 >= 0) & (e2 >= 0) & (e3 >= 0)) | ((e1 <= 0) & (e2 <= 0) & (e3 <= 0))
        self._paint(np.s_[y0:y1, x0:x1], mask, color)

    def draw_text(self, text: str, x: float, y: float, color: Color, size: float = 14):
        if not text:
            return
        image = Image.fromarray(self.frame)
        draw = ImageDraw.Draw(image)
        font = ImageFont.load_default(size=size)
        left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
        origin = (x - (left + right) / 2, y - (top + bottom) / 2)
        draw.text(origin, text, fill=tuple(int(c) for c in color[:3]), font=font)
        self.frame[...] = np.asarray(image)

    # ----------------------------

    @staticmethod
    def _span(lo: float, hi: float, limit: int) -> Tuple[int, int]:
        return max(0, int(math.floor(lo))), min(limit, int(math.ceil(hi)))

    def _paint(self, region, mask, color: Color):
        target = self.frame[region]
        rgb = np.array(color[:3], dtype=np.float32)
        if len(color) > 3:
            alpha = color[3] / 255.0
            blended = (target.astype(np.float32) * (1.0 - alpha) + rgb * alpha).astype(np.uint8)
        else:
            blended = np.broadcast_to(rgb.astype(np.uint8), target.shape)
        if mask is None:
            target[...] = blended
        else:
            target[mask] = blended[mask]
