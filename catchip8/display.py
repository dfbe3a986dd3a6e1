"""Tkinter renderer for the framebuffer."""

import tkinter as tk

from .config import EmulatorConfig, color_to_rgb
from .constants import DISPLAY_HEIGHT, DISPLAY_WIDTH
from .framebuffer import Framebuffer


class Chip8Display:
    """Tkinter canvas-based display renderer"""

    def __init__(self, canvas: tk.Canvas, config: EmulatorConfig):
        self.canvas = canvas
        self.scale = config.scale
        self.fg = color_to_rgb(config.fg)
        self.bg = color_to_rgb(config.bg)

        # The image must stay referenced or Tk drops it
        self._image = None
        self._image_id = self.canvas.create_image(0, 0, anchor=tk.NW)

    def render(self, framebuffer: Framebuffer):
        """Render the framebuffer as a scaled PPM image"""
        header = f"P6 {framebuffer.width} {framebuffer.height} 255\n".encode("ascii")
        data = header + framebuffer.to_color_model(self.fg, self.bg)
        image = tk.PhotoImage(data=data, format="PPM")
        if self.scale > 1:
            image = image.zoom(self.scale, self.scale)
        self._image = image
        self.canvas.itemconfig(self._image_id, image=image)

    @staticmethod
    def canvas_size(config: EmulatorConfig):
        return DISPLAY_WIDTH * config.scale, DISPLAY_HEIGHT * config.scale
