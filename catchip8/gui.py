"""Main emulator window."""

import logging
import time
import tkinter as tk
from tkinter import messagebox

from .audio import Chip8Audio
from .config import color_to_hex
from .constants import COLORS, KEYBOARD_MAP, STATUS_BAR_HEIGHT
from .controller import Chip8Controller
from .display import Chip8Display
from .emulator import Emulator
from .errors import Chip8Fault

logger = logging.getLogger(__name__)


class Chip8GUI:
    """
    Main emulator application with Tkinter GUI.

    Everything runs on the Tk event loop: key events are delivered as they
    arrive, and a timer callback runs one frame (instructions, timer tick,
    redraw) per 1/fps seconds.
    """

    def __init__(self, emulator: Emulator, title: str = "Cat's Chip-8 Emulator"):
        self.emulator = emulator
        self.config = emulator.config

        self.root = tk.Tk()
        self.root.title(title)
        self.root.resizable(False, False)
        self.root.configure(bg=COLORS['bg'])

        # State
        self.running = True
        self.paused = False
        self.fps = 0
        self.frame_count = 0
        self.last_fps_time = time.time()
        self._after_id = None

        # Create UI
        self._create_ui()
        self.display_renderer = Chip8Display(self.canvas, self.config)
        self.display_renderer.render(self.emulator.cpu.framebuffer)

        # Components
        self.audio = Chip8Audio(self.config.pitch)
        self.controller = Chip8Controller(self._on_controller_key)

        self._bind_keys()

    def _create_ui(self):
        """Create UI components"""
        width, height = Chip8Display.canvas_size(self.config)

        # Main display canvas
        self.canvas = tk.Canvas(
            self.root,
            width=width,
            height=height,
            bg=color_to_hex(self.config.bg),
            highlightthickness=0
        )
        self.canvas.pack(side=tk.TOP)

        # Status bar
        self.status_frame = tk.Frame(
            self.root,
            height=STATUS_BAR_HEIGHT,
            bg=COLORS['status_bg']
        )
        self.status_frame.pack(side=tk.BOTTOM, fill=tk.X)
        self.status_frame.pack_propagate(False)

        self.fps_label = tk.Label(
            self.status_frame,
            text="FPS: --",
            fg=COLORS['status_fg'],
            bg=COLORS['status_bg'],
            font=("Consolas", 9)
        )
        self.fps_label.pack(side=tk.LEFT, padx=10)

        self.controller_label = tk.Label(
            self.status_frame,
            text="Controller: None",
            fg=COLORS['status_fg'],
            bg=COLORS['status_bg'],
            font=("Consolas", 9)
        )
        self.controller_label.pack(side=tk.LEFT, padx=10)

        self.state_label = tk.Label(
            self.status_frame,
            text="Running",
            fg=COLORS['status_fg'],
            bg=COLORS['status_bg'],
            font=("Consolas", 9)
        )
        self.state_label.pack(side=tk.RIGHT, padx=10)

        self.speed_label = tk.Label(
            self.status_frame,
            text="1×",
            fg=COLORS['accent'],
            bg=COLORS['status_bg'],
            font=("Consolas", 9, "bold")
        )
        self.speed_label.pack(side=tk.RIGHT, padx=10)

    def _bind_keys(self):
        """Bind keyboard events"""
        self.root.bind("<KeyPress>", self._on_key_down)
        self.root.bind("<KeyRelease>", self._on_key_up)

        # Emulator controls
        self.root.bind("<F9>", lambda e: self._reset())
        self.root.bind("<space>", lambda e: self._toggle_pause())
        self.root.bind("<F1>", lambda e: self._decrease_speed())
        self.root.bind("<F2>", lambda e: self._increase_speed())
        self.root.bind("<Escape>", lambda e: self._on_close())

    def _on_key_down(self, event):
        key = event.keysym.lower()
        if key in KEYBOARD_MAP:
            self.emulator.key_down(KEYBOARD_MAP[key])

    def _on_key_up(self, event):
        key = event.keysym.lower()
        if key in KEYBOARD_MAP:
            self.emulator.key_up(KEYBOARD_MAP[key])

    def _on_controller_key(self, key: int, pressed: bool):
        if pressed:
            self.emulator.key_down(key)
        else:
            self.emulator.key_up(key)

    def _frame(self):
        """Run one frame and schedule the next"""
        if not self.running:
            return

        self.controller.poll()

        if not self.paused and not self.emulator.cpu.halted:
            try:
                self.emulator.run_frame()
            except Chip8Fault as e:
                self.audio.stop_beep()
                self._update_status()
                messagebox.showerror("CHIP-8 halted", str(e))
            else:
                self.audio.update(self.emulator.sound_active)

        framebuffer = self.emulator.cpu.framebuffer
        if framebuffer.dirty:
            self.display_renderer.render(framebuffer)
            framebuffer.dirty = False

        # Update FPS counter
        self.frame_count += 1
        now = time.time()
        if now - self.last_fps_time >= 1.0:
            self.fps = self.frame_count
            self.frame_count = 0
            self.last_fps_time = now
            self.fps_label.config(text=f"FPS: {self.fps}")
            self.controller_label.config(text=f"Controller: {self.controller.name}")

        self._after_id = self.root.after(max(1, 1000 // self.config.fps), self._frame)

    def _update_status(self):
        if self.emulator.cpu.halted:
            self.state_label.config(text="Halted")
        elif self.paused:
            self.state_label.config(text="Paused")
        else:
            self.state_label.config(text="Running")

        self.speed_label.config(text=f"{self.emulator.speed_multiplier}×")

    def _reset(self):
        """Reset emulator with current ROM"""
        self.emulator.reset()
        self.audio.stop_beep()
        self.display_renderer.render(self.emulator.cpu.framebuffer)
        self._update_status()

    def _toggle_pause(self):
        self.paused = not self.paused
        if self.paused:
            self.audio.stop_beep()
        self._update_status()

    def _increase_speed(self):
        if self.emulator.speed_multiplier < 16:
            self.emulator.speed_multiplier *= 2
            self._update_status()

    def _decrease_speed(self):
        if self.emulator.speed_multiplier > 1:
            self.emulator.speed_multiplier //= 2
            self._update_status()

    def run(self):
        """Start the application"""
        self.root.protocol("WM_DELETE_WINDOW", self._on_close)
        self._frame()
        self.root.mainloop()

    def _on_close(self):
        self.running = False
        if self._after_id is not None:
            self.root.after_cancel(self._after_id)
        self.audio.close()
        self.root.destroy()
