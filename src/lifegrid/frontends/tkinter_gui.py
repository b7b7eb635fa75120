"""Tkinter canvas frontend for the Game of Life universe."""

import logging
import tkinter as tk
from typing import Dict, Optional, Tuple

import numpy as np

from ..core.universe import Universe
from ..core.metrics import FrameRateMonitor
from ..core.timing import Timer
from ..diagnostics import configure_logging, install_panic_hook, log_uncaught

logger = logging.getLogger(__name__)

CELL_SIZE = 5  # px
GRID_COLOR = "#161614"
DEAD_COLOR = "#2c2a33"
ALIVE_COLOR = "#706e66"

# Modifier bits of tk.Event.state
SHIFT_MASK = 0x0001
CONTROL_MASK = 0x0004


def bit_is_set(n: int, buffer: np.ndarray) -> bool:
    """Check bit ``n`` of a packed little-endian cell buffer."""
    mask = 1 << (n % 8)
    return (int(buffer[n // 8]) & mask) == mask


def canvas_to_cell(canvas_x: float, canvas_y: float, width: int, height: int) -> Tuple[int, int]:
    """Map canvas pixel coordinates to (row, col), clamped to the last row/column."""
    row = min(int(canvas_y // (CELL_SIZE + 1)), height - 1)
    col = min(int(canvas_x // (CELL_SIZE + 1)), width - 1)
    return (max(row, 0), max(col, 0))


class TkinterUniverseGUI:
    """Tkinter-based canvas for watching and editing a universe."""

    def __init__(self, master: tk.Tk, universe: Optional[Universe] = None) -> None:
        """Initialize the GUI.

        Args:
            master: Root Tkinter window
            universe: Universe to display (defaults to Universe.default())
        """
        self.master = master
        self.master.title("Conway's Game of Life")
        self.master.configure(bg="#333333")
        # Tk reports callback errors here rather than through sys.excepthook
        self.master.report_callback_exception = log_uncaught

        self.universe = universe if universe is not None else Universe.default()
        self.fps = FrameRateMonitor()

        self.animation_id: Optional[str] = None
        self.frame_interval = 16  # ms

        # Canvas rectangle per cell, keyed by (row, col)
        self.cell_objects: Dict[Tuple[int, int], int] = {}
        self._drawn_state: Optional[np.ndarray] = None

        self.setup_ui()
        self.draw_grid()
        self.draw_cells()

    @property
    def canvas_width(self) -> int:
        return (CELL_SIZE + 1) * self.universe.width + 1

    @property
    def canvas_height(self) -> int:
        return (CELL_SIZE + 1) * self.universe.height + 1

    def setup_ui(self) -> None:
        """Set up the user interface."""
        control_frame = tk.Frame(self.master, bg="#333333")
        control_frame.pack(pady=5)

        self.play_pause_btn = tk.Button(
            control_frame,
            text="▶",
            command=self.toggle_running,
            bg="#555555",
            fg="white",
            font=("Arial", 9),
        )
        self.play_pause_btn.pack(side=tk.LEFT, padx=3)

        self.reset_btn = tk.Button(
            control_frame,
            text="↩",
            command=self.reset,
            bg="#555555",
            fg="white",
            font=("Arial", 9),
        )
        self.reset_btn.pack(side=tk.LEFT, padx=3)

        self.kill_btn = tk.Button(
            control_frame,
            text="☠",
            command=self.kill,
            bg="#555555",
            fg="white",
            font=("Arial", 9),
        )
        self.kill_btn.pack(side=tk.LEFT, padx=3)

        tk.Label(
            control_frame,
            text="Ticks per frame:",
            bg="#333333",
            fg="white",
            font=("Arial", 9),
        ).pack(side=tk.LEFT, padx=(10, 2))
        self.render_cycles_slider = tk.Scale(
            control_frame,
            from_=1,
            to=20,
            orient=tk.HORIZONTAL,
            bg="#555555",
            fg="white",
            font=("Arial", 8),
            length=150,
        )
        self.render_cycles_slider.set(1)
        self.render_cycles_slider.pack(side=tk.LEFT)

        self.canvas = tk.Canvas(
            self.master,
            width=self.canvas_width,
            height=self.canvas_height,
            bg=DEAD_COLOR,
            highlightthickness=0,
        )
        self.canvas.pack(padx=5, pady=5)
        self.canvas.bind("<Button-1>", self.on_click)

        self.fps_label = tk.Label(
            self.master,
            text=self.fps.summary(),
            bg="#333333",
            fg="#00FF00",
            font=("Courier", 9),
            justify=tk.LEFT,
        )
        self.fps_label.pack(anchor="w", padx=5, pady=(0, 5))

    @property
    def render_cycles(self) -> int:
        """Ticks advanced per animation frame."""
        return int(self.render_cycles_slider.get())

    def is_paused(self) -> bool:
        return self.animation_id is None

    def play(self) -> None:
        """Start the animation loop."""
        self.play_pause_btn.config(text="⏸")
        if self.is_paused():
            logger.debug("Animation started")
            self.render_loop()

    def pause(self) -> None:
        """Stop the animation loop."""
        self.play_pause_btn.config(text="▶")
        if self.animation_id is not None:
            self.master.after_cancel(self.animation_id)
            self.animation_id = None
            logger.debug("Animation paused")
        self.fps.reset()

    def toggle_running(self) -> None:
        if self.is_paused():
            self.play()
        else:
            self.pause()

    def kill(self) -> None:
        """Kill every cell."""
        self.universe.kill_all()
        self.draw_cells()

    def reset(self) -> None:
        """Fill the universe randomly and keep it running."""
        self.pause()
        self.universe.randomize()
        self.draw_cells()
        self.play()

    def on_click(self, event: tk.Event) -> None:
        """Handle a click: toggle, Shift spawns a pulsar stub, Ctrl a glider."""
        row, col = canvas_to_cell(event.x, event.y, self.universe.width, self.universe.height)

        if event.state & SHIFT_MASK:
            self.universe.spawn_pulsar(row, col)
        elif event.state & CONTROL_MASK:
            self.universe.spawn_glider(row, col)
        else:
            self.universe.toggle(row, col)

        self.draw_cells()

    def step(self) -> None:
        """Advance the universe by the selected number of ticks and redraw."""
        with Timer(f"Universe.tick x{self.render_cycles}"):
            for _ in range(self.render_cycles):
                self.universe.tick()
        self.draw_cells()

    def render_loop(self) -> None:
        """One animation frame; reschedules itself until paused."""
        self.fps.frame()
        self.fps_label.config(text=self.fps.summary())
        self.step()
        self.animation_id = self.master.after(self.frame_interval, self.render_loop)

    def draw_grid(self) -> None:
        """Draw the grid lines and create one rectangle per cell."""
        self.canvas.delete("all")
        self.cell_objects.clear()
        self._drawn_state = None

        width, height = self.universe.width, self.universe.height
        for i in range(width + 1):
            x = i * (CELL_SIZE + 1)
            self.canvas.create_line(x, 0, x, self.canvas_height, fill=GRID_COLOR)
        for j in range(height + 1):
            y = j * (CELL_SIZE + 1)
            self.canvas.create_line(0, y, self.canvas_width, y, fill=GRID_COLOR)

        for row in range(height):
            for col in range(width):
                x1 = col * (CELL_SIZE + 1) + 1
                y1 = row * (CELL_SIZE + 1) + 1
                self.cell_objects[(row, col)] = self.canvas.create_rectangle(
                    x1, y1, x1 + CELL_SIZE, y1 + CELL_SIZE, fill=DEAD_COLOR, outline=""
                )

    def draw_cells(self) -> None:
        """Recolor the cells that changed since the last draw."""
        buffer = self.universe.cell_buffer()
        width = self.universe.width
        state = np.array([bit_is_set(n, buffer) for n in range(self.universe.size)], dtype=bool)

        if self._drawn_state is None or self._drawn_state.shape != state.shape:
            changed = range(state.size)
        else:
            changed = np.flatnonzero(state != self._drawn_state)

        for n in changed:
            row, col = divmod(int(n), width)
            color = ALIVE_COLOR if state[n] else DEAD_COLOR
            self.canvas.itemconfig(self.cell_objects[(row, col)], fill=color)

        self._drawn_state = state


def main() -> None:
    """Main entry point for the Tkinter GUI."""
    import sys

    configure_logging("--verbose" in sys.argv)
    install_panic_hook()

    root = tk.Tk()
    root.resizable(False, False)

    test_mode = "--test" in sys.argv

    app = TkinterUniverseGUI(root)
    app.play()

    if test_mode:
        print("Running in test mode...")

        def auto_exit() -> None:
            print(f"Test completed. Population {app.universe.population}.")
            root.quit()
            root.destroy()

        root.after(3000, auto_exit)

    root.mainloop()


if __name__ == "__main__":
    main()
