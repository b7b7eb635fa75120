"""Tests for the Tkinter GUI frontend."""

import logging
from types import SimpleNamespace

import numpy as np
import pytest

tk = pytest.importorskip("tkinter")

from lifegrid.core.universe import Universe  # noqa: E402
from lifegrid.frontends.tkinter_gui import (  # noqa: E402
    ALIVE_COLOR,
    CELL_SIZE,
    CONTROL_MASK,
    DEAD_COLOR,
    SHIFT_MASK,
    TkinterUniverseGUI,
    bit_is_set,
    canvas_to_cell,
)


class TestHelpers:
    """Test the display-independent helpers."""

    def test_bit_is_set(self):
        """Test reading bits from a packed buffer."""
        buffer = np.array([0b00000101, 0b10000000], dtype=np.uint8)
        assert bit_is_set(0, buffer)
        assert not bit_is_set(1, buffer)
        assert bit_is_set(2, buffer)
        assert bit_is_set(15, buffer)
        assert not bit_is_set(8, buffer)

    def test_bit_is_set_matches_universe(self):
        """Test the helper agrees with the universe's own cell reads."""
        universe = Universe(7, 5)
        universe.randomize(rng=np.random.default_rng(11))
        buffer = universe.cell_buffer()
        for row in range(5):
            for col in range(7):
                assert bit_is_set(universe.index(row, col), buffer) == universe.get_cell(row, col)

    def test_canvas_to_cell(self):
        """Test pixel to (row, col) mapping."""
        step = CELL_SIZE + 1
        assert canvas_to_cell(0, 0, 10, 10) == (0, 0)
        assert canvas_to_cell(3 * step + 2, 2 * step + 2, 10, 10) == (2, 3)

    def test_canvas_to_cell_clamps(self):
        """Test clicks past the last cell clamp to it."""
        assert canvas_to_cell(1000, 1000, 10, 8) == (7, 9)


class TestTkinterUniverseGUI:
    """Test cases for the Tkinter GUI."""

    @pytest.fixture
    def root(self):
        """Create a root Tkinter window for testing."""
        try:
            root = tk.Tk()
        except tk.TclError:
            pytest.skip("No display available")
        root.withdraw()
        yield root
        root.destroy()

    @pytest.fixture
    def gui(self, root):
        """Create a GUI instance on a small universe."""
        return TkinterUniverseGUI(root, Universe(10, 8))

    def click(self, gui, row, col, state=0):
        step = CELL_SIZE + 1
        event = SimpleNamespace(x=col * step + 2, y=row * step + 2, state=state)
        gui.on_click(event)

    def test_initialization(self, gui):
        """Test GUI initialization."""
        assert gui.is_paused()
        assert gui.render_cycles == 1
        assert len(gui.cell_objects) == 80
        assert gui.canvas_width == 10 * (CELL_SIZE + 1) + 1

    def test_default_universe(self, root):
        """Test the GUI builds the default universe when none is given."""
        gui = TkinterUniverseGUI(root)
        assert gui.universe.population == 5

    def test_click_toggles(self, gui):
        """Test a plain click toggles the cell and recolors it."""
        self.click(gui, 2, 3)
        assert gui.universe.get_cell(2, 3)
        assert gui.canvas.itemcget(gui.cell_objects[(2, 3)], "fill") == ALIVE_COLOR

        self.click(gui, 2, 3)
        assert not gui.universe.get_cell(2, 3)
        assert gui.canvas.itemcget(gui.cell_objects[(2, 3)], "fill") == DEAD_COLOR

    def test_shift_click_spawns_pulsar(self, gui):
        """Test Shift-click spawns the pulsar stub."""
        self.click(gui, 1, 4, state=SHIFT_MASK)
        assert set(gui.universe.alive_cells()) == {(1, 4), (2, 4), (3, 4)}

    def test_control_click_spawns_glider(self, gui):
        """Test Ctrl-click spawns a glider."""
        self.click(gui, 4, 4, state=CONTROL_MASK)
        assert gui.universe.population == 5

    def test_kill(self, gui):
        """Test the kill button clears the universe."""
        gui.universe.randomize(1.0)
        gui.kill()
        assert gui.universe.population == 0

    def test_play_pause(self, gui):
        """Test toggling the animation."""
        gui.toggle_running()
        assert not gui.is_paused()
        assert gui.play_pause_btn["text"] == "⏸"

        gui.toggle_running()
        assert gui.is_paused()
        assert gui.play_pause_btn["text"] == "▶"

    def test_step_uses_render_cycles(self, gui):
        """Test one frame advances the selected number of ticks."""
        gui.universe.set_alive([(3, 1), (3, 2), (3, 3)])
        gui.render_cycles_slider.set(2)

        gui.step()

        assert set(gui.universe.alive_cells()) == {(3, 1), (3, 2), (3, 3)}

    def test_reset_starts_running(self, gui):
        """Test reset randomizes and plays."""
        gui.reset()
        assert not gui.is_paused()
        gui.pause()

    def test_callback_errors_are_logged(self, gui, root, caplog):
        """Test an error raised inside a Tk callback reaches the lifegrid log."""
        root.after_idle(lambda: gui.universe.toggle(99, 99))

        with caplog.at_level(logging.CRITICAL, logger="lifegrid"):
            root.update()

        assert any(record.levelno == logging.CRITICAL for record in caplog.records)
        assert "out of bounds" in caplog.text
