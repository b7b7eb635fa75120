"""Toroidal Game of Life universe backed by a packed bit array."""

from typing import Iterable, Iterator, Optional, Tuple, TYPE_CHECKING
import logging

import numpy as np
import torch
import torch.nn.functional as F

if TYPE_CHECKING:
    from .patterns import Pattern

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 64
DEFAULT_HEIGHT = 64

DEAD_GLYPH = "◻"
ALIVE_GLYPH = "◼"

# Anchor-relative (row, col) offsets written by spawn_glider and spawn_pulsar.
GLIDER_OFFSETS = ((0, 0), (-1, -1), (-1, 1), (0, 1), (1, 0))
PULSAR_STUB_OFFSETS = ((0, 0), (1, 0), (2, 0))


def _byte_length(bits: int) -> int:
    """Number of bytes needed to hold ``bits`` packed bits."""
    return (bits + 7) // 8


class Universe:
    """A toroidal grid of cells evolving under Conway's rules.

    Cells are stored one bit per cell in a ``uint8`` array, row-major, with
    bit ``n`` in byte ``n // 8`` under mask ``1 << (n % 8)``. Coordinates are
    always given as ``(row, col)``.
    """

    def __init__(self, width: int, height: int) -> None:
        """Initialize an all-dead universe.

        Args:
            width: Number of columns
            height: Number of rows

        Raises:
            ValueError: If either dimension is negative
            TypeError: If either dimension is not an integer
        """
        self._width = self._validate_dimension("width", width)
        self._height = self._validate_dimension("height", height)
        self._cells = np.zeros(_byte_length(self.size), dtype=np.uint8)

        self._torch_kernel = (
            torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)
        )

    @classmethod
    def default(cls) -> "Universe":
        """Create the default 64x64 universe with its fixed seed."""
        universe = cls(DEFAULT_WIDTH, DEFAULT_HEIGHT)
        height = universe.height
        for idx in (3, height + 1, height + 3, 2 * height + 2, 2 * height + 3):
            universe._write(idx, True)
        return universe

    @staticmethod
    def _validate_dimension(name: str, value: int) -> int:
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise TypeError(f"{name.capitalize()} must be an integer, got {type(value).__name__}")
        if value < 0:
            raise ValueError(f"{name.capitalize()} must be non-negative, got {value}")
        return int(value)

    @property
    def width(self) -> int:
        """Number of columns."""
        return self._width

    @property
    def height(self) -> int:
        """Number of rows."""
        return self._height

    @property
    def size(self) -> int:
        """Total number of cells."""
        return self._width * self._height

    @property
    def shape(self) -> Tuple[int, int]:
        """Grid dimensions as (height, width)."""
        return (self._height, self._width)

    def index(self, row: int, col: int) -> int:
        """Linear index of a cell.

        Raises:
            IndexError: If (row, col) is outside the grid
        """
        if not (0 <= row < self._height and 0 <= col < self._width):
            raise IndexError(f"Coordinates ({row}, {col}) out of bounds for {self._height}x{self._width} grid")
        return row * self._width + col

    def _read(self, idx: int) -> bool:
        return bool(self._cells[idx >> 3] & (1 << (idx & 7)))

    def _write(self, idx: int, alive: bool) -> None:
        mask = 1 << (idx & 7)
        if alive:
            self._cells[idx >> 3] |= mask
        else:
            self._cells[idx >> 3] &= 0xFF ^ mask

    def get_cell(self, row: int, col: int) -> bool:
        """Return True if the cell is alive."""
        return self._read(self.index(row, col))

    def set_cell(self, row: int, col: int, alive: bool) -> None:
        """Set a single cell alive or dead."""
        self._write(self.index(row, col), alive)

    def toggle(self, row: int, col: int) -> bool:
        """Flip a cell between alive and dead.

        Returns:
            New state of the cell
        """
        idx = self.index(row, col)
        self._cells[idx >> 3] ^= 1 << (idx & 7)
        return self._read(idx)

    def set_alive(self, coordinates: Iterable[Tuple[int, int]]) -> None:
        """Mark every listed (row, col) alive, leaving other cells untouched.

        All coordinates are validated before any cell is written.

        Raises:
            IndexError: If any coordinate is outside the grid
        """
        indices = [self.index(row, col) for row, col in coordinates]
        for idx in indices:
            self._write(idx, True)

    def kill_all(self) -> None:
        """Set every cell dead."""
        self._cells.fill(0)
        logger.debug("Killed all cells in %dx%d universe", self._height, self._width)

    def randomize(self, probability: float = 0.5, rng: Optional[np.random.Generator] = None) -> None:
        """Set each cell alive independently with the given probability.

        Args:
            probability: Chance each cell will be alive (0.0 to 1.0)
            rng: Optional generator, for reproducible layouts

        Raises:
            ValueError: If probability is outside [0, 1]
        """
        if not 0.0 <= probability <= 1.0:
            raise ValueError(f"Probability must be between 0.0 and 1.0, got {probability}")

        generator = rng if rng is not None else np.random.default_rng()
        alive = generator.random(self.size) < probability
        self._cells = np.packbits(alive, bitorder="little")
        logger.debug("Randomized %dx%d universe (p=%.2f)", self._height, self._width, probability)

    def _reset_cells(self) -> None:
        self._cells = np.zeros(_byte_length(self.size), dtype=np.uint8)

    def resize_width(self, new_width: int) -> None:
        """Change the number of columns. All cells are reset to dead."""
        self._width = self._validate_dimension("width", new_width)
        self._reset_cells()
        logger.debug("Resized universe to %dx%d, cells cleared", self._height, self._width)

    def resize_height(self, new_height: int) -> None:
        """Change the number of rows. All cells are reset to dead."""
        self._height = self._validate_dimension("height", new_height)
        self._reset_cells()
        logger.debug("Resized universe to %dx%d, cells cleared", self._height, self._width)

    def _spawn(self, offsets: Iterable[Tuple[int, int]], row: int, col: int) -> None:
        # Validates the anchor, then wraps each offset around the torus.
        self.index(row, col)
        indices = [
            ((row + d_row) % self._height) * self._width + (col + d_col) % self._width
            for d_row, d_col in offsets
        ]
        for idx in indices:
            self._write(idx, True)

    def spawn_glider(self, row: int, col: int) -> None:
        """Spawn a glider anchored at (row, col).

        The anchor must lie inside the grid; the surrounding cells wrap
        around the edges.
        """
        self._spawn(GLIDER_OFFSETS, row, col)

    def spawn_pulsar(self, row: int, col: int) -> None:
        """Mark (row, col) and the two cells below it alive, wrapping vertically.

        This is a short vertical stub historically called a pulsar, not
        the 48-cell oscillator; use ``spawn_pattern`` with the library
        ``"Pulsar"`` for that.
        """
        self._spawn(PULSAR_STUB_OFFSETS, row, col)

    def spawn_pattern(self, pattern: "Pattern", row: int = 0, col: int = 0) -> None:
        """Place a pattern with its offsets relative to (row, col), wrapping."""
        self._spawn(pattern.cells, row, col)

    def live_neighbor_count(self, row: int, col: int) -> int:
        """Count living neighbors of a cell on the torus.

        Returns:
            Number of living neighbors (0-8)

        Raises:
            ValueError: If the grid has a zero dimension
            IndexError: If (row, col) is outside the grid
        """
        if self._width == 0 or self._height == 0:
            raise ValueError("Neighbor counting needs a grid of at least 1x1")
        self.index(row, col)

        count = 0
        for d_row in (-1, 0, 1):
            for d_col in (-1, 0, 1):
                if d_row == 0 and d_col == 0:
                    continue
                n_row = (row + d_row) % self._height
                n_col = (col + d_col) % self._width
                count += self._read(n_row * self._width + n_col)
        return count

    def count_all_neighbors(self) -> np.ndarray:
        """Count neighbors for every cell with a circular 3x3 convolution.

        Returns:
            (height, width) int8 array of neighbor counts

        Raises:
            ValueError: If the grid has a zero dimension
        """
        if self._width == 0 or self._height == 0:
            raise ValueError("Neighbor counting needs a grid of at least 1x1")

        torch_input = torch.from_numpy(self.cells.astype(np.float32)).reshape(1, 1, self._height, self._width)
        padded = F.pad(torch_input, (1, 1, 1, 1), mode="circular")
        neighbors = F.conv2d(padded, self._torch_kernel)
        return neighbors[0, 0].numpy().astype(np.int8)

    def tick(self) -> None:
        """Advance the universe by one generation.

        The next generation is built in a new buffer and swapped in, so no
        cell sees an already-updated neighbor.
        """
        if self.size == 0:
            return

        alive = self.cells
        neighbor_counts = self.count_all_neighbors()

        survives = alive & ((neighbor_counts == 2) | (neighbor_counts == 3))
        born = ~alive & (neighbor_counts == 3)

        self._cells = np.packbits(survives | born, bitorder="little")

    @property
    def cells(self) -> np.ndarray:
        """Unpacked (height, width) boolean snapshot of the grid."""
        bits = np.unpackbits(self._cells, count=self.size, bitorder="little")
        return bits.astype(bool).reshape(self._height, self._width)

    def cell_buffer(self) -> np.ndarray:
        """Read-only view over the packed cell bytes.

        The view is not a copy. ``tick`` and resizing replace the underlying
        buffer, so fetch a fresh view after calling them.
        """
        view = self._cells.view()
        view.flags.writeable = False
        return view

    @property
    def population(self) -> int:
        """Get the number of living cells."""
        return int(np.unpackbits(self._cells, count=self.size, bitorder="little").sum())

    def alive_cells(self) -> Iterator[Tuple[int, int]]:
        """Yield (row, col) of every living cell in row-major order."""
        rows, cols = np.nonzero(self.cells)
        for row, col in zip(rows, cols):
            yield (int(row), int(col))

    def render(self) -> str:
        """Render the grid as text, one line per row."""
        glyphs = np.where(self.cells, ALIVE_GLYPH, DEAD_GLYPH)
        return "\n".join("".join(line) for line in glyphs)

    def __eq__(self, other: object) -> bool:
        """Check if two universes have the same size and content."""
        if not isinstance(other, Universe):
            return False
        return self.shape == other.shape and np.array_equal(self._cells, other._cells)

    def __str__(self) -> str:
        return self.render()
