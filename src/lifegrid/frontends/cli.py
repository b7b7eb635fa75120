"""Command-line interface for the Game of Life universe."""

import argparse
import sys
import time
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..core.universe import Universe
from ..core.patterns import PatternLibrary
from ..core.metrics import FrameRateMonitor
from ..core.timing import Timer
from ..diagnostics import configure_logging, install_panic_hook

CLEAR_SCREEN = "\033[2J\033[H"


class CLIUniverse:
    """Command-line host that seeds, advances and prints a universe."""

    def __init__(self) -> None:
        self.pattern_library = PatternLibrary()

    def build_universe(
        self,
        width: int,
        height: int,
        kill: bool = False,
        randomize: bool = False,
        population_rate: float = 0.5,
        seed: Optional[int] = None,
        gliders: Sequence[Tuple[int, int]] = (),
        pulsars: Sequence[Tuple[int, int]] = (),
        pattern: Optional[str] = None,
        pattern_row: int = 0,
        pattern_col: int = 0,
        verbose: bool = False,
    ) -> Universe:
        """Create the default universe and apply the requested changes.

        Changing either dimension away from the default clears the seed.

        Raises:
            ValueError: If the pattern name is unknown
        """
        universe = Universe.default()

        if width != universe.width:
            universe.resize_width(width)
        if height != universe.height:
            universe.resize_height(height)

        if verbose:
            print(f"Initializing {universe.width}x{universe.height} universe")

        if kill:
            universe.kill_all()

        if randomize:
            if verbose:
                print(f"Generating random population (rate: {population_rate:.2%})")
            rng = np.random.default_rng(seed)
            universe.randomize(population_rate, rng=rng)

        if pattern:
            loaded_pattern = self.pattern_library.get_pattern(pattern)
            if loaded_pattern is None:
                raise ValueError(f"Pattern '{pattern}' not found")
            if verbose:
                print(f"Placing pattern '{pattern}' at ({pattern_row}, {pattern_col})")
            universe.spawn_pattern(loaded_pattern, pattern_row, pattern_col)

        for row, col in gliders:
            universe.spawn_glider(row, col)
        for row, col in pulsars:
            universe.spawn_pulsar(row, col)

        return universe

    def run(
        self,
        universe: Universe,
        generations: int,
        render_cycles: int = 1,
        animate: bool = False,
        delay: float = 0.0,
        show_grid: bool = False,
        time_ticks: bool = False,
        verbose: bool = False,
    ) -> Dict[str, Any]:
        """Advance the universe frame by frame.

        Args:
            universe: Universe to advance
            generations: Number of frames to run
            render_cycles: Ticks per frame
            animate: Redraw the grid after every frame
            delay: Seconds to sleep between frames
            show_grid: Show initial and final grid states
            time_ticks: Measure each frame's ticks with a Timer
            verbose: Print progress updates

        Returns:
            Statistics dictionary
        """
        monitor = FrameRateMonitor()
        tick_times: List[float] = []
        initial_population = universe.population

        if verbose:
            print(f"Initial population: {initial_population} cells")

        if show_grid:
            print("\nInitial grid:")
            print(self._format_grid(universe))

        start_time = time.time()

        for frame in range(generations):
            monitor.frame()
            if time_ticks:
                with Timer("tick", lambda name, elapsed: tick_times.append(elapsed)):
                    self._advance(universe, render_cycles)
            else:
                self._advance(universe, render_cycles)

            if animate:
                print(CLEAR_SCREEN + self._format_grid(universe))
                print(f"Generation {(frame + 1) * render_cycles}, population {universe.population}")
            if delay > 0:
                time.sleep(delay)

        duration = time.time() - start_time
        total_ticks = generations * render_cycles

        if show_grid:
            print(f"\nFinal grid (generation {total_ticks}):")
            print(self._format_grid(universe))

        stats: Dict[str, Any] = {
            "frames": generations,
            "generations": total_ticks,
            "grid_size": (universe.width, universe.height),
            "initial_population": initial_population,
            "population": universe.population,
            "duration_seconds": duration,
            "generations_per_second": total_ticks / duration if duration > 0 else 0,
            "fps_mean": monitor.mean,
        }
        if tick_times:
            stats["tick_ms_mean"] = float(np.mean(tick_times)) * 1000.0 / render_cycles
            stats["tick_ms_max"] = float(np.max(tick_times)) * 1000.0 / render_cycles
        return stats

    @staticmethod
    def _advance(universe: Universe, render_cycles: int) -> None:
        for _ in range(render_cycles):
            universe.tick()

    def _format_grid(self, universe: Universe, max_size: int = 100) -> str:
        """Format grid for display, truncating if too large."""
        if universe.width > max_size or universe.height > max_size:
            return f"Grid too large to display ({universe.width}x{universe.height})"

        return universe.render()

    def list_patterns(self) -> None:
        """List available patterns by category."""
        categories = self.pattern_library.get_patterns_by_category()

        print("Available patterns:")
        for category, patterns in categories.items():
            print(f"\n{category}:")
            for pattern_name in patterns:
                pattern = self.pattern_library.get_pattern(pattern_name)
                if pattern:
                    height, width = pattern.get_size()
                    print(f"  {pattern_name}: {width}x{height}, {len(pattern.cells)} cells")
                    if pattern.description:
                        print(f"    {pattern.description}")


def parse_coordinate(value: str) -> Tuple[int, int]:
    """Parse a 'ROW,COL' argument."""
    try:
        row_text, col_text = value.split(",")
        return (int(row_text), int(col_text))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected ROW,COL but got '{value}'")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    parser = argparse.ArgumentParser(
        description="Conway's Game of Life on a toroidal universe",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the default seeded 64x64 universe for 100 generations
  lifegrid-cli --show-grid

  # Animate a random 40x40 universe, 2 ticks per frame
  lifegrid-cli -W 40 -H 40 --random --animate --render-cycles 2 --delay 0.05

  # Place two gliders on an empty universe
  lifegrid-cli --kill --glider 10,10 --glider 30,5 --show-grid

  # Place the canonical pulsar and time each tick
  lifegrid-cli --kill --pattern Pulsar --pattern-row 20 --pattern-col 20 --time -v

  # List available patterns
  lifegrid-cli --list-patterns
        """,
    )

    # Universe configuration
    parser.add_argument("-W", "--width", type=int, default=64, help="Universe width (default: 64)")

    parser.add_argument("-H", "--height", type=int, default=64, help="Universe height (default: 64)")

    parser.add_argument(
        "--kill",
        action="store_true",
        help="Start from an empty universe instead of the default seed",
    )

    parser.add_argument(
        "-r",
        "--random",
        action="store_true",
        help="Fill the universe randomly",
    )

    parser.add_argument(
        "-p",
        "--population",
        type=float,
        default=0.5,
        help="Random population rate 0.0-1.0 (default: 0.5)",
    )

    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible layouts",
    )

    # Pattern configuration
    parser.add_argument(
        "--glider",
        type=parse_coordinate,
        action="append",
        default=[],
        metavar="ROW,COL",
        help="Spawn a glider anchored at ROW,COL (repeatable)",
    )

    parser.add_argument(
        "--pulsar",
        type=parse_coordinate,
        action="append",
        default=[],
        metavar="ROW,COL",
        help="Spawn a three-cell pulsar stub at ROW,COL (repeatable)",
    )

    parser.add_argument(
        "--pattern",
        type=str,
        help="Place a named library pattern",
    )

    parser.add_argument(
        "--pattern-row",
        type=int,
        default=0,
        help="Row anchor for pattern placement (default: 0)",
    )

    parser.add_argument(
        "--pattern-col",
        type=int,
        default=0,
        help="Column anchor for pattern placement (default: 0)",
    )

    # Simulation configuration
    parser.add_argument(
        "-g",
        "--generations",
        type=int,
        default=100,
        help="Number of frames to run (default: 100)",
    )

    parser.add_argument(
        "-c",
        "--render-cycles",
        type=int,
        default=1,
        help="Ticks per frame (default: 1)",
    )

    # Output configuration
    parser.add_argument(
        "-a",
        "--animate",
        action="store_true",
        help="Redraw the universe after every frame",
    )

    parser.add_argument(
        "--delay",
        type=float,
        default=0.0,
        help="Seconds to wait between frames (default: 0)",
    )

    parser.add_argument(
        "-s",
        "--show-grid",
        action="store_true",
        help="Display initial and final universe states",
    )

    parser.add_argument(
        "-T",
        "--time",
        action="store_true",
        help="Time every frame's ticks",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print detailed progress information",
    )

    parser.add_argument(
        "--list-patterns",
        action="store_true",
        help="List all available patterns and exit",
    )

    return parser


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    errors = []

    if args.width <= 0:
        errors.append("Width must be positive")

    if args.height <= 0:
        errors.append("Height must be positive")

    if not 0.0 <= args.population <= 1.0:
        errors.append("Population rate must be between 0.0 and 1.0")

    if args.generations < 0:
        errors.append("Generations must be non-negative")

    if args.render_cycles <= 0:
        errors.append("Render cycles must be positive")

    if args.delay < 0:
        errors.append("Delay must be non-negative")

    if args.width > 0 and args.height > 0:
        anchors = list(args.glider) + list(args.pulsar)
        if args.pattern:
            anchors.append((args.pattern_row, args.pattern_col))
        for row, col in anchors:
            if not (0 <= row < args.height and 0 <= col < args.width):
                errors.append(f"Anchor ({row}, {col}) is outside the {args.height}x{args.width} universe")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def print_results(stats: dict, verbose: bool) -> None:
    """Print run results.

    Args:
        stats: Statistics dictionary from CLIUniverse.run
        verbose: Whether to show detailed statistics
    """
    print(f"\nRan {stats['generations']} generations in {stats['frames']} frames")

    if verbose:
        print("\nDetailed Statistics:")
        print(f"  Grid size: {stats['grid_size'][0]}x{stats['grid_size'][1]}")
        print(f"  Initial population: {stats['initial_population']}")
        print(f"  Final population: {stats['population']}")
        print(f"  Duration: {stats['duration_seconds']:.3f} seconds")
        print(f"  Speed: {stats['generations_per_second']:.0f} generations/second")
        print(f"  Mean frame rate: {stats['fps_mean']:.1f} fps")
        if "tick_ms_mean" in stats:
            print(f"  Tick time: {stats['tick_ms_mean']:.3f}ms mean, {stats['tick_ms_max']:.3f}ms max")
    else:
        print(
            "Population: {} -> {}, "
            "Duration: {:.3f}s, "
            "Speed: {:.0f} gen/s".format(
                stats["initial_population"],
                stats["population"],
                stats["duration_seconds"],
                stats["generations_per_second"],
            )
        )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    install_panic_hook()

    cli = CLIUniverse()

    if args.list_patterns:
        cli.list_patterns()
        return 0

    if not validate_args(args):
        return 1

    if args.pattern and cli.pattern_library.get_pattern(args.pattern) is None:
        available = cli.pattern_library.list_patterns()
        print(f"Error: Pattern '{args.pattern}' not found")
        print(f"Available patterns: {', '.join(available)}")
        return 1

    try:
        universe = cli.build_universe(
            width=args.width,
            height=args.height,
            kill=args.kill,
            randomize=args.random,
            population_rate=args.population,
            seed=args.seed,
            gliders=args.glider,
            pulsars=args.pulsar,
            pattern=args.pattern,
            pattern_row=args.pattern_row,
            pattern_col=args.pattern_col,
            verbose=args.verbose,
        )

        stats = cli.run(
            universe,
            generations=args.generations,
            render_cycles=args.render_cycles,
            animate=args.animate,
            delay=args.delay,
            show_grid=args.show_grid,
            time_ticks=args.time,
            verbose=args.verbose,
        )

        print_results(stats, args.verbose)
        return 0

    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1
    except Exception as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
