#!/usr/bin/env python3
"""
Example usage of the lifegrid package.
"""

from lifegrid import PatternLibrary, Timer, Universe


def main():
    """Demonstrate programmatic usage of the lifegrid package."""
    # Start from an empty 24x24 universe
    universe = Universe(24, 24)

    # Spawn a glider near the corner; it wraps around the edges
    universe.spawn_glider(1, 1)

    # Place the canonical pulsar from the library
    library = PatternLibrary()
    pulsar = library.get_pattern("Pulsar")
    if pulsar:
        universe.spawn_pattern(pulsar, 8, 8)

    print("Initial state:")
    print(universe.render())
    print(f"Population: {universe.population}")
    print()

    # Run 8 generations, timing each tick
    for generation in range(1, 9):
        with Timer("tick", lambda name, elapsed: print(f"{name}: {elapsed * 1000:.2f}ms")):
            universe.tick()
        print(f"Generation {generation}:")
        print(universe.render())
        print(f"Population: {universe.population}")
        print()


if __name__ == "__main__":
    main()
