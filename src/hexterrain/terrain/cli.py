"""Command-line interface for terrain generation."""

import argparse
import logging
import sys
import time


def main() -> None:
    """CLI entry point for terrain generation."""
    parser = argparse.ArgumentParser(
        description="Generate a procedural hexagon terrain"
    )
    parser.add_argument(
        "--seed", type=int, default=12345, help="Random seed (default: 12345)"
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Settings preset name or TOML path (default: built-in defaults)",
    )
    parser.add_argument(
        "--width", type=int, default=None, help="Override map width in cells"
    )
    parser.add_argument(
        "--height", type=int, default=None, help="Override map height in cells"
    )
    parser.add_argument(
        "--validate", action="store_true", help="Check terrain invariants after generation"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )

    args = parser.parse_args()

    # Configure logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    # Import here to avoid slow startup for --help
    import structlog

    from ..config import find_settings, load_settings, parse_settings
    from ..exceptions import ConfigurationError
    from .generator import generate_terrain
    from .validation import validate_terrain

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )

    try:
        if args.config:
            settings = load_settings(find_settings(args.config))
        else:
            settings = parse_settings({})

        overrides = {
            key: value
            for key, value in (("width", args.width), ("height", args.height))
            if value is not None
        }
        if overrides:
            settings = parse_settings({**settings.model_dump(), **overrides})
    except (ConfigurationError, FileNotFoundError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(2)

    print(f"Generating {settings.width}x{settings.height} terrain with seed {args.seed}")
    print()

    start_time = time.time()
    try:
        data = generate_terrain(args.seed, settings)
    except ConfigurationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(2)
    gen_time = time.time() - start_time

    island = data.island
    print()
    print(f"Generation complete in {gen_time:.2f}s")
    print(f"Sea level: {island.sea_level:.4f} after {island.iterations} iterations")
    print(f"Land ratio: {island.land_ratio:.1%} (target {island.target_land_ratio:.1%})")
    print(f"Rivers: {data.river_count}")
    print("Biomes:")
    for name, count in data.biome_counts().items():
        print(f"  {name}: {count}")

    if args.validate:
        result = validate_terrain(data)
        for error in result.errors:
            print(f"  error: {error}")
        for warning in result.warnings:
            print(f"  warning: {warning}")
        if not result.passed:
            sys.exit(1)
        print("Validation passed")


if __name__ == "__main__":
    main()
