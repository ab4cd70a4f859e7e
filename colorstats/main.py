"""CLI entry point."""
import argparse
import sys

from .analyzer import ColorAnalyzer
from .config import load_config, preset_names
from .errors import ColorStatsError
from .utils.color import rgb_to_hex
from .utils.logger import get_logger, set_level

logger = get_logger("cli")

STATS = {
    "average": "average",
    "most": "most_used",
    "least": "least_used",
}


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Report the average, most used and least used colors of an image"
    )

    parser.add_argument("input", help="Image path, http(s) URL or data URI")

    parser.add_argument(
        "--preset",
        choices=preset_names(),
        default=None,
        help="Use a preset configuration",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to custom YAML config file",
    )
    parser.add_argument(
        "--sample",
        type=int,
        default=None,
        help="Inspect every Nth pixel (1 = every pixel)",
    )
    parser.add_argument(
        "--max-dimension",
        type=int,
        default=None,
        help="Thumbnail the image to at most this many pixels per side first",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait when fetching a URL",
    )
    parser.add_argument(
        "--stat",
        choices=["average", "most", "least", "all"],
        default="all",
        help="Which statistic to print",
    )
    parser.add_argument(
        "--hex",
        action="store_true",
        help="Print #rrggbb instead of rgb(R, G, B)",
    )

    args = parser.parse_args(argv)

    # Build config overrides from CLI args
    overrides = {}

    if args.sample is not None:
        overrides.setdefault("analysis", {})["sample"] = args.sample
    if args.max_dimension is not None:
        overrides.setdefault("decoding", {})["max_dimension"] = args.max_dimension
    if args.timeout is not None:
        overrides.setdefault("decoding", {})["timeout"] = args.timeout

    names = list(STATS) if args.stat == "all" else [args.stat]

    def emit(label):
        def _print(color):
            print(f"{label}: {rgb_to_hex(color) if args.hex else color}")
        return _print

    try:
        config = load_config(
            config=overrides if overrides else None,
            config_path=args.config,
            preset=args.preset,
        )
        set_level(config.get("logging", {}).get("level", "INFO"))

        analyzer = ColorAnalyzer(args.input, config=config)

        for name in names:
            getattr(analyzer, STATS[name])(emit(name))

    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        sys.exit(1)
    except ColorStatsError as e:
        logger.error(f"Color analysis failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
