import argparse
import json
import logging
import random
import sys
from typing import Optional

from ora_tools import ORAImage
from ora_tools.api.metadata import attribute_values
from ora_tools.errors import ORAError
from ora_tools.version import __version__

try:
    from IPython.lib.pretty import pprint
except ImportError:
    from pprint import pprint

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="ora-tools command line utility.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Be more verbose.")
    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", required=True)

    render_parser = subparsers.add_parser(
        "render", help="Composite selected layers as PNG"
    )
    render_parser.add_argument("input_file", help="Input ORA file")
    render_parser.add_argument("output_file", help="Output PNG file")
    source = render_parser.add_mutually_exclusive_group()
    source.add_argument(
        "--attributes",
        help="Comma-separated attribute values to match against layer names",
    )
    source.add_argument(
        "--metadata", help="JSON metadata file with an 'attributes' list"
    )
    render_parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on sub-stack names that do not resolve.",
    )
    render_parser.add_argument(
        "--workers", type=int, default=None, help="Threads decoding bitmaps."
    )

    show_parser = subparsers.add_parser("show", help="Show the stack tree")
    show_parser.add_argument("input_file", help="Input ORA file")

    random_parser = subparsers.add_parser(
        "random", help="Export a random layer bitmap"
    )
    random_parser.add_argument("input_file", help="Input ORA file")
    random_parser.add_argument("output_file", help="Output file")
    random_parser.add_argument("--seed", type=int, default=None, help="Random seed.")

    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> Optional[int]:
    args = parse_args(argv)

    logging.basicConfig(level=logging.WARNING)
    # Under ``python -m`` this module logs as ``__main__``, outside the package.
    level = logging.DEBUG if args.verbose else logging.INFO
    for name in ("ora_tools", __name__):
        logging.getLogger(name).setLevel(level)

    try:
        if args.command == "render":
            attributes = None
            if args.attributes is not None:
                attributes = attribute_values(
                    [x.strip() for x in args.attributes.split(",") if x.strip()]
                )
            elif args.metadata is not None:
                try:
                    with open(args.metadata, "r", encoding="utf-8") as f:
                        attributes = attribute_values(json.load(f))
                except (OSError, TypeError, ValueError) as e:
                    logger.error("Failed to read metadata %s: %s" % (args.metadata, e))
                    return 1
            with ORAImage.open(args.input_file) as ora:
                data = ora.render(
                    attributes=attributes, strict=args.strict, workers=args.workers
                )
            with open(args.output_file, "wb") as f:
                f.write(data)
            logger.info("Wrote %s" % args.output_file)

        elif args.command == "show":
            with ORAImage.open(args.input_file) as ora:
                pprint(ora)

        elif args.command == "random":
            with ORAImage.open(args.input_file) as ora:
                data = ora.random_entry(random.Random(args.seed))
            with open(args.output_file, "wb") as f:
                f.write(data)

    except ORAError as e:
        logger.error(str(e))
        return 1

    return None


if __name__ == "__main__":
    sys.exit(main())
