import argparse
import logging
import os

from dotenv import load_dotenv

from .calculator import run_calculators
from .config import ConfigError, config_to_options
from .config_main import CALCULATORS
from .items import load_items
from .periods import now_in_msecs
from .validation import find_inconsistencies

load_dotenv()

logger = logging.getLogger(__name__)


def configure_argument_parser():
    """Configure an ArgumentParser that manages command line options."""

    parser = argparse.ArgumentParser(
        description=(
            "Produce burn-down, velocity and change data from a snapshot of JIRA items."
        )
    )

    parser.add_argument("config", metavar="config.yml", nargs="?", help="Configuration file")
    parser.add_argument("-v", dest="verbose", action="store_true", help="Verbose output")
    parser.add_argument(
        "-vv",
        dest="very_verbose",
        action="store_true",
        help="Even more verbose output",
    )

    parser.add_argument(
        "--items",
        metavar="items.json",
        dest="items_file",
        help="JSON file with the items to report on, overriding `Items file`",
    )
    parser.add_argument(
        "--data-path",
        metavar="history",
        dest="data_path",
        help="Directory of dated item snapshots, overriding `Data path`",
    )
    parser.add_argument(
        "--output-directory",
        "-o",
        metavar="metrics",
        help=("Write output files to this directory, rather than the current working directory."),
    )

    return parser


def main():
    parser = configure_argument_parser()
    args = parser.parse_args()
    run_command_line(parser, args)


def run_command_line(parser, args):
    if not args.config:
        parser.print_usage()
        return

    logging.basicConfig(
        format="[%(asctime)s %(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        level=(
            logging.DEBUG
            if args.very_verbose
            else logging.INFO if args.verbose else logging.WARNING
        ),
    )

    # Configuration and settings
    # (command line arguments override config file options)

    logger.debug("Parsing options from %s", args.config)
    try:
        with open(args.config, encoding="utf-8") as config:
            options = config_to_options(
                config.read(), cwd=os.path.dirname(os.path.abspath(args.config))
            )
    except FileNotFoundError:
        print(
            f"Error: Configuration file '{args.config}' not found. "
            "Please provide a valid config file."
        )
        return

    settings = options["settings"]
    override_options(settings, args)
    if not settings["data_path"]:
        settings["data_path"] = os.environ.get("JIRA_BURNDOWN_DATA_PATH")

    for key in ("items_file", "data_path"):
        if settings[key]:
            settings[key] = os.path.abspath(settings[key])

    if not settings["items_file"]:
        raise ConfigError("No items file given in the configuration or with --items")

    try:
        items = load_items(settings["items_file"])
    except FileNotFoundError:
        print(f"Error: Items file '{settings['items_file']}' not found.")
        return

    logger.info("Loaded %d items from %s", len(items), settings["items_file"])
    find_inconsistencies(items)

    # Set output directory if required
    output_dir = options.get("output_directory")
    if args.output_directory:
        output_dir = args.output_directory
    if output_dir:
        logger.info("Changing working directory to %s", output_dir)
        os.makedirs(output_dir, exist_ok=True)
        os.chdir(output_dir)

    # One instant for the whole run, so every series ends in the same period
    if settings["now"] is None:
        settings["now"] = now_in_msecs()

    logger.info("Running calculators")
    return run_calculators(CALCULATORS, items, settings)


def override_options(options, arguments):
    """Update `options` dict with settings from `arguments`
    with the same key.
    """
    for key in options.keys():
        if getattr(arguments, key, None) is not None:
            options[key] = getattr(arguments, key)


if __name__ == "__main__":
    main()
