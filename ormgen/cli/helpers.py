import os
import os.path
import sys
from argparse import ArgumentParser, Namespace
from typing import Optional

from pydantic import ValidationError

from ormgen.config import Config, get_config, loader
from ormgen.config.version import get_version
from ormgen.log import get_logger, setup
from ormgen.schema import Schema

log = get_logger(__name__)


def parse_arguments() -> Namespace:
    """
    Parse command-line arguments.

    Available arguments:
        --help: Show the help message
        --config: Path to the configuration file
        --show-config: Output the current configuration to stdout
        --level: Log level (debug,info,warning,error,critical)
        --input: Path to the JSON schema description
        --output: Directory to write generated files to (default: print to stdout)
        --version: Show the version and exit
    :return: Parsed arguments object.
    """
    version = get_version()

    parser = ArgumentParser(description="Generate ORM schema modules from a database schema description")
    parser.add_argument("--config", help="Path to the configuration file", default="config.json")
    parser.add_argument("--show-config", help="Output the current configuration to stdout", action="store_true")
    parser.add_argument("--level", help="Log level (debug,info,warning,error,critical)", required=False)
    parser.add_argument("--input", help="Path to the JSON schema description", required=False)
    parser.add_argument("--output", help="Directory to write generated files to", required=False)
    parser.add_argument("--version", action="version", version=version)
    return parser.parse_args()


def load_config(args: Namespace) -> Optional[Config]:
    """
    Load ormgen JSON configuration file and apply command-line arguments.

    :param args: Command-line arguments (at least `config` must be present).
    :return: Configuration object, or None if config couldn't be loaded.
    """
    if not os.path.isfile(args.config):
        print(f"Configuration file not found: {args.config}; using default", file=sys.stderr)
        config = get_config()
    else:
        try:
            config = loader.load(args.config)
        except ValueError as err:
            print(f"Error parsing config file {args.config}: {err}", file=sys.stderr)
            return None

    if args.level:
        config.log.level = args.level.upper()

    try:
        Config.model_validate(config.model_dump())
    except ValueError as err:
        print(f"Configuration error: {err}", file=sys.stderr)
        return None

    return config


def load_schema(path: str) -> Optional[Schema]:
    """
    Load a schema description from a JSON file.

    :param path: Path to the schema description.
    :return: Schema object, or None if the file couldn't be read or parsed.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = f.read()
    except OSError as err:
        print(f"Error reading schema file {path}: {err}", file=sys.stderr)
        return None

    try:
        return Schema.model_validate_json(data)
    except ValidationError as err:
        print(f"Error parsing schema file {path}: {err}", file=sys.stderr)
        return None


def write_files(files: dict[str, str], output: Optional[str]):
    """
    Write generated files to the output directory, or to stdout.

    :param files: A flat dictionary with file name => content structure.
    :param output: Output directory (created if needed); if None, files are printed.
    """
    if not output:
        for file_name, content in files.items():
            print(f"# {file_name}")
            print(content)
        return

    os.makedirs(output, exist_ok=True)
    for file_name, content in files.items():
        path = os.path.join(output, file_name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        log.debug(f"Wrote {path}")


def show_config():
    """
    Print the current configuration to stdout.
    """
    cfg = get_config()
    print(cfg.model_dump_json(indent=2))


def init() -> tuple[Optional[Config], Namespace]:
    """
    Initialize the application.

    Parses command-line arguments, loads configuration and sets up logging.

    :return: Tuple with configuration (None if it couldn't be loaded) and command-line arguments.
    """
    args = parse_arguments()
    config = load_config(args)
    if not config:
        return (None, args)

    setup(config.log, force=True)
    return (config, args)


__all__ = ["parse_arguments", "load_config", "load_schema", "write_files", "show_config", "init"]
