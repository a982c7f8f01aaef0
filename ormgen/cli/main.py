import sys

from ormgen.cli.helpers import init, load_schema, show_config, write_files
from ormgen.generator.schema_generator import SchemaGenerator
from ormgen.log import get_logger
from ormgen.ui.console import PlainConsoleUI

log = get_logger(__name__)


def run_ormgen() -> int:
    """
    Run the generator from the command line.

    :return: Process exit code (0 on success, -1 on failure).
    """
    config, args = init()
    if not config:
        return -1

    if args.show_config:
        show_config()
        return 0

    if not args.input:
        print("No schema description given; use --input to specify one", file=sys.stderr)
        return -1

    schema = load_schema(args.input)
    if schema is None:
        return -1

    # Generated code goes to stdout when there is no output directory
    ui = PlainConsoleUI(None if args.output else sys.stderr)
    generator = SchemaGenerator(ui, config)
    files = generator.generate(schema)
    write_files(files, args.output)

    success = len(files) == len(schema.entities)
    if not success:
        log.warning("Some schema modules were not generated")
    return 0 if success else -1


if __name__ == "__main__":
    sys.exit(run_ormgen())
