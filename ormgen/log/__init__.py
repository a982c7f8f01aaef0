from logging import FileHandler, Formatter, Handler, Logger, StreamHandler, getLogger

from ormgen.config import LogConfig

LOGGER_NAME = "ormgen"


def _make_handler(config: LogConfig) -> Handler:
    if config.output:
        handler = FileHandler(config.output, encoding="utf-8")
    else:
        handler = StreamHandler()

    handler.setFormatter(Formatter(config.format))
    handler.setLevel(config.level)
    return handler


def setup(config: LogConfig, force: bool = False):
    """
    Set up logging for the generator.

    All ormgen modules log under the "ormgen" logger, which gets a single
    handler writing either to the configured file or to stderr.

    Calling this again is a no-op once a handler is installed, unless
    `force` is set, in which case existing handlers are dropped and
    logging is reconfigured from `config`.
    """

    logger = getLogger(LOGGER_NAME)
    if logger.handlers and not force:
        return

    while logger.handlers:
        handler = logger.handlers[0]
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(config.level)
    logger.addHandler(_make_handler(config))


def get_logger(name) -> Logger:
    """
    Get log function for a given (module) name

    :return: Logger instance
    """
    return getLogger(name)


__all__ = ["setup", "get_logger"]
