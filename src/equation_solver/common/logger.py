"""Shared logger used across the equation solver."""
import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger: logging.Logger = logging.getLogger("equation_solver")


def configure_logging(verbose: bool = False) -> None:
    """
    Attach a console handler to the root logger.

    :param bool verbose: Log at DEBUG level when True, WARNING otherwise
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )
