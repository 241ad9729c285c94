import logging

__all__ = ["set_logging"]


def set_logging(verbose=0):
    """verbose: 0 warnings only, 1 info, 2 or more debug."""
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARN
    logging.basicConfig(format="%(name)s: %(message)s", level=level)
    logging.getLogger("pseis").setLevel(level)
