import logging

logger = logging.getLogger("report_engine")
logger.addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Logger under the package namespace; module names are used as-is."""
    if name == logger.name or name.startswith(f"{logger.name}."):
        return logging.getLogger(name)
    return logger.getChild(name)
