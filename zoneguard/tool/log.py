import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level="INFO"):
    """Attach a stream handler to the zoneguard logger tree.

    Safe to call more than once; the level is updated and no second handler
    is added.
    """
    logger = logging.getLogger("zoneguard")
    logger.setLevel(level)
    if not any(getattr(h, "_zoneguard", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._zoneguard = True
        logger.addHandler(handler)
    return logger
