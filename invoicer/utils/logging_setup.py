"""
Application logging setup
"""
import logging
import os

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


def configure_logging(config, force=False):
    """
    Configure root logging from a config class.

    Logs go to stderr and, when LOG_TO_FILE is set, to app.log under LOGS_DIR.
    Returns the list of handlers installed.
    """
    handlers = [logging.StreamHandler()]
    if getattr(config, 'LOG_TO_FILE', False):
        logs_dir = config.LOGS_DIR
        if not os.path.exists(logs_dir):
            os.makedirs(logs_dir)
        handlers.append(logging.FileHandler(os.path.join(logs_dir, 'app.log')))

    logging.basicConfig(
        level=getattr(logging, str(config.LOG_LEVEL).upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=force,
    )
    logging.getLogger(__name__).debug(f"Logging configured at level {config.LOG_LEVEL}")
    return handlers
