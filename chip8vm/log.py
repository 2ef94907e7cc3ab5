import logging

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


def SETUP_LOGGING(level=logging.WARNING):
    """
    Send log records from every chip8vm module to stderr
    """
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger('chip8vm')
    root.handlers[:] = [handler]
    root.setLevel(level)
    root.propagate = False
    return root
