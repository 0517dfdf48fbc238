import logging


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(app):
    level = getattr(logging, app.config.get("LOG_LEVEL", "INFO"), logging.INFO)

    logger = logging.getLogger("blogapi")
    logger.setLevel(level)

    # create_app may run more than once per process (tests)
    if not any(getattr(h, "_blogapi_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._blogapi_handler = True
        logger.addHandler(handler)

    app.logger.setLevel(level)
    return logger
