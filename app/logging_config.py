import logging, logging.config
from typing import Optional

def setup_logging(level: str = "INFO", access_log: bool = True, engine_level: Optional[str] = None):
    """Configure console logging for the API, the CLI and the stats engine.

    ``engine_level`` lets the aggregation engine run quieter or louder than the
    rest of the app (season-year collisions and duplicate standings are logged
    there at WARNING).
    """
    level = level.upper()
    engine_level = (engine_level or level).upper()
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
                        "datefmt": "%H:%M:%S"},
            # Uvicorn pre-formats access log lines
            "access_simple": {"format": "%(message)s"},
        },
        "handlers": {
            "console": {"class": "logging.StreamHandler", "formatter": "default"},
            "access":  {"class": "logging.StreamHandler", "formatter": "access_simple"},
        },
        "loggers": {
            "uvicorn.error":  {"level": level, "handlers": ["console"], "propagate": False},
            "uvicorn.access": {"level": ("INFO" if access_log else "WARNING"),
                               "handlers": ["access"], "propagate": False},
            "app.services.manager_stats": {"level": engine_level},
            "app.services.league_data_service": {"level": level},
        },
        "root": {"level": level, "handlers": ["console"]},
    })
