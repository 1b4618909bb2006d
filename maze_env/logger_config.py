import logging.config
import sys


def configure_logging(level: str = "INFO"):
    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,

        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S"
            },
        },

        "handlers": {
            "console": {
                "level": level,
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "stream": sys.stdout,
            },
        },

        "loggers": {
            "": {
                "handlers": ["console"],
                "level": level,
                "propagate": True
            },
            # O loop do pygame não precisa do DEBUG das buscas
            "maze_problems": {
                "handlers": ["console"],
                "level": "WARNING",
                "propagate": False
            },
        }
    }

    logging.config.dictConfig(logging_config)
