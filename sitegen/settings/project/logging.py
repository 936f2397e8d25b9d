import environ

env = environ.FileAwareEnv()
DEVELOPMENT = env.bool("DEVELOPMENT", default=True)


LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": '%(levelname)s %(asctime)s (%(pathname)s %(funcName)s): "%(message)s"'
        },
        "simple": {"format": "%(levelname)s %(message)s"},
    },
    "handlers": {
        "null": {"level": "DEBUG", "class": "logging.NullHandler"},
        "console": {
            "level": "DEBUG",
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "loggers": {
        # This is the one that's used practically everywhere in the code.
        "sitegen": {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": True,
        },
    },
}

if DEVELOPMENT:
    # Verbose logs for devs
    LOGGING["handlers"]["console"]["formatter"] = "verbose"
