import os

from config.config import Config

SECRET_KEY = Config.SECRET_KEY
DB_CONFIG = Config.db_config()
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
CURRENCY_SYMBOL = Config.CURRENCY_SYMBOL
PUNCH_TIMEZONE = Config.PUNCH_TIMEZONE

DEBUG = bool(int(os.getenv("DEBUG", "1")))
