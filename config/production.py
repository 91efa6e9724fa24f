import os

from config.config import Config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
DB_CONFIG = Config.db_config()
AUTO_INIT_DB = Config.AUTO_INIT_DB
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
CURRENCY_SYMBOL = Config.CURRENCY_SYMBOL
PUNCH_TIMEZONE = Config.PUNCH_TIMEZONE

DEBUG = False
