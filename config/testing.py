import os

SECRET_KEY = "test-secret"
DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_engine_test"),
}
AUTO_INIT_DB = False
LOG_LEVEL = "WARNING"
CURRENCY_SYMBOL = "₹"
PUNCH_TIMEZONE = "UTC"

DEBUG = False
TESTING = True
