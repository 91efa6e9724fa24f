import os


class Config:
    """Values shared by every environment; environment modules override as needed."""

    SECRET_KEY = os.environ.get("SECRET_KEY") or "dev-secret-key"

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "attendance_engine")

    # Apply database/schema.sql on startup (CREATE ... IF NOT EXISTS)
    AUTO_INIT_DB = bool(int(os.environ.get("AUTO_INIT_DB", "0")))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Prefix used in deduction remarks shown to the payroll office
    CURRENCY_SYMBOL = os.environ.get("CURRENCY_SYMBOL", "₹")

    # Zone used to turn device {seconds} timestamps into wall-clock punches
    PUNCH_TIMEZONE = os.environ.get("PUNCH_TIMEZONE", "Asia/Kolkata")

    @classmethod
    def db_config(cls) -> dict:
        return {
            "host": cls.DB_HOST,
            "port": cls.DB_PORT,
            "user": cls.DB_USER,
            "password": cls.DB_PASSWORD,
            "database": cls.DB_NAME,
        }
