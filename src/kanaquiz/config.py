import os

PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))


class Settings:
    PROJECT_NAME: str = "kanaquiz"
    DEBUG: bool = os.environ.get("KANAQUIZ_DEBUG", "") == "1"
    LOG_DIR: str = os.environ.get("KANAQUIZ_LOG_DIR", "log")
    LOG_FILE: str = "kanaquiz.log"
    DB_DIR: str = os.environ.get("KANAQUIZ_DB_DIR", "db")
    DB_FILE: str = "kanaquiz.db"
    DATA_DIR: str = os.path.join(PACKAGE_DIR, "data")
    TEMPLATE_DIR: str = os.path.join(PACKAGE_DIR, "templates")
    STATIC_DIR: str = os.path.join(PACKAGE_DIR, "static")
    BATCH_SIZE: int = int(os.environ.get("KANAQUIZ_BATCH_SIZE", "50"))
    OPTION_COUNT: int = 4
    DEFAULT_MODE: str = "hiragana"
    SESSION_COOKIE_NAME: str = "kana_session_id"
    SESSION_TIMEOUT_MINUTES: int = 120
    ROOT_PATH: str = os.environ.get("ROOT_PATH", "")


settings = Settings()
