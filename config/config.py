import os


def db_config_from_env(default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "office_presence"),
    }


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.getenv(name, default)))


PLANNING_WINDOW_DAYS = int(os.getenv("PLANNING_WINDOW_DAYS", "90"))
SESSION_DAYS = int(os.getenv("SESSION_DAYS", "7"))
