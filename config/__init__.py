import os

ENVIRONMENTS = {
    "prod": "config.production",
    "production": "config.production",
    "test": "config.testing",
    "testing": "config.testing",
}


def get_settings_module() -> str:
    # An explicit module path wins over APP_ENV
    explicit = os.getenv("ROOM_MONITOR_SETTINGS")
    if explicit:
        return explicit

    env = os.getenv("APP_ENV", "development").lower()
    return ENVIRONMENTS.get(env, "config.development")
