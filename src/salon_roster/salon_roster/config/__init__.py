import os


def get_settings_module() -> str:
    # APP_ENV selects the settings module, 'development' by default
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "salon_roster.config.production"

    if env in {"test", "testing"}:
        return "salon_roster.config.testing"

    return "salon_roster.config.development"
