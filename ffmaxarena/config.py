import os


class ConfigError(RuntimeError):
    """Raised at startup when a required backend setting is missing."""


class Config:
    raw_db_url = os.getenv("DATABASE_URL")

    if raw_db_url:
        if raw_db_url.startswith("postgres://"):
            raw_db_url = raw_db_url.replace("postgres://", "postgresql://", 1)
        SQLALCHEMY_DATABASE_URI = raw_db_url
    else:
        SQLALCHEMY_DATABASE_URI = "sqlite:///ffmaxarena.db"

    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me-dev-secret")

    # Hosted backend (identity provider + object storage)
    SUPABASE_URL = os.getenv("SUPABASE_URL")
    SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY")
    STORAGE_BUCKET = os.getenv("STORAGE_BUCKET", "tournament-posters")

    # Third-party form relay for submissions, verifications, contact, newsletter
    WEB3FORMS_ACCESS_KEY = os.getenv("WEB3FORMS_ACCESS_KEY")
    FORM_RELAY_URL = os.getenv("FORM_RELAY_URL", "https://api.web3forms.com/submit")

    HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "15"))


REQUIRED_SETTINGS = ("SUPABASE_URL", "SUPABASE_ANON_KEY")


def check_required_settings(config) -> None:
    missing = [name for name in REQUIRED_SETTINGS if not config.get(name)]
    if missing:
        raise ConfigError(
            "Missing required backend settings: "
            + ", ".join(missing)
            + ". Set them in the environment or in .env."
        )
