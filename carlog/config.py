import os


class Config:
    """Application configuration from environment variables."""

    # Logbook file used by the CLI and the web app
    DATA_FILE = os.environ.get("CARLOG_DATA_FILE", "logbook.json")

    # Flask
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-prod")
    FLASK_HOST = os.environ.get("FLASK_HOST", "0.0.0.0")
    # 5001 avoids the macOS AirPlay receiver on 5000
    FLASK_PORT = int(os.environ.get("FLASK_PORT", 5001))

    # Logging
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
