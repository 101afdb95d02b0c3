# config/config.py
import os
from dotenv import load_dotenv

# Load .env file from project root
load_dotenv()

class Config:
    # --- App settings ---
    DEBUG = os.getenv("FLASK_DEBUG", "false").lower() in ("1", "true", "yes")
    APP_HOST = os.getenv("APP_HOST", "0.0.0.0")
    APP_PORT = int(os.getenv("APP_PORT", 3000))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # --- CORS Settings ---
    # Accept comma-separated values: e.g., "http://localhost:3000,http://127.0.0.1:3000"
    ALLOWED_ORIGINS = [
        o.strip() for o in os.getenv("ALLOWED_ORIGINS", "http://localhost:3000").split(",")
    ]

    # --- Folders ---
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "uploads")
    REPORT_FOLDER = os.getenv("REPORT_FOLDER", "reports")
    VIEWS_FOLDER = os.getenv(
        "VIEWS_FOLDER", os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "views")
    )
    # TTF covering the scripts used in student data (e.g. Noto Sans Devanagari); unset uses Helvetica
    REPORT_FONT_PATH = os.getenv("REPORT_FONT_PATH") or None

    # --- Sessions / credentials ---
    SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "sr_session")
    SESSION_LIFETIME_MINUTES = int(os.getenv("SESSION_LIFETIME_MINUTES", 480))
    SESSION_COOKIE_SECURE = os.getenv("SESSION_COOKIE_SECURE", "false").lower() in ("1", "true", "yes")
    # Any method accepted by werkzeug.security.generate_password_hash
    PASSWORD_HASH_METHOD = os.getenv("PASSWORD_HASH_METHOD", "scrypt")

    # --- Database ---
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./students.db")
