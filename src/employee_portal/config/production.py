import os

from . import env_flag

SECRET_KEY = os.environ["SECRET_KEY"]

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "mysql")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "employee_portal"),
}

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")

IDENTITY_PROVIDER = os.getenv("IDENTITY_PROVIDER", "supabase")
SUPABASE_URL = os.getenv("SUPABASE_URL", "")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY", "")
IDENTITY_TIMEOUT_SECONDS = float(os.getenv("IDENTITY_TIMEOUT_SECONDS", "5"))
STATIC_TOKENS = ""

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "")

ATTENDANCE_LOCATION = os.getenv("ATTENDANCE_LOCATION", "Office - Jakarta Headquarters")
DAILY_SALES_TARGET = os.getenv("DAILY_SALES_TARGET", "20000000")
