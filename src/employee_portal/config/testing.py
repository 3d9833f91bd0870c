SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

STORAGE_BACKEND = "memory"

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "employee_portal_test",
}

AUTO_INIT_DB = False
AUTO_SEED_DB = True

IDENTITY_PROVIDER = "static"
SUPABASE_URL = "http://identity.test"
SUPABASE_ANON_KEY = "test-anon-key"
IDENTITY_TIMEOUT_SECONDS = 1.0
STATIC_TOKENS = "admin-token:admin@example.com,staff-token:staff@example.com"

CORS_ORIGINS = "http://localhost:5173"

ATTENDANCE_LOCATION = "Office - Jakarta Headquarters"
DAILY_SALES_TARGET = "20000000"
