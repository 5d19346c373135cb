import json
import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# memory | local | mysql
STORE_BACKEND = os.getenv("STORE_BACKEND", "local")
LOCAL_STORE_DIR = os.getenv("LOCAL_STORE_DIR", "instance/store")
STORE_LATENCY_MS = int(os.getenv("STORE_LATENCY_MS", "50"))

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "jpcs_connect"),
}

# If enabled with the mysql backend, schema.sql is applied on startup (CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

CHECKIN_ALLOW_WALK_INS = bool(int(os.getenv("CHECKIN_ALLOW_WALK_INS", "0")))
CHECKIN_REQUIRE_REGISTRATION = bool(int(os.getenv("CHECKIN_REQUIRE_REGISTRATION", "1")))
CHECKIN_PER_DAY = bool(int(os.getenv("CHECKIN_PER_DAY", "1")))
CHECKIN_LOOKUP_KEY = os.getenv("CHECKIN_LOOKUP_KEY", "student_id")

ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
# werkzeug.security.generate_password_hash output
ADMIN_PASSWORD_HASH = os.getenv("ADMIN_PASSWORD_HASH")

# {"<credential>": {"uid": ..., "displayName": ..., "email": ..., "photoURL": ...}}
IDENTITY_CREDENTIALS = json.loads(os.getenv("IDENTITY_CREDENTIALS", "{}"))
