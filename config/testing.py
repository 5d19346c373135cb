from werkzeug.security import generate_password_hash

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

STORE_BACKEND = "memory"
STORE_LATENCY_MS = 0

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "jpcs_connect_test",
}

AUTO_INIT_DB = False

CHECKIN_ALLOW_WALK_INS = False
CHECKIN_REQUIRE_REGISTRATION = True
CHECKIN_PER_DAY = True
CHECKIN_LOOKUP_KEY = "student_id"

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD_HASH = generate_password_hash("admin-pass")

IDENTITY_CREDENTIALS = {
    "token-ana": {"uid": "uid-ana", "displayName": "Ana Cruz", "email": "ana@school.edu"},
    "token-ben": {"uid": "uid-ben", "displayName": "Ben Reyes", "email": "ben@school.edu"},
}
