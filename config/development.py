import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

MONGO_CONFIG = {
    "uri": os.getenv("MONGO_URI", "mongodb://localhost:27017"),
    "database": os.getenv("MONGO_DB_NAME", "hr_operations"),
    "timeout_ms": int(os.getenv("MONGO_TIMEOUT_MS", "5000")),
}

# Tokens are issued elsewhere; this service only verifies them.
JWT_SECRET = os.getenv("JWT_SECRET", "dev-jwt-secret")

FRONTEND_URL = os.getenv("FRONTEND_URL", "")
PAYMENT_GATEWAY_SECRET = os.getenv("PAYMENT_GATEWAY_SECRET", "")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Create indexes and seed default departments on startup (idempotent)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo employees on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
