import os

SECRET_KEY = "test-secret"

MONGO_CONFIG = {
    "uri": os.getenv("MONGO_URI", "mongodb://localhost:27017"),
    "database": os.getenv("MONGO_DB_NAME", "hr_operations_test"),
    "timeout_ms": 500,
}

JWT_SECRET = "test-jwt-secret"

FRONTEND_URL = "http://localhost:5173"
PAYMENT_GATEWAY_SECRET = "test-gateway-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
AUTO_SEED_DB = False
