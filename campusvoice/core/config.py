import os

# --- Database ---
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./campusvoice.db")
DATABASE_ECHO = os.getenv("DATABASE_ECHO", "false").lower() == "true"

# --- Identity provider (external users service) ---
USERS_SERVICE_API_URL = os.getenv("USERS_SERVICE_API_URL", "http://localhost:9000")
USERS_SERVICE_API_KEY = os.getenv("USERS_SERVICE_API_KEY", "")
USERS_SERVICE_TIMEOUT = float(os.getenv("USERS_SERVICE_TIMEOUT", "10"))

# --- Session cookie ---
SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "campusvoice_session_token")
SESSION_MAX_AGE = int(os.getenv("SESSION_MAX_AGE", str(60 * 24 * 60 * 60)))  # 60 days

# --- HTTP ---
HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "8000"))
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]

# --- Complaints ---
COMPLAINT_ID_MAX_ATTEMPTS = int(os.getenv("COMPLAINT_ID_MAX_ATTEMPTS", "5"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
