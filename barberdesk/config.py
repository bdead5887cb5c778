import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./barberdesk.db")

# Supabase Auth (identity provider for the admin area)
SUPABASE_URL = os.getenv("SUPABASE_URL", "").rstrip("/")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY")
AUTH_TIMEOUT_SECONDS = float(os.getenv("AUTH_TIMEOUT_SECONDS", "10"))

# Redis cache - leave unset to disable caching
REDIS_URL = os.getenv("REDIS_URL")

# Cloudflare R2 Configuration (catalog images)
R2_ACCOUNT_ID = os.getenv("R2_ACCOUNT_ID")
R2_ACCESS_KEY_ID = os.getenv("R2_ACCESS_KEY_ID")
R2_SECRET_ACCESS_KEY = os.getenv("R2_SECRET_ACCESS_KEY")
R2_BUCKET_NAME = os.getenv("R2_BUCKET_NAME", "barberdesk")
R2_PUBLIC_URL = os.getenv("R2_PUBLIC_URL", "").rstrip("/")

# Business identity used in reports and file names
BUSINESS_NAME = os.getenv("BUSINESS_NAME", "302 Barber")
BUSINESS_TIMEZONE = os.getenv("BUSINESS_TIMEZONE", "America/Asuncion")

# Formatting: Paraguayan guaraní has no minor unit
LOCALE = os.getenv("LOCALE", "es_PY")
CURRENCY = os.getenv("CURRENCY", "PYG")

# Hourly booking slots offered on the public calendar
BOOKING_SLOTS = [
    slot.strip()
    for slot in os.getenv(
        "BOOKING_SLOTS", "09:00,10:00,11:00,12:00,13:00,14:00,15:00,16:00,17:00,18:00,19:00"
    ).split(",")
    if slot.strip()
]

# Frontend base URL and CORS origins
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", f"{FRONTEND_URL},http://localhost:8080").split(",")
