import os, hmac, bcrypt, jwt
from datetime import datetime, timedelta, timezone
from dotenv import load_dotenv

load_dotenv()

JWT_SECRET = os.getenv("JWT_SECRET", "dev_secret_change_me")
JWT_ALG = "HS256"
ADMIN_TOKEN_HOURS = int(os.getenv("ADMIN_TOKEN_HOURS", "24"))

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "international@ajman.ac.ae")
ADMIN_PASSWORD_HASH = os.getenv("ADMIN_PASSWORD_HASH")  # bcrypt, preferred in production
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")            # plain, dev only

def hash_password(raw: str) -> str:
    return bcrypt.hashpw(raw.encode(), bcrypt.gensalt()).decode()

def verify_password(raw: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(raw.encode(), hashed.encode())
    except ValueError:
        return False

def validate_admin_credentials(email: str, password: str) -> bool:
    if email.strip().lower() != ADMIN_EMAIL.lower():
        return False
    if ADMIN_PASSWORD_HASH:
        return verify_password(password, ADMIN_PASSWORD_HASH)
    if ADMIN_PASSWORD:
        return hmac.compare_digest(password.encode(), ADMIN_PASSWORD.encode())
    return False

def create_token(sub: str, expires_delta: timedelta = timedelta(hours=ADMIN_TOKEN_HOURS)) -> str:
    now = datetime.now(timezone.utc)
    to_encode = {
        "sub": sub,
        "role": "admin",
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(to_encode, JWT_SECRET, algorithm=JWT_ALG)

def decode_token(token: str) -> dict:
    return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALG])
