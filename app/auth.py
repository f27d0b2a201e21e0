from passlib.context import CryptContext

# pbkdf2_sha256 - no native deps
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

def hash_password(password: str) -> str:
    return pwd_context.hash(password)
