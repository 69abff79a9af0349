import os

SECRET_KEY = os.environ.get("SECRET_KEY", "TU_SECRET_KEY_TEMPORAL")
ALGORITHM = os.environ.get("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = float(os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", 120))
JWT_ISSUER = os.environ.get("JWT_ISSUER", "todo-api")
JWT_AUDIENCE = os.environ.get("JWT_AUDIENCE", "todo-api-clients")

# bcrypt work factor; tests lower it to keep the suite fast
BCRYPT_ROUNDS = int(os.environ.get("BCRYPT_ROUNDS", 12))

# Default to local SQLite for dev/tests; override via env in Docker/Prod
DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./todo.db")

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
