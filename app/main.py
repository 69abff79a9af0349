import logging

from fastapi import FastAPI
from app import config
from app.database import init_db
from app.errors import register_error_handlers
from app.routers import auth, tasks
from app.utils.tokens import TokenConfig, TokenService


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


setup_logging(config.LOG_LEVEL)
init_db()

app = FastAPI(title="Todo API")

# Signing key and claims are fixed for the lifetime of the process
app.state.token_service = TokenService(
    TokenConfig(
        secret_key=config.SECRET_KEY,
        issuer=config.JWT_ISSUER,
        audience=config.JWT_AUDIENCE,
        algorithm=config.ALGORITHM,
        expire_minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES,
    )
)

# API routers
app.include_router(auth.router)
app.include_router(tasks.router)

register_error_handlers(app)


@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}
