import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sentry_sdk.integrations.asgi import SentryAsgiMiddleware

from src.core.middleware import register_middlewares
from src.main.config import config
from src.main.lifespan import lifespan
from src.main.presentation import include_exceptions_handlers, include_routers

# Request timing middleware already logs every call
logging.getLogger("uvicorn.access").disabled = True

OPENAPI_TAGS = [
    {
        "name": "Tokens",
        "description": "Issue, inspect and revoke signed session tokens.",
    },
    {"name": "System", "description": "Liveness of the service and its store."},
]


def _add_cors(application: FastAPI) -> None:
    application.add_middleware(
        CORSMiddleware,  # noqa
        allow_origins=config.app.CORS_ALLOWED_ORIGINS,
        allow_credentials=config.app.CORS_ALLOW_CREDENTIALS,
        allow_methods=config.app.CORS_ALLOWED_METHODS,
        allow_headers=config.app.CORS_ALLOWED_HEADERS,
        expose_headers=config.app.CORS_EXPOSE_HEADERS,
    )


def get_application() -> FastAPI:
    application = FastAPI(
        title=config.app.PROJECT_NAME,
        debug=config.app.DEBUG,
        version=config.app.VERSION,
        openapi_tags=OPENAPI_TAGS,
        docs_url="/docs" if config.app.DEBUG else None,
        redoc_url=None,
        lifespan=lifespan,
    )

    register_middlewares(application)
    _add_cors(application)
    include_exceptions_handlers(application)
    include_routers(application)

    # Outermost, so errors escaping the other middlewares are still reported
    application.add_middleware(SentryAsgiMiddleware)

    return application


app = get_application()
