from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware


def create_app(ApplicationConfig) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        scheduler = None
        if ApplicationConfig.TOKEN_SWEEP_ENABLED:
            from src.adapter.services.expired_token_sweep_scheduler import ExpiredTokenSweepScheduler
            from src.adapter.services.system_clock import SystemClock
            from src.depends import AsyncSessionLocal

            scheduler = ExpiredTokenSweepScheduler(
                AsyncSessionLocal,
                SystemClock(),
                interval_minutes=ApplicationConfig.TOKEN_SWEEP_INTERVAL_MINUTES,
            )
            scheduler.start()
        yield
        if scheduler is not None:
            scheduler.shutdown()

    app = FastAPI(title="Auth Service", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import auth

    app.include_router(auth.router, tags=["Authentication"])

    return app
