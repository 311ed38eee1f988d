from __future__ import annotations

from fastapi import FastAPI

from .bootstrap import initialize_application
from .routers import settings as settings_router


app = FastAPI(title="Wallet Auth")
app.include_router(settings_router.router)


@app.on_event("startup")
def _startup():
    initialize_application()
