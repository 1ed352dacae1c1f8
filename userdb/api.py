"""
FastAPI app entry point aggregating routers under userdb/routes.
Keep as `uvicorn userdb.api:app`.
"""
from __future__ import annotations


from fastapi import FastAPI

from .services.user_svc import ensure_user_schema


app = FastAPI(title="userdb-api", version="0.1.0")


@app.on_event("startup")
def on_startup():
    ensure_user_schema()


from .routes import base as base_routes
from .routes import users as users_routes

app.include_router(base_routes.router)
app.include_router(users_routes.router)
