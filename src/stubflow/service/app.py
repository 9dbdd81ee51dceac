"""FastAPI entrypoint for the stub service."""
from fastapi import FastAPI

from .handlers import operations_router

app = FastAPI(title="stubflow service", version="0.1.0")


@app.get("/health")
def health() -> dict:
    return {"ok": True}


app.include_router(operations_router)
