import logging

from fastapi import FastAPI

from .config import get_settings
from .routers import products

settings = get_settings()
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Shop Admin", version="0.1.0")


@app.get("/health")
def healthcheck():
    return {"status": "ok", "env": settings.env}


app.include_router(products.router, prefix=f"/{settings.admin_path.strip('/')}", tags=["products"])
