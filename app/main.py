import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from fastapi import FastAPI
from app.db.datasets import load_datasets

# Routers
from app.api.routers.core import router as core_router
from app.api.routers.network import router as network_router
from app.api.routers.characters import router as characters_router
from app.api.routers.view import router as view_router

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start loading both datasets; the API reports "loading" until they are in."""
    task = asyncio.create_task(load_datasets())
    try:
        yield
    finally:
        if not task.done():
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task


app = FastAPI(title="Character Network Explorer", version="0.1", lifespan=lifespan)

app.include_router(core_router)
app.include_router(network_router)
app.include_router(characters_router)
app.include_router(view_router)
