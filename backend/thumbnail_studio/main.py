from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI

# Load backend/.env before anything reads the environment.
_backend_dir = Path(__file__).resolve().parents[1]
load_dotenv(dotenv_path=_backend_dir / ".env", override=False)

from thumbnail_studio.core.config import Settings
from thumbnail_studio.core.logger import setup_logger

from thumbnail_studio.api import composite

logger = setup_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings.from_env()
    app.state.settings = settings
    app.state.executor = ThreadPoolExecutor(max_workers=settings.composite_workers)

    logger.info("Starting Product Thumbnail Studio...")
    logger.info(f"Compositing workers: {settings.composite_workers}, max variations: {settings.max_variations}")

    yield

    logger.info("Shutting down...")
    app.state.executor.shutdown(wait=True)

app = FastAPI(
    title="Product Thumbnail Studio",
    version="1.0.0",
    lifespan=lifespan
)

app.include_router(composite.router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("thumbnail_studio.main:app", host="0.0.0.0", port=8000, reload=True)
