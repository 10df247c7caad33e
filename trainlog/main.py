from fastapi import FastAPI
from loguru import logger

from trainlog.api.heatmap import router as heatmap_router
from trainlog.api.training_hours import router as training_hours_router
from trainlog.core.logger import setup_logger
from trainlog.core.settings import settings

setup_logger(level=settings.log_level, log_file=settings.log_file or None)

app = FastAPI(title="Training Log Heat Map")

app.include_router(heatmap_router)
app.include_router(training_hours_router)

logger.info(f"Routers registered, timezone={settings.timezone or 'host local'}")


@app.get("/health")
def health():
    return {"status": "ok"}
