import logging
import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

load_dotenv()

# Configure file + console logging
log_file = os.getenv("LOG_FILE", os.path.join(os.path.dirname(__file__), "..", "logs.txt"))
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[
        logging.FileHandler(log_file, mode="a"),
        logging.StreamHandler(),
    ],
)
logger = logging.getLogger(__name__)

from valuator.api.routes import router, tools_router

app = FastAPI(title="Private Company Valuator", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "http://localhost:5173").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)
app.include_router(tools_router)

logger.info("Private Company Valuator started")


@app.get("/")
async def root():
    return {"message": "Private Company Valuator API", "docs": "/docs"}
