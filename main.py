import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from beadview.config import get_settings
from beadview.middleware.timing import timing_middleware
from beadview.routes import graph_router, issues_router, metrics_router, repos_router

# Load environment variables from .env file
load_dotenv()

settings = get_settings()

app = FastAPI(title="beadview")

app.middleware("http")(timing_middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s | %(name)s | %(message)s",
)

app.include_router(repos_router)
app.include_router(issues_router)
app.include_router(graph_router)
app.include_router(metrics_router)
