import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import CORS_ORIGINS, LOG_LEVEL
from .database import create_tables
from .routers import auth, commands, features, projects, stats, tasks

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Fifteen Minutes API",
    description="Projects, features and 15-minute tasks driven by a command line chat widget",
    version="1.0.0"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(projects.router, prefix="/api", tags=["projects"])
app.include_router(features.router, prefix="/api", tags=["features"])
app.include_router(tasks.router, prefix="/api", tags=["tasks"])
app.include_router(stats.router, prefix="/api", tags=["stats"])
app.include_router(commands.router, prefix="/api", tags=["commands"])

# Create tables on startup
@app.on_event("startup")
def on_startup():
    create_tables()
    logger.info("Database tables ready")

@app.get("/")
def read_root():
    return {"message": "Fifteen Minutes API"}

@app.get("/health")
def health_check():
    return {"status": "healthy"}
