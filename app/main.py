import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from app.db import DB_NAME, MONGO_URL, connect_to_mongo, close_mongo_connection
from app.crs.default_tables import DEFAULT_TABLES
from app.crs.tables import load_tables
from routes.crs import router as crs_router

load_dotenv()

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
logger = logging.getLogger(__name__)

app = FastAPI(
    docs_url="/api/v1/docs",
    redoc_url="/api/v1/redoc",
    openapi_url="/api/v1/openapi.json"
)

app.include_router(crs_router, prefix="/api/v1")

app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "http://localhost:5173").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
async def startup_event():
    mongo_url = os.getenv("MONGO_URL", MONGO_URL)
    db_name = os.getenv("DB_NAME", DB_NAME)
    tables_path = os.getenv("CRS_TABLES_PATH")
    app.state.crs_tables = load_tables(tables_path) if tables_path else DEFAULT_TABLES
    logger.info(f"CRS tables loaded: version={app.state.crs_tables.version}")
    connect_to_mongo(app, mongo_url, db_name)

@app.on_event("shutdown")
async def shutdown_event():
    close_mongo_connection(app)

@app.get("/health")
async def health():
    return {"status": "ok", "tables_version": getattr(app.state, "crs_tables", DEFAULT_TABLES).version}
