# table_agent/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from table_agent.config import Settings
from table_agent.routes import router as api_router

logging.basicConfig(
    level=Settings.from_env().log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Table Agent")

origins = [
    "http://localhost",
    "http://localhost:8501",
    "http://127.0.0.1",
    "http://127.0.0.1:8501",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api")


@app.get("/")
def root():
    return {"message": "Table Agent API. POST a command to /api/command."}
