# table_agent/config.py
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel


class Settings(BaseModel):
    groq_api_key: Optional[str] = None
    model: str = "llama-3.1-8b-instant"
    temperature: float = 0.1
    max_tokens: int = 500
    log_level: str = "INFO"
    api_url: str = "http://127.0.0.1:8000/api"

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "Settings":
        """Read settings from the process environment, after loading a .env file if present."""
        if load_env_file:
            load_dotenv()
        env = os.environ
        values = {
            "groq_api_key": env.get("GROQ_API_KEY"),
            "model": env.get("TABLE_AGENT_MODEL"),
            "temperature": env.get("TABLE_AGENT_TEMPERATURE"),
            "max_tokens": env.get("TABLE_AGENT_MAX_TOKENS"),
            "log_level": env.get("TABLE_AGENT_LOG_LEVEL"),
            "api_url": env.get("TABLE_AGENT_API_URL"),
        }
        return cls(**{k: v for k, v in values.items() if v is not None})
