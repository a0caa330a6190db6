import os
from typing import Optional

from dotenv import load_dotenv

FALSY = ("0", "false", "no", "off")

def load_env_config(env_file: Optional[str] = None):
    """Load profiler settings from environment variables (a .env file is honored)"""
    load_dotenv(env_file, override=False)

    return {
        "enable": os.getenv("TIMESTATS_ENABLE", "1").strip().lower() not in FALSY,
        "runs_root": os.getenv("TIMESTATS_RUNS_DIR", "runs"),  # fallback to default
    }
