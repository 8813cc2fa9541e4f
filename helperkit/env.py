import os
from typing import Optional

from dotenv import load_dotenv


def get_env(key: str, fallback: str) -> str:
    """Get the environment variable key, or fallback when it is unset or empty."""
    value = os.getenv(key)

    if not value:
        value = fallback

    return value


def load_env_file(path: Optional[str] = None, override: bool = False) -> bool:
    """Load a .env file into the process environment."""
    return load_dotenv(dotenv_path=path, override=override)
