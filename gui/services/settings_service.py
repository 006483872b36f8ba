import os
from pathlib import Path
from typing import Dict

from dotenv import set_key

from gui.utils.logging import log

ENV_PATH = Path(__file__).resolve().parents[2] / '.env'

CONNECTION_KEYS = ("CREATORHUB_API_URL", "CREATORHUB_SESSION_COOKIE", "CREATORHUB_COMPANY_ID")


def save_settings(values: Dict[str, str], env_path: Path = ENV_PATH) -> int:
    """Export connection settings to the process and persist them to .env."""
    saved = 0
    for key, value in values.items():
        if key not in CONNECTION_KEYS or value is None:
            continue
        os.environ[key] = value
        env_path.touch(exist_ok=True)
        set_key(str(env_path), key, value)
        saved += 1
    log(f"Saved {saved} settings to {env_path.name}")
    return saved
