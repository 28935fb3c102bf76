"""
Environment settings loaded from .env file.
"""
import os
from dotenv import load_dotenv

load_dotenv()


# --- Logging ---
ADM_LOG_BUILDS: bool = os.getenv("ADM_LOG_BUILDS", "false").lower() == "true"

# --- Representation ---
# 0 = unlimited; longer sequences are abbreviated in repr() output.
ADM_REPR_MAX_ITEMS: int = int(os.getenv("ADM_REPR_MAX_ITEMS", "0"))
