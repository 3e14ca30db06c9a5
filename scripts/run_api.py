"""Run the ClearVest FastAPI server locally."""
from __future__ import annotations

import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

import uvicorn  # type: ignore

from clearvest.config_loader import load_settings

settings = load_settings()

logging.basicConfig(
    level=logging.WARNING,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logging.getLogger('clearvest').setLevel(settings.log_level.upper())
logging.getLogger('uvicorn').setLevel(logging.WARNING)


if __name__ == "__main__":
    uvicorn.run(
        "clearvest.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        reload_dirs=[str(SRC_PATH)]
    )
