import os

import dotenv

dotenv.load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


OUTPUT_DIR: str = os.getenv("OUTPUT_DIR", ".")

# Evaluate formulas that carry no cached result using the ``formulas`` library
COMPUTE_FORMULAS: bool = _env_flag("COMPUTE_FORMULAS", "true")

FORMULA_TIMEOUT_SECONDS: int = int(os.getenv("FORMULA_TIMEOUT_SECONDS", "30"))

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
