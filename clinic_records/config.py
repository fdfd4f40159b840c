"""Environment-driven settings for the clinic records tool."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(override=True)

DATA_DIR = Path(os.getenv("CLINIC_DATA_DIR", Path(__file__).parent / "data"))
LOG_LEVEL = os.getenv("CLINIC_LOG_LEVEL", "WARNING").upper()
CLINIC_NAME = os.getenv("CLINIC_NAME", "DOTNET Hospital System")
