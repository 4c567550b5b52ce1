import os
import sys
from pathlib import Path

os.environ.setdefault("ALLOWED_TIME_RANGES", "")
os.environ.setdefault("TIMEZONE", "")
os.environ.setdefault("LOG_LEVEL", "WARNING")

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
