import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# ---------------------------------------------------------------------
# Project Paths
# ---------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent

# ---------------------------------------------------------------------
# Market Data Provider (Alpha Vantage)
# ---------------------------------------------------------------------
ALPHA_VANTAGE_API_KEY = os.getenv("ALPHA_VANTAGE_API_KEY", "")
ALPHA_VANTAGE_URL = "https://www.alphavantage.co/query"
ALPHA_VANTAGE_FUNCTION = "TIME_SERIES_DAILY_ADJUSTED"
REQUEST_TIMEOUT_SECONDS = 30

# Pause between uncached provider calls (free-tier rate limit)
REQUEST_DELAY_SECONDS = float(os.getenv("REQUEST_DELAY_SECONDS", "1.0"))

# Benchmark instrument for abnormal returns
BENCHMARK_SYMBOL = os.getenv("BENCHMARK_SYMBOL", "SPY")

# ---------------------------------------------------------------------
# Event Study Parameters
# ---------------------------------------------------------------------

# Event window: trading days before and after the announcement (T=0)
EVENT_WINDOW_PRE = 30
EVENT_WINDOW_POST = 30

# Bootstrap
BOOTSTRAP_SAMPLE_SIZE = int(os.getenv("BOOTSTRAP_SAMPLE_SIZE", "30"))
BOOTSTRAP_ITERATIONS = int(os.getenv("BOOTSTRAP_ITERATIONS", "40"))
