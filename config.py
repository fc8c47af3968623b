import os
import pytz

API_BASE_URL = os.environ.get("CF_API_BASE_URL", "https://codeforces.com/api/")
USER_AGENT = os.environ.get("CF_USER_AGENT", "CF-Virtual-Finder/1.0")

# Codeforces allows roughly one call every two seconds
MIN_INTERVAL = float(os.environ.get("CF_MIN_INTERVAL", "2.0"))
MAX_RETRIES = int(os.environ.get("CF_MAX_RETRIES", "3"))
BACKOFF_SECONDS = float(os.environ.get("CF_BACKOFF_SECONDS", "1.0"))
REQUEST_TIMEOUT = float(os.environ.get("CF_REQUEST_TIMEOUT", "30"))

TIMEZONE = pytz.timezone(os.environ.get("CF_TIMEZONE", "UTC"))

# contest.list does not report problem counts
ASSUMED_PROBLEMS_PER_CONTEST = 6

USER_FILE = os.environ.get("CF_USER_FILE", "users.txt")
OUTPUT_FILE = os.environ.get("CF_OUTPUT_FILE", "data.json")
LOG_LEVEL = os.environ.get("CF_LOG_LEVEL", "INFO")
