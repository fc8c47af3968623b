import calendar
import math
from datetime import date, datetime
from typing import Iterable, List, Optional, Tuple
from urllib.parse import quote

import config

def load_users(file: str = config.USER_FILE) -> Tuple[List[str], List[str]]:
    with open(file, "r") as f:
        real_names_with_handles = [line.strip().split(',') for line in f if line.strip()]
    real_names = [parts[0].strip() for parts in real_names_with_handles]
    handles = [parts[-1].strip() for parts in real_names_with_handles]
    return real_names, handles

def encode_handles(handles: Iterable[str]) -> str:
    # each handle is escaped on its own so the ';' separators survive
    return ";".join(quote(h.strip(), safe="") for h in handles)

def build_endpoint(method: str, **params) -> str:
    """Join already-encoded query values onto an API method name, dropping Nones."""
    query = "&".join(f"{k}={v}" for k, v in params.items() if v is not None)
    return f"{method}?{query}" if query else method

def local_date(seconds: int, tz=None) -> date:
    return datetime.fromtimestamp(seconds, tz=tz or config.TIMEZONE).date()

def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))

def shift_months(day: date, months: int) -> date:
    """Move `day` by whole months, clamping to the last day of the target month."""
    month_index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))

def parse_iso_date(value: str) -> Optional[date]:
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None
