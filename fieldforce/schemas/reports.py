from typing import Any, Optional

from pydantic import BaseModel


class CleanupRequest(BaseModel):
    week_start: Optional[str] = None
    week_end: Optional[str] = None
    # Passed through untouched; only a literal true authorises the purge
    backup_confirmed: Any = None
