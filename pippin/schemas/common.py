"""
schemas/common.py
-----------------
Shared field types for response models.
"""

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator

from pippin.core.sprint import as_utc

# SQLite hands back naive datetimes; everything we emit is explicit UTC.
UTCDateTime = Annotated[datetime, AfterValidator(as_utc)]
