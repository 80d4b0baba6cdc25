from __future__ import annotations

import random
import string
from datetime import datetime
from typing import Optional

_ID_ALPHABET = string.ascii_lowercase + string.digits


def new_id(prefix: str = "id", *, rng: Optional[random.Random] = None) -> str:
    # Short and readable; not suitable where unguessable ids are required.
    source = rng or random
    suffix = "".join(source.choice(_ID_ALPHABET) for _ in range(12))
    return f"{prefix}_{suffix}"


def now_label(now: Optional[datetime] = None) -> str:
    moment = now or datetime.now()
    return f"Today, {moment.hour:02d}:{moment.minute:02d}"
