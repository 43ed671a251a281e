"""Type aliases used across NestEgg."""

from __future__ import annotations

from datetime import datetime
from typing import Callable

Clock = Callable[[], datetime]
