from typing import List

from .duration import Duration, parse_duration
from .timeout import with_timeout

__all__: List[str] = [
    "Duration",
    "parse_duration",
    "with_timeout",
]
