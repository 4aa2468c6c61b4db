from dataclasses import dataclass, field
from typing import List

MAX_LOGS = 200


@dataclass
class StatusStore:
    """Shared diagnostics log. Components write "component: message" lines."""
    logs: List[str] = field(default_factory=list)
    max_logs: int = MAX_LOGS

    def log(self, msg: str):
        self.logs.append(msg)
        if len(self.logs) > self.max_logs:
            self.logs = self.logs[-self.max_logs:]

    def tail(self, n: int = 50) -> List[str]:
        return self.logs[-n:] if n > 0 else []
