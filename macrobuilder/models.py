from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .utils import Argument, format_call


@dataclass
class Command:
    operation: str
    args: List[Argument] = field(default_factory=list)

    def render(self) -> str:
        return format_call(self.operation, self.args)


class RunStatus(str, Enum):
    COMPLETED = "completed"
    # Host reported no active connection; nothing was submitted
    SKIPPED = "skipped"
    FAILED = "failed"
    CANCELLED = "cancelled"
    TIMED_OUT = "timed_out"


@dataclass
class RunResult:
    file_name: str
    status: RunStatus
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.status == RunStatus.COMPLETED
