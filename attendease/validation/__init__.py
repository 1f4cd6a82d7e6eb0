"""Scanner-side token validation."""

from .engine import ValidationEngine
from .types import Accepted, Rejected, Verdict

__all__ = ["ValidationEngine", "Accepted", "Rejected", "Verdict"]
