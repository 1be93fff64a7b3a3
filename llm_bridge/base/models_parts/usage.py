"""
Token usage and cost accounting.

Vendors report disjoint subsets of these counters, so every field is optional
and ``None`` means "not reported". Absent values are never coerced to zero.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass
class Usage:
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    thoughts_tokens: Optional[int] = None
    total_tokens: Optional[int] = None
    cost_usd: Optional[float] = None

    def is_empty(self) -> bool:
        return all(v is None for v in asdict(self).values())

    def merge(self, other: "Usage") -> "Usage":
        """Return a copy where fields reported by ``other`` replace ours."""
        mine = asdict(self)
        mine.update({k: v for k, v in asdict(other).items() if v is not None})
        return Usage(**mine)

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


__all__ = ["Usage"]
