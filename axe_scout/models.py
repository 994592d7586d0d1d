# axe_scout/models.py
"""
Data models for axe-core scan results.

Instances are built once from the JSON returned by ``axe.run`` and are
never mutated afterwards; every count in the report is derived from them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

__all__ = ["Solution", "ViolationNode", "Violation", "ScanResult"]


@dataclass(frozen=True, slots=True)
class Solution:
    """One remediation check of a node (an entry of ``any`` / ``all``)."""

    message: str
    id: str = ""
    impact: Optional[str] = None
    data: Any = None

    @classmethod
    def from_axe(cls, raw: Mapping[str, Any]) -> Solution:
        return cls(
            message=raw.get("message", "") or "",
            id=raw.get("id", "") or "",
            impact=raw.get("impact"),
            data=raw.get("data"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "impact": self.impact, "message": self.message, "data": self.data}


@dataclass(frozen=True, slots=True)
class ViolationNode:
    """One offending DOM element."""

    html: str
    target: Tuple[str, ...]
    any: Tuple[Solution, ...] = ()
    all: Tuple[Solution, ...] = ()
    failure_summary: str = ""

    @property
    def selector(self) -> str:
        return ",".join(self.target)

    @classmethod
    def from_axe(cls, raw: Mapping[str, Any]) -> ViolationNode:
        return cls(
            html=raw.get("html", "") or "",
            target=tuple(str(t) for t in raw.get("target", [])),
            any=tuple(Solution.from_axe(s) for s in raw.get("any", [])),
            all=tuple(Solution.from_axe(s) for s in raw.get("all", [])),
            failure_summary=raw.get("failureSummary", "") or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "target": list(self.target),
            "html": self.html,
            "any": [s.to_dict() for s in self.any],
            "all": [s.to_dict() for s in self.all],
            "failureSummary": self.failure_summary,
        }


@dataclass(frozen=True, slots=True)
class Violation:
    """One rule failing on one scan, with all its offending nodes."""

    id: str
    help: str
    help_url: str
    impact: Optional[str]
    tags: Tuple[str, ...]
    nodes: Tuple[ViolationNode, ...]
    description: str = ""

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def wcag_tags(self) -> Tuple[str, ...]:
        return tuple(tag for tag in self.tags if tag.startswith("wcag"))

    @property
    def doc_url(self) -> str:
        """Help URL without the query string."""
        return self.help_url.split("?")[0]

    @classmethod
    def from_axe(cls, raw: Mapping[str, Any]) -> Violation:
        return cls(
            id=raw["id"],
            help=raw.get("help", "") or "",
            help_url=raw.get("helpUrl", "") or "",
            impact=raw.get("impact"),
            tags=tuple(raw.get("tags", [])),
            nodes=tuple(ViolationNode.from_axe(n) for n in raw.get("nodes", [])),
            description=raw.get("description", "") or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "help": self.help,
            "helpUrl": self.help_url,
            "description": self.description,
            "impact": self.impact,
            "tags": list(self.tags),
            "nodes": [n.to_dict() for n in self.nodes],
        }


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Output of one axe-core invocation, tagged with page and run identity."""

    url: str
    violations: Tuple[Violation, ...] = field(default_factory=tuple)
    engine_version: str = "N/A"
    conformance: Optional[str] = None
    fragment: Optional[str] = None

    @property
    def has_violations(self) -> bool:
        return bool(self.violations)

    @classmethod
    def from_axe(
        cls,
        result: Mapping[str, Any],
        *,
        engine_version: str,
        conformance: Optional[str],
        fragment: Optional[str] = None,
    ) -> ScanResult:
        return cls(
            url=result.get("url", "") or "",
            violations=tuple(Violation.from_axe(v) for v in result.get("violations", [])),
            engine_version=engine_version,
            conformance=conformance,
            fragment=fragment,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "fragment": self.fragment,
            "violations": [v.to_dict() for v in self.violations],
        }
