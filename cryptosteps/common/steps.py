"""
Step emission for the demos.

Every demo records what it computed as an ordered list of Step records.
The console renderer and the JSON renderer both consume the same list,
so narration is written once per demo.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional


@dataclass(frozen=True)
class Step:
    """One narrated step: what was computed, how, and the result."""
    title: str
    formula: str = ""
    result: str = ""
    details: List[str] = field(default_factory=list)
    section: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'title': self.title,
            'formula': self.formula,
            'result': self.result,
            'details': list(self.details),
            'section': self.section,
        }


class StepLog:
    """
    Ordered collector of steps, grouped under named sections.

    Example:
        >>> log = StepLog()
        >>> log.section("RSA Key Generation")
        >>> log.add("Calculate n = p × q", "n = 3 × 11", 33)
        >>> log.steps[0].section
        'RSA Key Generation'
    """

    def __init__(self) -> None:
        self._steps: List[Step] = []
        self._section: Optional[str] = None

    def section(self, name: str) -> None:
        """Start a new section; following steps belong to it."""
        self._section = name

    def add(self, title: str, formula: str = "", result: Any = "",
            details: Optional[List[str]] = None) -> Step:
        step = Step(
            title=title,
            formula=formula,
            result=str(result),
            details=list(details or []),
            section=self._section,
        )
        self._steps.append(step)
        return step

    @property
    def steps(self) -> List[Step]:
        return list(self._steps)

    def __iter__(self) -> Iterator[Step]:
        return iter(self._steps)

    def __len__(self) -> int:
        return len(self._steps)
