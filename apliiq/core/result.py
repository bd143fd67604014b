"""
Result types for fallible internal steps.

Normalization and validation return ``Ok`` or ``Err`` instead of raising;
the client turns a terminal ``Err`` into an ``ApliiqError`` at its boundary.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Tuple, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Violation:
    """A single schema or business-rule failure."""

    message: str
    path: Tuple[Union[str, int], ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, "path": list(self.path)}


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    violations: Tuple[Violation, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return False

    @property
    def messages(self) -> List[str]:
        return [violation.message for violation in self.violations]


Result = Union[Ok[T], Err]


def combine(results: List["Result[T]"]) -> "Result[List[T]]":
    """
    Collapse a list of results into one.

    Any ``Err`` fails the whole batch; the violations of every failing
    element are kept, each prefixed with the element's index.

    Args:
        results: Per-element results, in order

    Returns:
        Ok with the list of values, or Err with all violations
    """
    values: List[T] = []
    violations: List[Violation] = []
    for index, result in enumerate(results):
        if isinstance(result, Ok):
            values.append(result.value)
        else:
            violations.extend(
                Violation(message=v.message, path=(index,) + v.path) for v in result.violations
            )
    if violations:
        return Err(tuple(violations))
    return Ok(values)
