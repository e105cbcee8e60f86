"""Descriptors of where a test or container is defined.

Sources are display metadata only. Each descriptor has a stable ``str()`` form
that the failures section of a summary prints verbatim, and a ``to_dict()``
form used for JSON export and recorded runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class ClassSource:
    """A node defined by a class.

    Attributes:
        class_name: Fully qualified class name, e.g. ``"pkg.module.TestCase"``.
    """

    class_name: str

    @classmethod
    def from_class(cls, klass: type) -> "ClassSource":
        """Create a source from a Python class using ``module.QualName``."""
        return cls(f"{klass.__module__}.{klass.__qualname__}")

    def __str__(self) -> str:
        return f"ClassSource [className = '{self.class_name}']"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "class", "class_name": self.class_name}


@dataclass(frozen=True)
class MethodSource:
    """A node defined by a method of a class.

    Attributes:
        class_name: Fully qualified name of the declaring class.
        method_name: Name of the method.
    """

    class_name: str
    method_name: str

    def __str__(self) -> str:
        return (
            f"MethodSource [className = '{self.class_name}', "
            f"methodName = '{self.method_name}']"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "method",
            "class_name": self.class_name,
            "method_name": self.method_name,
        }


@dataclass(frozen=True)
class FileSource:
    """A node defined by a file, optionally at a specific line.

    Attributes:
        path: File path as reported by the runner.
        line: 1-based line number, if known.
    """

    path: str
    line: Optional[int] = None

    def __str__(self) -> str:
        if self.line is None:
            return f"FileSource [path = '{self.path}']"
        return f"FileSource [path = '{self.path}', line = {self.line}]"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": "file", "path": self.path}
        if self.line is not None:
            data["line"] = self.line
        return data


TestSource = Union[ClassSource, MethodSource, FileSource]


def source_from_dict(data: Dict[str, Any]) -> TestSource:
    """Rebuild a source descriptor from its ``to_dict()`` form.

    Args:
        data: Mapping with a ``type`` of ``class``, ``method`` or ``file``.

    Returns:
        The matching source descriptor.

    Raises:
        ValueError: If the type is unknown or a required field is missing.
    """
    kind = data.get("type")
    try:
        if kind == "class":
            return ClassSource(str(data["class_name"]))
        if kind == "method":
            return MethodSource(str(data["class_name"]), str(data["method_name"]))
        if kind == "file":
            line = data.get("line")
            return FileSource(
                str(data["path"]), int(line) if line is not None else None
            )
    except KeyError as exc:
        raise ValueError(f"Source of type '{kind}' is missing field {exc}") from None
    raise ValueError(
        f"Invalid source type '{kind}'. Valid values are: class, method, file"
    )
