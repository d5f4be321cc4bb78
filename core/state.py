"""Detection models shared by the detector, synthesizer and orchestrator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from config.defaults import DEFAULTS
from config.stacks import BACKEND_STACKS, FRONTEND_RULES


class FrontendKind(str, Enum):
    REACT = "react"
    VUE = "vue"
    ANGULAR = "angular"


class BackendKind(str, Enum):
    NODEJS = "nodejs"
    PYTHON = "python"
    JAVA = "java"
    GO = "go"
    PHP = "php"
    DOTNET = "dotnet"
    RUST = "rust"


class DatabaseKind(str, Enum):
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"
    MONGODB = "mongodb"
    REDIS = "redis"
    SQLITE = "sqlite"


def _value(kind):
    return kind.value if isinstance(kind, Enum) else kind


def default_frontend_port(kind):
    for rule_kind, _, port in FRONTEND_RULES:
        if rule_kind == _value(kind):
            return port
    return DEFAULTS["frontend_port"]


def default_backend_port(kind):
    stack = BACKEND_STACKS.get(_value(kind))
    return stack["port"] if stack else DEFAULTS["backend_port"]


@dataclass(frozen=True)
class ProjectProfile:
    """Classification of a project along the frontend, backend and database axes.

    A kind of None means the axis is absent, so has_* always agrees with the kind.
    Ports left as None take the default for the kind (4200 for Angular, 8080
    for Go, and so on).
    """

    frontend: FrontendKind | None = None
    backend: BackendKind | None = None
    database: DatabaseKind | None = None
    frontend_port: int | None = None
    backend_port: int | None = None

    def __post_init__(self):
        if self.frontend_port is None:
            object.__setattr__(self, "frontend_port", default_frontend_port(self.frontend))
        if self.backend_port is None:
            object.__setattr__(self, "backend_port", default_backend_port(self.backend))
        for name in ("frontend_port", "backend_port"):
            port = getattr(self, name)
            if isinstance(port, bool) or not isinstance(port, int) or port <= 0:
                raise ValueError(f"{name} must be a positive integer, got {port!r}")

    @property
    def has_frontend(self) -> bool:
        return self.frontend is not None

    @property
    def has_backend(self) -> bool:
        return self.backend is not None

    @property
    def has_database(self) -> bool:
        return self.database is not None

    def to_dict(self) -> dict:
        return {
            "has_frontend": self.has_frontend,
            "frontend": _value(self.frontend),
            "frontend_port": self.frontend_port,
            "has_backend": self.has_backend,
            "backend": _value(self.backend),
            "backend_port": self.backend_port,
            "has_database": self.has_database,
            "database": _value(self.database),
        }


MATCH = "match"
NO_MATCH = "no_match"
MISSING = "missing"
ERROR = "error"


@dataclass(frozen=True)
class SourceResult:
    """Outcome of checking one manifest for one axis."""

    axis: str               # "frontend", "backend", "database"
    source: str             # manifest name, e.g. "package.json"
    status: str             # match|no_match|missing|error
    kind: str | None = None
    port: int | None = None
    detail: str = ""

    @property
    def matched(self) -> bool:
        return self.status == MATCH

    def to_dict(self) -> dict:
        return {
            "axis": self.axis,
            "source": self.source,
            "status": self.status,
            "kind": self.kind,
            "port": self.port,
            "detail": self.detail,
        }


@dataclass
class DockerizeResult:
    profile: ProjectProfile
    files: dict[str, str] = field(default_factory=dict)   # filename -> content
    written: list[str] = field(default_factory=list)
    mode: str = ""
