"""StackDetector: reads project manifests and classifies the stack.

Detection runs three passes over the same manifests:

- frontend: package.json dependency keys (React, then Vue, then Angular)
- backend: NodeJS, Python, Java, Go, PHP, DotNet, Rust, first match wins
- database: package.json, requirements.txt, pom.xml, go.mod, composer.json,
  Cargo.toml, first source with a database marker wins

A manifest that is missing, unreadable or malformed counts as "no match" for
every pass that needs it. Nothing here raises to the caller.
"""

import json
import logging

from analyzers.classifier import classify_backend, classify_database, classify_frontend
from config.stacks import BACKEND_ORDER, BACKEND_STACKS, DATABASE_SOURCES, MANIFESTS
from core.errors import NotFound, ProbeError
from core.probe import FileProbe
from core.state import (
    ERROR,
    MATCH,
    MISSING,
    NO_MATCH,
    BackendKind,
    DatabaseKind,
    FrontendKind,
    ProjectProfile,
    SourceResult,
)

logger = logging.getLogger(__name__)

LOADED = "loaded"


def _json_keys(data, sections):
    """Merge the keys of the given object sections of a parsed JSON manifest.

    A section that is not an object is skipped; the others still count.
    """
    if not isinstance(data, dict):
        raise ProbeError("manifest root is not an object")
    keys = set()
    for section in sections:
        value = data.get(section) or {}
        if not isinstance(value, dict):
            logger.warning("Ignoring '%s': not an object", section)
            continue
        keys.update(value)
    return keys


def _requirement_lines(text):
    lines = []
    for line in text.splitlines():
        stripped = line.strip()
        if stripped and not stripped.startswith("#"):
            lines.append(stripped.lower())
    return lines


class ManifestReader:
    """Loads each manifest at most once per detection run and turns it into evidence."""

    def __init__(self, probe):
        self.probe = probe
        self._cache = {}

    def load(self, source):
        """Return (status, evidence, detail) for *source*.

        status is LOADED when evidence was parsed (the caller decides whether it
        actually matches), MISSING when the file is absent, ERROR otherwise.
        """
        if source not in self._cache:
            self._cache[source] = self._load(source)
        return self._cache[source]

    def _load(self, source):
        try:
            if source == "*.csproj":
                return self._load_csproj()
            text = self.probe.read_text(source)
            return LOADED, self._parse(source, text), ""
        except NotFound:
            return MISSING, None, ""
        except (ProbeError, ValueError, RecursionError) as e:
            logger.warning("Ignoring %s: %s", source, e)
            return ERROR, None, str(e)

    def _parse(self, source, text):
        style = MANIFESTS[source]
        if style == "deps":
            return _json_keys(json.loads(text), ("dependencies", "devDependencies"))
        if style == "require":
            return _json_keys(json.loads(text), ("require", "require-dev"))
        if style == "lines":
            return _requirement_lines(text)
        return text

    def _load_csproj(self):
        candidates = self.probe.find_files("*.csproj")
        if not candidates:
            return MISSING, None, ""
        first = candidates[0]
        if len(candidates) > 1:
            logger.debug("Found %d project files, inspecting %s", len(candidates), first)
        return LOADED, self.probe.read_text(first), first


class StackDetector:
    """Classifies a project directory into a ProjectProfile."""

    def __init__(self, probe_factory=FileProbe):
        self.probe_factory = probe_factory

    def detect(self, root) -> ProjectProfile:
        profile, _ = self.detect_with_report(root)
        return profile

    def detect_with_report(self, root):
        """Return (profile, results) where results lists every source checked."""
        reader = ManifestReader(self.probe_factory(root))
        results = []

        frontend = self.detect_frontend(reader)
        results.append(frontend)

        backend_results = self.detect_backend(reader)
        results.extend(backend_results)
        backend = backend_results[-1] if backend_results[-1].matched else None

        database_results = self.detect_database(reader)
        results.extend(database_results)
        database = database_results[-1] if database_results[-1].matched else None

        kwargs = {}
        if frontend.matched:
            kwargs["frontend"] = FrontendKind(frontend.kind)
            kwargs["frontend_port"] = frontend.port
        if backend:
            kwargs["backend"] = BackendKind(backend.kind)
            kwargs["backend_port"] = backend.port
        if database:
            kwargs["database"] = DatabaseKind(database.kind)
        profile = ProjectProfile(**kwargs)

        logger.info(
            "Detected frontend=%s backend=%s database=%s in %s",
            kwargs.get("frontend"), kwargs.get("backend"), kwargs.get("database"), root,
        )
        return profile, results

    def detect_frontend(self, reader) -> SourceResult:
        status, deps, detail = reader.load("package.json")
        if status != LOADED:
            return SourceResult("frontend", "package.json", status, detail=detail)
        hit = classify_frontend(deps)
        if hit is None:
            return SourceResult("frontend", "package.json", NO_MATCH)
        kind, port = hit
        return SourceResult("frontend", "package.json", MATCH, kind=kind, port=port)

    def detect_backend(self, reader) -> list:
        """Try each backend stack in order; the last result is the match, if any."""
        results = []
        for stack in BACKEND_ORDER:
            result = self.check_backend(reader, stack)
            results.append(result)
            if result.matched:
                break
        return results

    def check_backend(self, reader, stack) -> SourceResult:
        config = BACKEND_STACKS[stack]
        source = config["source"]
        status, evidence, detail = reader.load(source)
        if status != LOADED:
            return SourceResult("backend", source, status, kind=stack, detail=detail)
        style = "text" if source == "*.csproj" else MANIFESTS[source]
        if classify_backend(stack, evidence, style):
            return SourceResult("backend", source, MATCH, kind=stack, port=config["port"], detail=detail)
        return SourceResult("backend", source, NO_MATCH, kind=stack, detail=detail)

    def detect_database(self, reader) -> list:
        """Scan database sources in order; the last result is the match, if any."""
        results = []
        for source in DATABASE_SOURCES:
            status, evidence, detail = reader.load(source)
            if status != LOADED:
                results.append(SourceResult("database", source, status, detail=detail))
                continue
            kind = classify_database(source, evidence)
            if kind is None:
                results.append(SourceResult("database", source, NO_MATCH))
                continue
            results.append(SourceResult("database", source, MATCH, kind=kind))
            break
        return results
