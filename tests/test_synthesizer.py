"""Tests for generators.synthesizer.ArtifactSynthesizer."""

import re

import pytest

from core.errors import UnsupportedBackend, UnsupportedDatabase, UnsupportedStack
from core.state import BackendKind, DatabaseKind, FrontendKind, ProjectProfile
from generators.synthesizer import (
    BACKEND_ONLY,
    FRONTEND_ONLY,
    FULL_STACK,
    ArtifactSynthesizer,
    backend_dockerfile,
    synthesis_mode,
)


def _profile(frontend=None, backend=None, database=None, backend_port=None):
    kwargs = {"frontend": frontend, "backend": backend, "database": database}
    if backend_port is not None:
        kwargs["backend_port"] = backend_port
    return ProjectProfile(**kwargs)


# ---------------------------------------------------------------------------
# Modes
# ---------------------------------------------------------------------------

class TestModes:
    def test_mode_names(self):
        assert synthesis_mode(_profile(FrontendKind.REACT, BackendKind.GO)) == FULL_STACK
        assert synthesis_mode(_profile(FrontendKind.REACT)) == FRONTEND_ONLY
        assert synthesis_mode(_profile(backend=BackendKind.GO)) == BACKEND_ONLY
        assert synthesis_mode(_profile()) is None

    def test_frontend_only_files(self):
        files = ArtifactSynthesizer().synthesize(_profile(FrontendKind.VUE))
        assert set(files) == {"Dockerfile", "nginx.conf"}
        assert "FROM nginx:alpine" in files["Dockerfile"]

    def test_backend_only_files(self):
        files = ArtifactSynthesizer().synthesize(_profile(backend=BackendKind.PYTHON, backend_port=5000))
        assert set(files) == {"Dockerfile"}
        assert "FROM python:3.11-slim" in files["Dockerfile"]
        assert "EXPOSE 5000" in files["Dockerfile"]

    def test_backend_only_with_compose(self):
        synth = ArtifactSynthesizer(compose_backend_only=True)
        files = synth.synthesize(_profile(backend=BackendKind.GO, backend_port=8080))
        assert set(files) == {"Dockerfile", "docker-compose.yml"}
        assert "dockerfile: Dockerfile\n" in files["docker-compose.yml"]

    def test_full_stack_files(self):
        files = ArtifactSynthesizer().synthesize(
            _profile(FrontendKind.REACT, BackendKind.NODEJS, backend_port=3000)
        )
        assert list(files) == ["Dockerfile", "Dockerfile.backend", "nginx.conf", "docker-compose.yml"]
        assert "FROM nginx:alpine" in files["Dockerfile"]
        assert 'CMD ["npm", "start"]' in files["Dockerfile.backend"]

    def test_nothing_detected_raises(self):
        with pytest.raises(UnsupportedStack):
            ArtifactSynthesizer().synthesize(_profile())

    def test_unknown_backend_raises(self):
        with pytest.raises(UnsupportedBackend, match="cobol"):
            ArtifactSynthesizer().synthesize(_profile(backend="cobol"))

    def test_unknown_database_raises(self):
        profile = _profile(FrontendKind.REACT, BackendKind.NODEJS, "cassandra")
        with pytest.raises(UnsupportedDatabase, match="cassandra"):
            ArtifactSynthesizer().synthesize(profile)


# ---------------------------------------------------------------------------
# Frontend Dockerfile and nginx
# ---------------------------------------------------------------------------

class TestFrontendArtifacts:
    def test_same_template_for_every_frontend(self):
        synth = ArtifactSynthesizer()
        outputs = {synth.synthesize(_profile(kind))["Dockerfile"] for kind in FrontendKind}
        assert len(outputs) == 1

    def test_two_stage_build(self):
        dockerfile = ArtifactSynthesizer().synthesize(_profile(FrontendKind.ANGULAR))["Dockerfile"]
        assert dockerfile.count("FROM ") == 2
        assert "RUN npm run build" in dockerfile
        assert "EXPOSE 80" in dockerfile

    def test_nginx_spa_fallback(self):
        nginx = ArtifactSynthesizer().synthesize(_profile(FrontendKind.REACT))["nginx.conf"]
        assert "listen 80;" in nginx
        assert "root /usr/share/nginx/html;" in nginx
        assert "try_files $uri $uri/ /index.html;" in nginx


# ---------------------------------------------------------------------------
# Backend Dockerfiles
# ---------------------------------------------------------------------------

class TestBackendDockerfiles:
    @pytest.mark.parametrize("kind, port, images", [
        (BackendKind.NODEJS, 3000, ["node:18-alpine"]),
        (BackendKind.PYTHON, 5000, ["python:3.11-slim"]),
        (BackendKind.JAVA, 8080, ["maven:3.8.4-openjdk-17", "openjdk:17-jre-slim"]),
        (BackendKind.GO, 8080, ["golang:1.21-alpine", "alpine:latest"]),
        (BackendKind.PHP, 8000, ["php:8.2-apache"]),
        (BackendKind.DOTNET, 5000, ["mcr.microsoft.com/dotnet/sdk:7.0", "mcr.microsoft.com/dotnet/aspnet:7.0"]),
        (BackendKind.RUST, 8080, ["rust:1.70-alpine", "alpine:latest"]),
    ])
    def test_images_and_port(self, kind, port, images):
        dockerfile = backend_dockerfile(_profile(backend=kind, backend_port=port))
        froms = re.findall(r"^FROM (\S+)", dockerfile, re.MULTILINE)
        assert froms == images
        assert f"EXPOSE {port}" in dockerfile
        assert "${" not in dockerfile

    @pytest.mark.parametrize("kind", [BackendKind.JAVA, BackendKind.GO, BackendKind.DOTNET, BackendKind.RUST])
    def test_compiled_stacks_are_multi_stage(self, kind):
        dockerfile = backend_dockerfile(_profile(backend=kind, backend_port=8080))
        assert "AS builder" in dockerfile
        assert "COPY --from=builder" in dockerfile

    def test_custom_port_interpolated(self):
        dockerfile = backend_dockerfile(_profile(backend=BackendKind.DOTNET, backend_port=7001))
        assert "EXPOSE 7001" in dockerfile
        assert "ASPNETCORE_URLS=http://+:7001" in dockerfile

    def test_php_apache_listens_on_backend_port(self):
        dockerfile = backend_dockerfile(_profile(backend=BackendKind.PHP, backend_port=8000))
        assert "Listen 8000" in dockerfile
        assert "EXPOSE 8000" in dockerfile

    def test_profile_without_port_uses_kind_default(self):
        files = ArtifactSynthesizer().synthesize(ProjectProfile(backend=BackendKind.GO))
        assert re.findall(r"^EXPOSE \d+", files["Dockerfile"], re.MULTILINE) == ["EXPOSE 8080"]


# ---------------------------------------------------------------------------
# Determinism and port consistency
# ---------------------------------------------------------------------------

def test_deterministic_output():
    profile = _profile(FrontendKind.REACT, BackendKind.JAVA, DatabaseKind.MYSQL, backend_port=8080)
    assert ArtifactSynthesizer().synthesize(profile) == ArtifactSynthesizer().synthesize(profile)


def test_full_stack_port_consistency():
    profile = _profile(FrontendKind.REACT, BackendKind.PYTHON, backend_port=5000)
    files = ArtifactSynthesizer().synthesize(profile)
    expose = re.search(r"^EXPOSE (\d+)", files["Dockerfile.backend"], re.MULTILINE).group(1)
    mapping = re.search(r'- "(\d+):(\d+)"', files["docker-compose.yml"].split("  backend:")[1])
    assert expose == mapping.group(1) == mapping.group(2) == str(profile.backend_port)
