"""ArtifactSynthesizer: turns a ProjectProfile into container artifacts."""

import logging

from config.defaults import DEFAULTS
from config.stacks import BACKEND_STACKS
from core.errors import UnsupportedBackend, UnsupportedStack
from core.state import BackendKind
from generators.compose import compose_document
from utils.template_engine import render_template

logger = logging.getLogger(__name__)

FULL_STACK = "full-stack"
FRONTEND_ONLY = "frontend-only"
BACKEND_ONLY = "backend-only"


def synthesis_mode(profile):
    """Return the generation mode for *profile*, or None when nothing was detected."""
    if profile.has_frontend and profile.has_backend:
        return FULL_STACK
    if profile.has_frontend:
        return FRONTEND_ONLY
    if profile.has_backend:
        return BACKEND_ONLY
    return None


def frontend_dockerfile():
    return render_template("docker", "frontend.Dockerfile")


def nginx_config():
    return render_template("docker", "nginx.conf", strict=False)


def backend_dockerfile(profile):
    """Render the Dockerfile for the profile's backend kind."""
    try:
        kind = BackendKind(profile.backend)
    except ValueError:
        raise UnsupportedBackend(getattr(profile.backend, "value", profile.backend)) from None
    stack = BACKEND_STACKS[kind.value]
    return render_template("docker", stack["template"], {
        "port": profile.backend_port,
        "build_image": stack["build_image"] or "",
        "runtime_image": stack["runtime_image"],
    })


class ArtifactSynthesizer:
    """Maps a ProjectProfile onto {filename: content}.

    full-stack:    Dockerfile, Dockerfile.backend, nginx.conf, docker-compose.yml
    frontend-only: Dockerfile, nginx.conf
    backend-only:  Dockerfile (plus docker-compose.yml with compose_backend_only)
    """

    def __init__(self, compose_backend_only=None):
        if compose_backend_only is None:
            compose_backend_only = DEFAULTS["compose_backend_only"]
        self.compose_backend_only = compose_backend_only

    def synthesize(self, profile) -> dict:
        mode = synthesis_mode(profile)
        if mode is None:
            raise UnsupportedStack()

        files = {}
        if mode == FULL_STACK:
            files["Dockerfile"] = frontend_dockerfile()
            files["Dockerfile.backend"] = backend_dockerfile(profile)
            files["nginx.conf"] = nginx_config()
            files["docker-compose.yml"] = compose_document(profile)
        elif mode == FRONTEND_ONLY:
            files["Dockerfile"] = frontend_dockerfile()
            files["nginx.conf"] = nginx_config()
        else:
            files["Dockerfile"] = backend_dockerfile(profile)
            if self.compose_backend_only:
                files["docker-compose.yml"] = compose_document(profile)

        logger.info("Synthesized %s artifacts: %s", mode, ", ".join(files))
        return files
