"""Default pipeline settings."""

import os

DEFAULTS = {
    "frontend_port": 3000,
    "backend_port": 3000,           # used when no backend is detected
    "compose_version": "3.8",
    "network_name": "app-network",
    "production_env": "NODE_ENV=production",
    "compose_backend_only": False,  # emit docker-compose.yml without a frontend
    "exclude_dirs": [
        "node_modules", ".git", "bin", "obj", "vendor", "target",
        "dist", "build", "__pycache__", ".venv", "venv",
    ],
    "log_level": os.environ.get("AUTODOCKER_LOG_LEVEL", "WARNING"),
}
