"""docker-compose.yml composition from optional fragments.

The document is an ordered list of fragments. Each fragment has a predicate
deciding whether it is included and a renderer producing its text; both are
pure functions of the ProjectProfile. Included fragments are joined with a
blank line.
"""

from config.defaults import DEFAULTS
from config.stacks import DATABASE_SERVICES, GENERIC_DATABASE_VOLUME
from core.errors import UnsupportedDatabase
from core.state import DatabaseKind

FRAGMENT_SEPARATOR = "\n\n"


def database_service(profile):
    """Container parameters for the profile's database, or None.

    Raises:
        UnsupportedDatabase: the database kind is not a DatabaseKind.
    """
    if not profile.has_database:
        return None
    try:
        kind = DatabaseKind(profile.database)
    except ValueError:
        raise UnsupportedDatabase(getattr(profile.database, "value", profile.database)) from None
    return DATABASE_SERVICES[kind.value]


def has_database_container(profile):
    service = database_service(profile)
    return service is not None and service["image"] is not None


def _list(key, items, indent=4):
    pad = " " * indent
    lines = [f"{pad}{key}:"]
    lines.extend(f"{pad}  - {item}" for item in items)
    return lines


def _networks():
    return _list("networks", [DEFAULTS["network_name"]])


def render_header(profile):
    return f"version: '{DEFAULTS['compose_version']}'\n\nservices:"


def render_frontend(profile):
    lines = [
        "  frontend:",
        "    build:",
        "      context: .",
        "      dockerfile: Dockerfile",
        *_list("ports", ['"80:80"']),
    ]
    depends_on = []
    if profile.has_backend:
        depends_on.append("backend")
    if has_database_container(profile):
        depends_on.append("database")
    if depends_on:
        lines.extend(_list("depends_on", depends_on))
    lines.extend(_networks())
    return "\n".join(lines)


def render_backend(profile):
    dockerfile = "Dockerfile.backend" if profile.has_frontend else "Dockerfile"
    port = profile.backend_port
    environment = [DEFAULTS["production_env"]]
    service = database_service(profile)
    if service:
        environment.extend(service["backend_env"])
    lines = [
        "  backend:",
        "    build:",
        "      context: .",
        f"      dockerfile: {dockerfile}",
        *_list("ports", [f'"{port}:{port}"']),
        *_list("environment", environment),
    ]
    if service and service["image"] is None:
        # file-based database: keep its data on the shared volume
        lines.extend(_list("volumes", [f"{GENERIC_DATABASE_VOLUME}:{service['data_path']}"]))
    if has_database_container(profile):
        lines.extend(_list("depends_on", ["database"]))
    lines.extend(_networks())
    return "\n".join(lines)


def render_database(profile):
    service = database_service(profile)
    lines = [
        "  database:",
        f"    image: {service['image']}",
    ]
    if service["service_env"]:
        lines.extend(_list("environment", service["service_env"]))
    port = service["port"]
    lines.extend(_list("ports", [f'"{port}:{port}"']))
    lines.extend(_list("volumes", [f"{service['volume']}:{service['data_path']}"]))
    lines.extend(_networks())
    return "\n".join(lines)


def render_networks(profile):
    return "\n".join([
        "networks:",
        f"  {DEFAULTS['network_name']}:",
        "    driver: bridge",
    ])


def render_volumes(profile):
    lines = ["volumes:", f"  {GENERIC_DATABASE_VOLUME}:"]
    volume = database_service(profile)["volume"]
    if volume:
        lines.append(f"  {volume}:")
    return "\n".join(lines)


# (name, predicate, renderer) in document order
FRAGMENTS = [
    ("header", lambda p: True, render_header),
    ("frontend", lambda p: p.has_frontend, render_frontend),
    ("backend", lambda p: p.has_backend, render_backend),
    ("database", has_database_container, render_database),
    ("networks", lambda p: True, render_networks),
    ("volumes", lambda p: p.has_database, render_volumes),
]


def included_fragments(profile):
    """Names of the fragments that apply to *profile*, in document order."""
    return [name for name, predicate, _ in FRAGMENTS if predicate(profile)]


def compose_document(profile):
    """Render the full docker-compose.yml text for *profile*."""
    parts = [render(profile) for _, predicate, render in FRAGMENTS if predicate(profile)]
    return FRAGMENT_SEPARATOR.join(parts) + "\n"
