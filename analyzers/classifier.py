"""Table-driven stack classification over manifest evidence.

No I/O happens here. The detector turns each manifest into evidence (a set of
dependency keys, a list of requirement lines or raw text) and these functions
map that evidence onto the marker tables in config.stacks.
"""

from config.stacks import (
    BACKEND_STACKS,
    DATABASE_RULES,
    FRONTEND_KEYS,
    FRONTEND_RULES,
    MANIFESTS,
)


def match_keys(keys, markers):
    """Return the first marker present as an exact key, or None."""
    for marker in markers:
        if marker in keys:
            return marker
    return None


def match_substrings(text, markers):
    """Return the first marker contained in *text* (a string or list of lines), or None."""
    chunks = [text] if isinstance(text, str) else text
    for marker in markers:
        if any(marker in chunk for chunk in chunks):
            return marker
    return None


def match_evidence(style, evidence, markers):
    """Dispatch to key or substring matching based on the manifest style."""
    if style in ("deps", "require"):
        return match_keys(evidence, markers)
    return match_substrings(evidence, markers)


def classify_frontend(deps):
    """Return (kind, port) for the first frontend rule that fires, or None.

    React is checked before Vue, and Vue before Angular.
    """
    for kind, keys, port in FRONTEND_RULES:
        if match_keys(deps, keys):
            return kind, port
    return None


def classify_node_backend(deps):
    """True when package.json names a server framework and no frontend framework."""
    has_server = match_keys(deps, BACKEND_STACKS["nodejs"]["markers"]) is not None
    has_frontend = match_keys(deps, FRONTEND_KEYS) is not None
    return has_server and not has_frontend


def classify_backend(stack, evidence, style):
    """True when *evidence* carries one of the markers for *stack*."""
    if stack == "nodejs":
        return classify_node_backend(evidence)
    return match_evidence(style, evidence, BACKEND_STACKS[stack]["markers"]) is not None


def classify_database(source, evidence):
    """Return the first database kind whose markers appear in *evidence*, or None."""
    style = MANIFESTS[source]
    for kind, markers in DATABASE_RULES[source]:
        if match_evidence(style, evidence, markers):
            return kind
    return None
