"""Artifact templates rendered with string.Template."""

import os
from functools import lru_cache
from string import Template


def get_templates_dir():
    """Return the absolute path to the templates directory."""
    return os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")


@lru_cache(maxsize=None)
def load_template(category, template_name):
    """Load a template file and return its contents as a string."""
    templates_dir = get_templates_dir()
    path = os.path.join(templates_dir, category, template_name)
    resolved = os.path.realpath(path)
    if not resolved.startswith(os.path.realpath(templates_dir) + os.sep):
        raise ValueError(f"Template path escapes templates directory: {category}/{template_name}")
    with open(resolved, "r", encoding="utf-8") as f:
        return f.read()


def render_template(category, template_name, variables=None, strict=True):
    """Load and render a template with the given variables.

    strict rendering raises KeyError for any placeholder missing from
    *variables*. Non-strict rendering leaves unknown placeholders as-is, which
    keeps literal ``$name`` tokens (nginx variables) intact.
    """
    tmpl = Template(load_template(category, template_name))
    if strict:
        return tmpl.substitute(variables or {})
    return tmpl.safe_substitute(variables or {})
