"""Tests for utils.template_engine."""

import pytest

from utils.template_engine import load_template, render_template


def test_load_known_template():
    assert "server {" in load_template("docker", "nginx.conf")


def test_path_escape_rejected():
    with pytest.raises(ValueError, match="escapes"):
        load_template("docker", "../../main.py")


def test_strict_render_requires_every_variable():
    with pytest.raises(KeyError):
        render_template("docker", "python.Dockerfile", {"port": 5000})


def test_non_strict_keeps_unknown_placeholders():
    rendered = render_template("docker", "nginx.conf", strict=False)
    assert "$uri" in rendered


def test_render_substitutes_values():
    rendered = render_template("docker", "go.Dockerfile", {
        "port": 9000, "build_image": "golang:1.21-alpine", "runtime_image": "alpine:latest",
    })
    assert "EXPOSE 9000" in rendered
    assert "FROM golang:1.21-alpine AS builder" in rendered
