#!/usr/bin/env python3
"""autodocker - generate Docker scaffolding for an existing project.

Usage:
    python main.py generate ./my-project                 # detect + write files
    python main.py generate ./my-project --dry-run       # show what would be written
    python main.py generate ./api --with-compose         # compose file for backend-only projects
    python main.py detect ./my-project --explain         # profile + evidence as JSON
    python main.py list-stacks
"""

import argparse
import json
import os
import sys

from analyzers.detector import StackDetector
from config.defaults import DEFAULTS
from config.stacks import BACKEND_ORDER, BACKEND_STACKS, DATABASE_SERVICES, FRONTEND_RULES
from core.errors import AutodockerError
from core.orchestrator import Orchestrator
from generators.synthesizer import ArtifactSynthesizer
from utils.log import setup_logging


def _check_dir(path):
    if not os.path.isdir(path):
        print(f"Error: not a directory: {path}", file=sys.stderr)
        sys.exit(1)


def _format_profile(profile):
    lines = []
    frontend = profile.frontend.value if profile.has_frontend else "none"
    backend = profile.backend.value if profile.has_backend else "none"
    database = profile.database.value if profile.has_database else "none"
    lines.append(f"Frontend: {frontend}" + (f" (port {profile.frontend_port})" if profile.has_frontend else ""))
    lines.append(f"Backend:  {backend}" + (f" (port {profile.backend_port})" if profile.has_backend else ""))
    lines.append(f"Database: {database}")
    return "\n".join(lines)


def cmd_detect(args):
    """Print the detected profile as JSON."""
    _check_dir(args.path)
    profile, results = StackDetector().detect_with_report(args.path)
    output = profile.to_dict()
    if args.explain:
        output["sources"] = [r.to_dict() for r in results]
    print(json.dumps(output, indent=2))


def cmd_generate(args):
    """Run detect → synthesize → write."""
    _check_dir(args.path)
    orchestrator = Orchestrator(
        synthesizer=ArtifactSynthesizer(compose_backend_only=args.with_compose),
    )
    try:
        result = orchestrator.run(args.path, dry_run=args.dry_run)
    except AutodockerError as e:
        print(f"Failed to generate Docker setup: {e}", file=sys.stderr)
        sys.exit(1)

    print(_format_profile(result.profile))
    print(f"Mode:     {result.mode}")
    if args.dry_run:
        print(f"\nWould generate {len(result.files)} file(s):")
        for name, content in result.files.items():
            print(f"\n--- {name} ---")
            print(content.rstrip("\n"))
        return

    print(f"\nGenerated {len(result.written)} file(s) in {os.path.abspath(args.path)}:")
    for name in result.written:
        print(f"  {name}")


def cmd_list_stacks(args):
    print("Frontends:")
    for kind, _, port in FRONTEND_RULES:
        print(f"  {kind:10s} - port {port}")
    print("Backends (detection order):")
    for kind in BACKEND_ORDER:
        stack = BACKEND_STACKS[kind]
        print(f"  {kind:10s} - {stack['name']}, port {stack['port']}, {stack['source']}")
    print("Databases:")
    for kind, service in DATABASE_SERVICES.items():
        print(f"  {kind:10s} - {service['image'] or 'file-based, no container'}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="autodocker",
        description="Detect a project's stack and generate Docker configuration",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command")

    detect_parser = subparsers.add_parser("detect", help="Detect the project stack")
    detect_parser.add_argument("path", nargs="?", default=".", help="Project directory (default: .)")
    detect_parser.add_argument("--explain", action="store_true",
                               help="Include every manifest checked and its outcome")

    generate_parser = subparsers.add_parser("generate", help="Generate Docker files")
    generate_parser.add_argument("path", nargs="?", default=".", help="Project directory (default: .)")
    generate_parser.add_argument("--dry-run", action="store_true",
                                 help="Print generated files instead of writing them")
    generate_parser.add_argument("--with-compose", action="store_true",
                                 default=DEFAULTS["compose_backend_only"],
                                 help="Also write docker-compose.yml for backend-only projects")

    subparsers.add_parser("list-stacks", help="List supported technologies")

    args = parser.parse_args(argv)
    setup_logging("DEBUG" if args.verbose else DEFAULTS["log_level"])

    if args.command == "detect":
        cmd_detect(args)
    elif args.command == "generate":
        cmd_generate(args)
    elif args.command == "list-stacks":
        cmd_list_stacks(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
