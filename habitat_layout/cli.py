"""Command line interface for the habitat_layout toolkit."""

from __future__ import annotations

import argparse
import json
import math
import random
import sys
from pathlib import Path

from .catalog import ZONE_TYPES
from .constraints import validate_design
from .io_schema import (
    config_schema,
    design_schema,
    export_csv,
    export_markdown,
    load_design,
    save_design,
    zone_schema,
)
from .models import HabitatConfig
from .scoring import evaluate
from .session import DesignSession
from .settings import AppSettings

DEFAULT_DESIGN_PATH = Path("examples/sample_design.json")


def cmd_init(args: argparse.Namespace) -> int:
    path = Path(args.out or DEFAULT_DESIGN_PATH)
    if not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    session = DesignSession(HabitatConfig(), rng=random.Random(args.seed))
    for zone_type in ZONE_TYPES:
        zone = session.add_zone(zone_type.id)
        # Whole units keep each zone at or above its minimum after float rounding.
        session.resize_zone(zone.id, math.ceil(zone.width), math.ceil(zone.height))
    save_design(session.to_design(), path)
    print(f"Wrote sample design to {path}")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    design = load_design(args.input)
    result = validate_design(design.config, design.zones)
    for msg in result.messages:
        print(msg)
    return 0 if result.passed else 1


def cmd_score(args: argparse.Namespace) -> int:
    design = load_design(args.input)
    result = evaluate(design.config, design.zones)
    data = {"breakdown": result.breakdown.model_dump(), "summary": result.summary.to_json()}
    print(json.dumps(data, indent=2))
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    design = load_design(args.input)
    result = evaluate(design.config, design.zones)

    if args.format == "md":
        output = export_markdown(design, result)
    elif args.format == "json":
        output = json.dumps({"design": design.to_json(), "evaluation": result.to_json()}, indent=2, ensure_ascii=False)
    elif args.format == "csv":
        output = export_csv(result)
    else:
        raise ValueError(f"Unsupported export format: {args.format}")

    if args.out:
        Path(args.out).write_text(output, encoding="utf-8")
    else:
        sys.stdout.write(output if output.endswith("\n") else output + "\n")
    return 0


def cmd_schema(args: argparse.Namespace) -> int:
    if args.target == "design":
        data = design_schema()
    elif args.target == "config":
        data = config_schema()
    elif args.target == "zone":
        data = zone_schema()
    else:
        raise ValueError("Unknown schema target")
    print(json.dumps(data, indent=2))
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    from .server import create_app

    overrides = {
        key: value
        for key, value in (("host", args.host), ("port", args.port), ("data_path", args.data))
        if value is not None
    }
    # Command line flags take precedence over HABITAT_* variables.
    settings = AppSettings.model_validate({**AppSettings.from_env().model_dump(), **overrides})
    app = create_app(settings)
    app.run(host=settings.host, port=settings.port, debug=settings.debug, use_reloader=False)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="habitat_layout")
    sub = parser.add_subparsers(dest="command")

    p_init = sub.add_parser("init", help="write a sample design with one zone per type")
    p_init.add_argument("--out", default=None)
    p_init.add_argument("--seed", type=int, default=None)
    p_init.set_defaults(func=cmd_init)

    p_val = sub.add_parser("validate", help="validate design")
    p_val.add_argument("--in", dest="input", required=True)
    p_val.set_defaults(func=cmd_validate)

    p_score = sub.add_parser("score", help="score design")
    p_score.add_argument("--in", dest="input", required=True)
    p_score.set_defaults(func=cmd_score)

    p_exp = sub.add_parser("export", help="export design summary")
    p_exp.add_argument("--in", dest="input", required=True)
    p_exp.add_argument("--format", choices=["md", "json", "csv"], required=True)
    p_exp.add_argument("--out", default=None)
    p_exp.set_defaults(func=cmd_export)

    p_schema = sub.add_parser("schema", help="print JSON schema")
    p_schema.add_argument("--target", choices=["design", "config", "zone"], required=True)
    p_schema.set_defaults(func=cmd_schema)

    p_serve = sub.add_parser("serve", help="run the HTTP API")
    p_serve.add_argument("--host", default=None)
    p_serve.add_argument("--port", type=int, default=None)
    p_serve.add_argument("--data", default=None, help="path of the saved designs JSON file")
    p_serve.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 1
    try:
        return int(args.func(args))
    except Exception as exc:  # pragma: no cover - CLI top-level handler
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
