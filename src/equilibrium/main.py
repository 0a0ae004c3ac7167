"""Application entrypoint — start the API server or run one-off commands."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

import uvicorn

from equilibrium.config import get_settings
from equilibrium.engine.shape import render_svg
from equilibrium.engine.state import SignalEngine
from equilibrium.logger import setup_logging
from equilibrium.models import SignalState


def main(argv: list[str] | None = None) -> None:
    defaults = SignalState()
    parser = argparse.ArgumentParser(
        prog="equilibrium",
        description="Personal wellbeing dashboard engine.",
    )
    sub = parser.add_subparsers(dest="command")

    # ── serve ─────────────────────────────────────────────────
    serve_parser = sub.add_parser("serve", help="Start the API server.")
    serve_parser.add_argument("--host", default=None)
    serve_parser.add_argument("--port", type=int, default=None)
    serve_parser.add_argument("--reload", action="store_true")

    # ── init-db ───────────────────────────────────────────────
    sub.add_parser("init-db", help="Create database tables.")

    # ── derive ────────────────────────────────────────────────
    derive_parser = sub.add_parser("derive", help="Print the dashboard for a set of signals.")
    derive_parser.add_argument("--screen-time", type=float, default=defaults.screen_time, help="Hours, 0-12.")
    derive_parser.add_argument("--steps", type=float, default=defaults.steps)
    derive_parser.add_argument("--mood-x", type=float, default=defaults.mood_x, help="0 negative, 100 positive.")
    derive_parser.add_argument("--mood-y", type=float, default=defaults.mood_y, help="0 high energy, 100 low energy.")
    derive_parser.add_argument("--svg", action="store_true", help="Print the outline as SVG instead of JSON.")

    args = parser.parse_args(argv)
    settings = get_settings()
    setup_logging(settings.log_level)

    if args.command == "serve":
        uvicorn.run(
            "equilibrium.api.server:app",
            host=args.host or settings.api_host,
            port=args.port or settings.api_port,
            reload=args.reload,
        )
    elif args.command == "init-db":
        from equilibrium.storage.database import init_db

        asyncio.run(init_db())
        print("Database tables created.")
    elif args.command == "derive":
        engine = SignalEngine(
            point_count=settings.shape_point_count,
            base_radius=settings.shape_base_radius,
        )
        engine.set_signals({
            "screen_time": args.screen_time,
            "steps": args.steps,
            "mood_x": args.mood_x,
            "mood_y": args.mood_y,
        })
        if args.svg:
            print(render_svg(engine.get_outline(), engine.get_derived().vibe_score))
        else:
            print(json.dumps(engine.snapshot().model_dump(mode="json"), indent=2, ensure_ascii=False))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
