from __future__ import annotations

import argparse
import json
import logging

from .client import send_page
from .constants import DEFAULT_PORT, DEFAULT_TIMEOUT_S


def cmd_send(args: argparse.Namespace) -> int:
    result = send_page(
        args.host,
        args.port,
        args.pager,
        args.message,
        timeout_s=args.timeout_s,
    )

    payload = {
        "gateway": f"{args.host}:{args.port}",
        "pager": args.pager,
        "ok": result.ok,
        "error": result.kind.name if result.kind else None,
        "detail": str(result.error) if result.error else None,
        "seconds": result.duration_s,
        "responses": [r.rstrip("\r\n") for r in result.responses],
    }
    print(json.dumps(payload, indent=2) if args.json else payload)
    return 0 if result.ok else 1


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="snpp", description="Send a page through an SNPP gateway.")
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    sub = p.add_subparsers(dest="cmd", required=True)

    send = sub.add_parser("send", help="deliver one message to one pager")
    send.add_argument("--host", required=True)
    send.add_argument("--port", type=int, default=DEFAULT_PORT)
    send.add_argument("--pager", required=True, help="pager identifier sent with PAGE")
    send.add_argument("--message", required=True, help="text sent with MESS")
    send.add_argument("--timeout-s", type=float, default=DEFAULT_TIMEOUT_S)
    send.add_argument("--json", action="store_true")
    send.set_defaults(func=cmd_send)

    args = p.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(asctime)s [%(levelname)s] %(message)s")
    try:
        return int(args.func(args))
    except ValueError as e:
        p.error(str(e))


if __name__ == "__main__":
    raise SystemExit(main())
