from __future__ import annotations

import argparse
import sys
from typing import Optional

try:
    import uvicorn
except ModuleNotFoundError as exc:  # pragma: no cover - import failure path
    uvicorn = None
    _IMPORT_ERROR = exc
else:
    _IMPORT_ERROR = None

APP_FACTORY = "bf2c.webui.app:create_app"


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Serve the bf2c translation API")
    parser.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Port to listen on (default: 8000)")
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart the server when source files change (development only)",
    )
    args = parser.parse_args(argv)

    if uvicorn is None:
        print(f"uvicorn is required to serve the bf2c API: {_IMPORT_ERROR}", file=sys.stderr)
        return 1

    uvicorn.run(APP_FACTORY, factory=True, host=args.host, port=args.port, reload=args.reload)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
