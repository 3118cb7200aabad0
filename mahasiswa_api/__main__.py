from __future__ import annotations

import argparse

import uvicorn

from mahasiswa_api.config import get_settings


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Mahasiswa student record API")
    parser.add_argument("--host", default=settings.host, help="Listen address (env HOST)")
    parser.add_argument("--port", type=int, default=settings.port, help="Listen port (env PORT)")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes (development only)")
    args = parser.parse_args()

    uvicorn.run(
        "mahasiswa_api.main:app",
        host=args.host,
        port=args.port,
        reload=bool(args.reload),
        # Access lines come from RequestContextMiddleware.
        access_log=False,
    )


if __name__ == "__main__":
    main()
