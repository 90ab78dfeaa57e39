"""
Server bootstrap: runs the web demo app under uvicorn.

With prefork on, uvicorn starts one worker process per CPU and every worker
listens on the same socket. A failed bind makes uvicorn exit non-zero.
"""

import math
import os

import uvicorn

from webdemo.config import Settings

APP_IMPORT = "webdemo.main:app"


def uvicorn_options(settings: Settings) -> dict:
    workers = (os.cpu_count() or 1) if settings.prefork else 1
    return {
        "host": settings.host,
        "port": settings.port,
        "workers": workers,
        # uvicorn takes whole seconds; round up so short timeouts never become 0
        "timeout_keep_alive": max(1, math.ceil(settings.idle_timeout)),
        "reload": False,
    }


def main() -> None:
    # workers re-import the app and read the same environment
    settings = Settings.from_env()
    options = uvicorn_options(settings)
    print(f"[web-demo] Listening on {settings.host}:{settings.port} ({options['workers']} worker(s))")
    if options["workers"] > 1:
        # the supervisor never runs the app lifespan, workers report themselves
        print("[web-demo] Parent process")
    uvicorn.run(APP_IMPORT, **options)


if __name__ == "__main__":
    main()
