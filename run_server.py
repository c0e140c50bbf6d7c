"""
Courtfile Server Runner
=======================
Run this directly: python run_server.py
"""
import os

from courtfile.core.config import get_settings


def main():
    if "DEBUG" not in os.environ:
        os.environ["DEBUG"] = "false"

    settings = get_settings()

    print()
    print("=" * 60)
    print(f"  {settings.app_name.upper()} SERVER")
    print("=" * 60)
    print()
    print(f"  API Docs:  http://localhost:{settings.port}/api/docs")
    print(f"  Portals:   http://localhost:{settings.port}/api/efiling/portals")
    print()
    print("  Press Ctrl+C to stop")
    print("=" * 60)
    print()

    import uvicorn
    uvicorn.run(
        "courtfile.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        workers=1,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
