"""Convenience launcher for the pubhost development server.

Usage:
    python3 start_dev.py [--port 8000] [--admin-password secret]

Runs Uvicorn with --reload against the in-memory store (PUBHOST_MODE=dev),
so uploads vanish on restart. Run from the repository root.
"""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent
BACKEND_DIR = ROOT_DIR / "backend"

CYAN = "\033[36m"
GREEN = "\033[32m"
RED = "\033[31m"
RESET = "\033[0m"


def log(level: str, msg: str) -> None:
    colors = {"info": CYAN, "start": GREEN, "error": RED}
    color = colors.get(level, "")
    print(f"{color}[{level}]{RESET} {msg}")


def check_dependencies() -> bool:
    """Verify critical packages are importable."""
    result = subprocess.run(
        [sys.executable, "-c", "import fastapi; import uvicorn; import jose; import multipart"],
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        log("error", "Missing dependencies. Run:")
        log("error", f"  cd {ROOT_DIR} && pip install -e '.[test]'")
        return False
    return True


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--admin-password", default="admin")
    args = parser.parse_args()

    if not check_dependencies():
        return 1

    env = dict(os.environ)
    env.setdefault("PUBHOST_DEBUG", "true")
    env.setdefault("PUBHOST_LOG_LEVEL", "INFO")
    env.setdefault("PUBHOST_MODE", "dev")
    env.setdefault("PUBHOST_ADMIN_PASSWORD", args.admin_password)

    cmd = [
        sys.executable, "-m", "uvicorn", "pubhost.main:app",
        "--reload", "--host", "127.0.0.1", "--port", str(args.port),
    ]
    log("start", " ".join(cmd))
    log("info", f"  Site:   http://localhost:{args.port}/")
    log("info", f"  Admin:  http://localhost:{args.port}/admin")
    log("info", f"  Health: http://localhost:{args.port}/api/health")
    log("info", "Press Ctrl+C to stop")

    try:
        return subprocess.run(cmd, cwd=BACKEND_DIR, env=env).returncode
    except KeyboardInterrupt:
        print()
        log("info", "Ctrl+C received, shutting down...")
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
