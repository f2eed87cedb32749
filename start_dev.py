"""Convenience launcher for the IntelliWatt development server.

Usage:
    python3 start_dev.py [--port 3000] [--host 0.0.0.0]

Runs Uvicorn with --reload from backend/, preferring backend/.venv when it
exists. Press Ctrl+C to stop.
"""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent
BACKEND_DIR = ROOT_DIR / "backend"

BACKEND_VENV = BACKEND_DIR / (
    ".venv\\Scripts\\python.exe" if os.name == "nt" else ".venv/bin/python"
)

if os.name == "nt":
    os.system("")  # enable VT100 on Windows 10+

CYAN = "\033[36m"
GREEN = "\033[32m"
RED = "\033[31m"
RESET = "\033[0m"


def log(level: str, msg: str) -> None:
    colors = {"info": CYAN, "start": GREEN, "error": RED}
    print(f"{colors.get(level, '')}[{level}]{RESET} {msg}")


def resolve_backend_python() -> str:
    if BACKEND_VENV.exists():
        return str(BACKEND_VENV)
    log("info", "No venv found — using system Python")
    return sys.executable


def check_dependencies(python: str) -> bool:
    """Verify the server stack is importable."""
    result = subprocess.run(
        [python, "-c", "import fastapi, uvicorn, aiosqlite, pydantic_settings"],
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        log("error", "Missing dependencies. Run:")
        log("error", f"  cd {ROOT_DIR} && pip install -e '.[dev]'")
        return False
    return True


def main() -> int:
    parser = argparse.ArgumentParser(description="Run the IntelliWatt dev server")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=3000)
    args = parser.parse_args()

    python = resolve_backend_python()
    if not check_dependencies(python):
        return 1

    env = dict(os.environ)
    env.setdefault("INTELLIWATT_DEBUG", "true")
    env.setdefault("INTELLIWATT_LOG_LEVEL", "INFO")
    env.setdefault("INTELLIWATT_ENVIRONMENT", "development")

    cmd = [
        python, "-m", "uvicorn", "intelliwatt.main:app",
        "--reload", "--host", args.host, "--port", str(args.port),
    ]
    log("start", " ".join(cmd))
    log("info", f"  API:     http://localhost:{args.port}/api")
    log("info", f"  History: http://localhost:{args.port}/api/history?mode=daily")
    log("info", f"  Docs:    http://localhost:{args.port}/docs")

    proc = subprocess.Popen(cmd, cwd=BACKEND_DIR, env=env)
    try:
        return proc.wait()
    except KeyboardInterrupt:
        print()
        log("info", "Ctrl+C received, shutting down...")
        proc.terminate()
        try:
            proc.wait(timeout=10)
        except subprocess.TimeoutExpired:
            proc.kill()
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
