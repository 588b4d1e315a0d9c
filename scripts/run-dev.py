"""
Run the PlanB chat relay API with auto-reload.

Usage:
    python scripts/run-dev.py
"""

from server import serve


if __name__ == "__main__":
    serve(reload=True)
