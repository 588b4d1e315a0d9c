"""
Run the PlanB chat relay API without reload.

Usage:
    python scripts/run-prod.py
"""

from server import serve


if __name__ == "__main__":
    serve(reload=False)
