"""
Run Streamlit Dashboard
=======================

Script to start the Streamlit dashboard.

Usage:
    python scripts/run_dashboard.py
    python scripts/run_dashboard.py --port 8501
"""

import argparse
import subprocess
import sys
from pathlib import Path

from loguru import logger

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Run Streamlit dashboard")

    parser.add_argument(
        "--port",
        type=int,
        default=8501,
        help="Port to run on"
    )
    parser.add_argument(
        "--browser",
        action="store_true",
        help="Open browser automatically"
    )

    return parser.parse_args()


def main():
    """Run the dashboard."""
    args = parse_args()

    dashboard_path = project_root / "churn_nn" / "dashboard" / "app.py"
    logger.info(f"Starting dashboard at http://localhost:{args.port}")

    cmd = [
        sys.executable, "-m", "streamlit", "run",
        str(dashboard_path),
        "--server.port", str(args.port),
        "--server.headless", str(not args.browser).lower(),
    ]

    subprocess.run(cmd)


if __name__ == "__main__":
    main()
