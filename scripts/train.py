"""
Training Script
===============

Command-line script that runs the churn demo end to end.

Usage:
    python scripts/train.py
    python scripts/train.py --epochs 5 --refresh --save-model
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from loguru import logger

from config import get_config
from churn_nn.pipeline import run_pipeline
from churn_nn.utils import format_metrics, setup_logging


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Train the churn prediction network")

    parser.add_argument(
        "--url",
        type=str,
        default=None,
        help="Dataset URL (defaults to the configured one)"
    )
    parser.add_argument(
        "--refresh",
        action="store_true",
        help="Download the dataset even if a cached copy exists"
    )
    parser.add_argument(
        "--epochs",
        type=int,
        default=None,
        help="Number of training epochs"
    )
    parser.add_argument(
        "--save-model",
        action="store_true",
        help="Save the trained network to models/saved/"
    )
    parser.add_argument(
        "--confusion-png",
        action="store_true",
        help="Also save a static confusion matrix image"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level"
    )

    return parser.parse_args()


def main():
    """Main training function."""
    args = parse_args()
    config = get_config()

    log_config = config.get("logging", {})
    setup_logging(level=args.log_level or log_config.get("level", "INFO"), log_file=log_config.get("file"))
    logger.info("Starting churn demo...")

    result = run_pipeline(
        config,
        url=args.url,
        refresh=args.refresh,
        epochs=args.epochs,
        save_model=args.save_model,
        save_confusion_png=args.confusion_png,
    )

    logger.info(f"Test metrics: {format_metrics(result.metrics)}")
    logger.info(f"Report written to: {result.report_path}")
    if result.model_path:
        logger.info(f"Model saved to: {result.model_path}")


if __name__ == "__main__":
    main()
