#!/usr/bin/env python3
"""Create or update the CloudFront distribution for this deployment."""

import argparse
import json
import logging
import sys

from botocore.exceptions import BotoCoreError, ClientError
from dotenv import load_dotenv

from src.config import Settings
from src.distribution import DistributionWorkflow
from src.resolver import DistributionError

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Create or update a CloudFront distribution",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment:
  AWS_BUCKET or ORIGIN_DOMAIN_NAME   origin (one is required)
  CERTIFICATE_NAME                   ACM certificate domain to look up
  ALTERNATE_DOMAIN_NAMES             comma separated aliases
  DISTRIBUTION_ID                    update this distribution instead of creating

Examples:
  # Create a distribution for a bucket
  AWS_BUCKET=my-bucket uv run python scripts/provision_distribution.py

  # Show the config that would be sent without publishing it
  uv run python scripts/provision_distribution.py --dry-run
""",
    )
    parser.add_argument(
        "--distribution-id",
        help="Existing distribution to update (overrides DISTRIBUTION_ID)",
    )
    parser.add_argument(
        "--certificate-name",
        help="Certificate domain to look up (overrides CERTIFICATE_NAME)",
    )
    parser.add_argument(
        "--cache-rules",
        help="JSON file with extra cache rules (overrides CACHE_RULES_PATH)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the assembled config instead of publishing it",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    # Load environment variables from .env file
    load_dotenv()
    args = parse_args(argv)

    overrides = {
        "distribution_id": args.distribution_id,
        "certificate_name": args.certificate_name,
        "cache_rules_path": args.cache_rules,
    }
    settings = Settings().model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )
    dry_run = args.dry_run or settings.dry_run

    if args.debug or settings.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    workflow = DistributionWorkflow(settings)

    try:
        if dry_run:
            config = workflow.build_config()
            print(json.dumps(config.to_api(), indent=2))
            return 0
        distribution_id = workflow.run()
    except DistributionError as e:
        logger.error(str(e))
        return 1
    except (ClientError, BotoCoreError) as e:
        logger.error(f"AWS request failed: {e}")
        return 1

    print(f"DISTRIBUTION_ID={distribution_id}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
