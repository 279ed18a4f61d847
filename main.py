import sys
import json
import logging
import argparse
from dataclasses import asdict

from core.app_context import AppContext
from core.config_loader import load_config
from database.init_db import init_db
from pipeline.errors import PipelineError
from pipeline.runner import run_pipeline

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="CareMatch Main Driver")
    parser.add_argument('--config', type=str, default='config.yaml',
                        help='Path to the YAML configuration file')
    subparsers = parser.add_subparsers(dest='command', required=True)

    run_parser = subparsers.add_parser('run', help='Run the recommendation pipeline for one request')
    run_parser.add_argument('request_id', type=str, help='Coordination request id')

    subparsers.add_parser('init-db', help='Create database tables')
    return parser


def run_command(ctx: AppContext, request_id: str) -> int:
    try:
        result = run_pipeline(ctx, request_id)
    except PipelineError as e:
        logger.error(f"Pipeline failed: {e}")
        return 1

    print(json.dumps(asdict(result), indent=2, default=str))
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    config = load_config(args.config)
    ctx = AppContext.build(config)
    try:
        if args.command == 'init-db':
            init_db(ctx.engine)
            return 0
        return run_command(ctx, args.request_id)
    finally:
        ctx.close()


if __name__ == "__main__":
    sys.exit(main())
