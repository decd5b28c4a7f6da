"""Command line interface for registry generation.

Usage:
    component-registry generate [--cwd PATH] [--output PATH] [--config FILE]
    component-registry init

Examples:
    # Generate registry.json using registry.config.json found from the current directory upward
    component-registry generate

    # Scan ./src/registry and write the manifest to ./public/r
    component-registry generate --cwd src/registry --output public/r

    # Create a starter registry.config.json in the current directory
    component-registry init
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from . import __version__
from .constants import CONFIG_FILES
from .errors import RegistryError
from .project_settings import load_config, resolve_config, write_default_config
from .registry import RegistryBuilder, write_registry

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='component-registry',
        description='Generate registry.json from project structure',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command')

    generate = subparsers.add_parser('generate', help='Generate registry.json from project structure')
    generate.add_argument(
        '-o', '--output',
        default=None,
        help='Output directory for registry.json (default: config "output", else the project root)'
    )
    generate.add_argument(
        '-c', '--cwd',
        default=None,
        help='Directory to scan (default: config "cwd", else the project root)'
    )
    generate.add_argument(
        '--config',
        default=None,
        help=f'Configuration file (default: search for {", ".join(CONFIG_FILES)} upward)'
    )

    subparsers.add_parser('init', help='Initialize a new registry configuration file in the current directory')

    return parser


def run_generate(args: argparse.Namespace) -> int:
    """Load configuration, build the registry and write registry.json."""
    logger.info("Loading configuration...")
    config = load_config(config_path=args.config)
    config = resolve_config(config, cwd=args.cwd, output=args.output)
    logger.info("Configuration resolved")

    logger.info("Scanning project for components...")
    logger.info(f"Scanning directory: {config.cwd}")

    schema = RegistryBuilder(config).build()
    registry_path = write_registry(schema, config.output)

    logger.info(f"Done, registry generated successfully ({len(schema.items)} items): {registry_path}")
    return 0


def run_init(args: argparse.Namespace) -> int:
    """Write a starter configuration file into the current directory."""
    config_path = os.path.join(os.getcwd(), CONFIG_FILES[0])
    if os.path.exists(config_path):
        logger.error(f"Configuration file already exists: {config_path}")
        return 1

    write_default_config(os.getcwd())
    logger.info(f"Registry configuration initialized: {config_path}")
    logger.info("Next steps:")
    logger.info(f"  1. Open {CONFIG_FILES[0]} and configure the root path, name and homepage")
    logger.info("  2. Run 'component-registry generate' to create your registry")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command line interface."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    if args.command == 'generate':
        handler = run_generate
    elif args.command == 'init':
        handler = run_init
    else:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except RegistryError as e:
        logger.error(str(e))
        return 1
    except OSError as e:
        logger.error(f"File system error: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
