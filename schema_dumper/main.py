#!/usr/bin/env python3
"""
Schema Dumper - CLI Entry Point
===============================
Two modes against one MySQL schema:
- analyze: rank tables by size and describe the oversized ones
- dump: write every base table (with per-table WHERE filters and extra
  mysqldump flags from a YAML file) plus all views into one SQL file
"""

import argparse
import logging
import sys
from pathlib import Path

from .analyzer import SizeAnalyzer
from .config import ConfigLoader
from .connection import DatabaseConnection
from .database_dumper import DatabaseDumper
from .errors import SchemaDumperError
from .exporter import MysqldumpExporter
from .inspector import SchemaInspector
from .models import DEFAULT_OUTPUT_PATH, DEFAULT_PORT, DEFAULT_THRESHOLD_MB, ConnectionParams
from .utils import setup_logging

MODES = ('analyze', 'dump')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Schema Dumper - find oversized tables or write a filtered dump of a MySQL schema'
    )
    parser.add_argument('--user', default='root', help='The mysql user (default: root)')
    parser.add_argument('--host', default='localhost', help='The mysql host (default: localhost)')
    parser.add_argument('--port', type=int, default=DEFAULT_PORT,
                        help='The mysql port (default: 3306)')
    parser.add_argument('--password', default='', help='The password for this user')
    parser.add_argument('--database', default='', help='The database name')
    parser.add_argument('--ssl-ca', help='Path to SSL CA certificate (if used)')
    parser.add_argument('--mode', choices=MODES, default='analyze',
                        help="Valid options are 'analyze' or 'dump' (default: analyze)")
    parser.add_argument('-c', '--config', help="The YAML config for 'dump' mode")
    parser.add_argument('-o', '--output', default=DEFAULT_OUTPUT_PATH,
                        help='Output file for dump mode (default: ./output.sql)')
    parser.add_argument('--threshold', type=float, default=DEFAULT_THRESHOLD_MB,
                        help='Size in MB above which analyze mode flags a table (default: 100)')
    parser.add_argument('--no-preamble', action='store_true',
                        help='Do not write CREATE DATABASE / USE at the top of the dump')
    parser.add_argument('--mysqldump-path', help='Path to the mysqldump binary (default: search PATH)')
    parser.add_argument('--dry-run', action='store_true',
                        help='Show what would be dumped without actually dumping')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose output')
    return parser


def run_analyze(params: ConnectionParams, threshold: float) -> int:
    with DatabaseConnection.from_params(params) as conn:
        findings = SizeAnalyzer(SchemaInspector(conn), threshold).analyze(params.database)

    oversized = [f for f in findings if f.oversized]
    logging.info(f"Analyzed {len(findings)} table(s); {len(oversized)} above {threshold:.2f} mb")
    return 0


def run_dump(params: ConnectionParams, config: ConfigLoader, args: argparse.Namespace) -> int:
    exporter = MysqldumpExporter(params, binary=args.mysqldump_path)
    dumper = DatabaseDumper(params, exporter, Path(args.output), preamble=not args.no_preamble)

    if args.dry_run:
        logging.info("DRY RUN MODE - No data will be dumped")
        dumper.dry_run(config)
        return 0

    stats = dumper.run(config)

    logging.info("=" * 50)
    logging.info("DUMP COMPLETE")
    logging.info(f"Tables: {stats.total_tables}")
    logging.info(f"Views: {stats.views}")
    logging.info(f"Bytes: {stats.total_bytes}")

    if stats.errors:
        logging.warning(f"Errors: {len(stats.errors)}")
        for err in stats.errors:
            logging.warning(f"  - {err['table']}: {err['error']}")
        return 1
    return 0


def main(argv=None):
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.mode == 'dump' and not args.config:
        parser.error("--config is required for 'dump' mode")

    config = None
    log_settings = {}
    if args.mode == 'dump':
        try:
            config = ConfigLoader(args.config)
        except SchemaDumperError as e:
            print(f"Error: {e}")
            sys.exit(1)
        log_settings = dict(config.get_logging_settings())

    if args.verbose:
        log_settings['level'] = 'DEBUG'
    setup_logging(log_settings)

    params = ConnectionParams(
        host=args.host,
        port=args.port,
        user=args.user,
        password=args.password,
        database=args.database,
        ssl_ca=args.ssl_ca
    )

    try:
        if args.mode == 'analyze':
            code = run_analyze(params, args.threshold)
        else:
            code = run_dump(params, config, args)
    except SchemaDumperError as e:
        logging.error(f"Fatal error: {e}")
        sys.exit(1)

    sys.exit(code)


if __name__ == '__main__':
    main()
