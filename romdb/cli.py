"""
Command-line interface for romdb
"""

import argparse
import json
import logging
import os
import sys

from . import __version__
from .database import RomDatabase
from .models import RomDetail
from .monitor import setup_monitoring, log_event, tail_events
from .scanner import RomScanner
from .settings import DEFAULT_SETTINGS_PATH, load_settings, resolve_database_path
from .utils import display_value, format_size, truncate_string

_DETAIL_FIELDS = [
    ('good_name', 'GoodName'),
    ('base_name', 'Title'),
    ('crc', 'CRC'),
    ('save_type', 'Save type'),
    ('status', 'Status'),
    ('players', 'Players'),
    ('rumble', 'Rumble'),
    ('art_url', 'Cover art'),
    ('wiki_url', 'Wiki'),
]


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser"""
    parser = argparse.ArgumentParser(
        prog='romdb',
        description='N64 ROM metadata lookup against mupen64plus.ini',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  %(prog)s --db mupen64plus.ini "Super Game (U).z64"
  %(prog)s --db mupen64plus.ini ./roms --json
  %(prog)s --db mupen64plus.ini --md5 0123456789ABCDEF0123456789ABCDEF
  %(prog)s --db mupen64plus.ini --crc "635A2BFF 8B022326" --all
        '''
    )

    parser.add_argument(
        'roms',
        nargs='*',
        help='ROM files or folders to identify'
    )

    parser.add_argument(
        '--db', '-d',
        type=str,
        help='Path to mupen64plus.ini (default: settings file or $ROMDB_DATABASE)'
    )

    parser.add_argument(
        '--settings',
        type=str,
        default=DEFAULT_SETTINGS_PATH,
        help='Settings file (default: ~/.romdb/settings.json)'
    )

    lookup_group = parser.add_argument_group('Lookups')

    lookup_group.add_argument(
        '--md5',
        type=str,
        action='append',
        help='Look up an MD5 directly (can be specified multiple times)'
    )

    lookup_group.add_argument(
        '--crc',
        type=str,
        action='append',
        help='Look up a header CRC such as "635A2BFF 8B022326" (can be repeated)'
    )

    lookup_group.add_argument(
        '--all', '-a',
        action='store_true',
        help='Show every candidate when a CRC matches several entries'
    )

    lookup_group.add_argument(
        '--no-recursive',
        action='store_true',
        help='Do not scan subdirectories of ROM folders'
    )

    output_group = parser.add_argument_group('Output')

    output_group.add_argument(
        '--json',
        action='store_true',
        help='Print results as JSON'
    )

    output_group.add_argument(
        '--stats',
        action='store_true',
        help='Print database statistics'
    )

    output_group.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress progress output'
    )

    monitor_group = parser.add_argument_group('Monitoring')

    monitor_group.add_argument(
        '--monitor',
        action='store_true',
        help='Echo log events to stderr while running'
    )

    monitor_group.add_argument(
        '--monitor-file',
        type=str,
        help='Custom event log path (default: ~/.romdb/logs/events.log)'
    )

    monitor_group.add_argument(
        '--monitor-tail',
        action='store_true',
        help='Print the latest event log lines and exit'
    )

    parser.add_argument(
        '--version', '-v',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    return parser


def run_cli(args=None):
    """Run the CLI"""
    parser = create_parser()
    args = parser.parse_args(args)

    settings = load_settings(args.settings)
    monitor_settings = settings.get('monitor', {})
    log_file = args.monitor_file or monitor_settings.get('log_file') or None
    setup_monitoring(log_file=log_file, echo=args.monitor or monitor_settings.get('echo', False))

    if args.monitor_tail:
        tail_events(log_file=log_file)
        return 0

    log_event('cli.start', 'CLI execution started')

    if not (args.roms or args.md5 or args.crc or args.stats):
        parser.print_help()
        print("\nError: give ROM paths, --md5, --crc or --stats.")
        return 1

    db_path = resolve_database_path(settings, args.db)
    if not db_path:
        log_event('cli.error', 'No database path given', logging.ERROR)
        print("Error: no database given. Use --db or set database.path in settings.",
              file=sys.stderr)
        return 1

    quiet = args.quiet or args.json

    def log(msg):
        if not quiet:
            print(msg)

    log_event('db.load.start', f'Loading database: {db_path}')
    try:
        db = RomDatabase.from_settings(settings, db_path)
    except (OSError, ValueError) as e:
        log_event('db.load.error', f'Failed to load database {db_path}: {e}', logging.ERROR)
        print(f"Error: Failed to load database: {e}", file=sys.stderr)
        return 1
    log_event('db.load.done', f'Loaded {len(db)} entries from {db_path}')

    output = {}

    if args.stats:
        stats = db.get_stats()
        output['stats'] = stats
        if not args.json:
            _print_stats(db_path, stats)

    if args.md5:
        output['md5'] = _lookup_md5(db, args.md5, args.json)

    if args.crc:
        output['crc'] = _lookup_crc(db, args.crc, args.all, args.json)

    exit_code = 0
    if args.roms:
        files = []
        for path in args.roms:
            if not os.path.exists(path):
                log_event('scan.error', f'Path not found: {path}', logging.ERROR)
                print(f"Error: path not found: {path}", file=sys.stderr)
                exit_code = 1
                continue
            files.extend(RomScanner.collect_files(path, recursive=not args.no_recursive))

        log(f"Identifying {len(files):,} ROM(s) against {db_path}")
        output['roms'] = []
        for filepath in files:
            try:
                result = RomScanner.identify(db, filepath)
            except (OSError, ValueError) as e:
                log_event('identify.error', f'{filepath}: {e}', logging.ERROR)
                print(f"Error: cannot read {filepath}: {e}", file=sys.stderr)
                exit_code = 1
                continue

            log_event('identify.done', f'{filepath} -> {result.source}')
            entry = result.to_dict()
            entry['path'] = filepath
            output['roms'].append(entry)
            if not args.json:
                print(f"\n{os.path.basename(filepath)} "
                      f"({format_size(os.path.getsize(filepath))}) [{_source_label(result)}]")
                candidates = result.candidates if args.all and result.is_ambiguous else (result.detail,)
                for detail in candidates:
                    _print_detail(detail)
                if result.is_ambiguous and not args.all:
                    print(f"  ({len(result.candidates)} entries share this CRC; use --all to list them)")

    if args.json:
        print(json.dumps(output, indent=2))

    return exit_code


def _source_label(result) -> str:
    if result.is_guess:
        return 'best guess, no database entry'
    if result.source == 'crc':
        return 'matched by CRC'
    return 'matched by MD5'


def _print_detail(detail: RomDetail):
    for attr, label in _DETAIL_FIELDS:
        value = display_value(getattr(detail, attr))
        print(f"  {label:<10} {truncate_string(value, 90)}")


def _print_stats(db_path, stats):
    print(f"Database: {db_path}")
    print(f"   Entries: {stats['total_entries']:,}")
    print(f"   CRC values: {stats['crc_values']:,}")
    print(f"   Shared CRC values: {stats['shared_crc_values']:,}")
    print(f"   RefMD5 entries: {stats['references']:,}")


def _lookup_md5(db, md5_list, as_json):
    results = []
    for md5 in md5_list:
        detail = db.lookup_by_md5(md5)
        log_event('lookup.md5', f'{md5} -> {"hit" if detail else "miss"}')
        results.append({'md5': md5, 'detail': detail.to_dict() if detail else None})
        if not as_json:
            print(f"\nMD5 {md5}")
            if detail is None:
                print("  Not found")
            else:
                _print_detail(detail)
    return results


def _lookup_crc(db, crc_list, show_all, as_json):
    results = []
    for crc in crc_list:
        details = db.lookup_by_crc(crc)
        log_event('lookup.crc', f'{crc} -> {len(details)} entries')
        results.append({'crc': crc, 'details': [d.to_dict() for d in details]})
        if not as_json:
            print(f"\nCRC {crc}: {len(details)} entr{'y' if len(details) == 1 else 'ies'}")
            for detail in (details if show_all else details[:1]):
                _print_detail(detail)
    return results


def main():
    """Entry point"""
    sys.exit(run_cli())


if __name__ == '__main__':
    main()
