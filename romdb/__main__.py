"""
Entry point for running as module: python -m romdb
"""

import argparse
import sys


def _run_web(argv):
    from .settings import DEFAULT_SETTINGS_PATH, load_settings, resolve_database_path
    from .web import run_server

    parser = argparse.ArgumentParser(prog='romdb --web')
    parser.add_argument('--web', action='store_true')
    parser.add_argument('--db', '-d', type=str)
    parser.add_argument('--settings', type=str, default=DEFAULT_SETTINGS_PATH)
    parser.add_argument('--host', type=str)
    parser.add_argument('--port', type=int)
    args = parser.parse_args(argv)

    settings = load_settings(args.settings)
    web_settings = settings.get('web', {})
    run_server(
        host=args.host or web_settings.get('host', '127.0.0.1'),
        port=args.port or web_settings.get('port', 5000),
        db_path=resolve_database_path(settings, args.db),
        settings=settings,
    )
    return 0


def main():
    """Main entry point"""
    argv = sys.argv[1:]
    if '--web' in argv:
        sys.exit(_run_web(argv))

    from .cli import run_cli
    sys.exit(run_cli(argv))


if __name__ == '__main__':
    main()
