"""
Web API for romdb using Flask
Read-only lookups against one database loaded at startup.
"""

import os

from flask import Flask, jsonify, request

from .database import RomDatabase
from .monitor import setup_monitoring, monitor_action, log_event
from .scanner import RomScanner

app = Flask(__name__)

# Global state; the database is replaced only by load_database()
state = {
    'db': None,
    'db_path': '',
}


def load_database(db_path: str, settings=None) -> RomDatabase:
    """Build the shared index served by the API."""
    if settings is None:
        db = RomDatabase.from_file(db_path)
    else:
        db = RomDatabase.from_settings(settings, db_path)
    state['db'] = db
    state['db_path'] = db_path
    log_event('db.load.done', f'Loaded {len(db)} entries from {db_path}')
    return db


def _require_db():
    db = state['db']
    if db is None:
        return None, (jsonify({'error': 'No database loaded'}), 503)
    return db, None


@app.route('/api/status')
def get_status():
    db = state['db']
    return jsonify({
        'loaded': db is not None,
        'db_path': state['db_path'],
        'stats': db.get_stats() if db is not None else None,
    })


@app.route('/api/lookup/md5/<md5>')
def lookup_md5(md5):
    db, error = _require_db()
    if error:
        return error
    detail = db.lookup_by_md5(md5)
    if detail is None:
        return jsonify({'error': 'MD5 not found', 'md5': md5}), 404
    return jsonify({'md5': md5, 'detail': detail.to_dict()})


@app.route('/api/lookup/crc')
def lookup_crc():
    db, error = _require_db()
    if error:
        return error
    crc = request.args.get('crc', '')
    if not crc:
        return jsonify({'error': 'crc required'}), 400
    details = db.lookup_by_crc(crc)
    return jsonify({'crc': crc, 'details': [d.to_dict() for d in details]})


@app.route('/api/identify', methods=['POST'])
def identify():
    db, error = _require_db()
    if error:
        return error
    data = request.get_json(silent=True) or {}
    path = data.get('path', '')
    if not path or not os.path.isfile(path):
        return jsonify({'error': 'File not found'}), 400

    try:
        result = RomScanner.identify(db, path)
    except (OSError, ValueError) as e:
        return jsonify({'error': str(e)}), 400

    monitor_action(f"identify: {path} -> {result.source}")
    payload = result.to_dict()
    payload['path'] = path
    return jsonify(payload)


def run_server(host='127.0.0.1', port=5000, db_path='', settings=None, debug=False):
    """Run the web server"""
    monitor_settings = (settings or {}).get('monitor', {})
    logger = setup_monitoring(
        log_file=monitor_settings.get('log_file') or None,
        echo=monitor_settings.get('echo', False),
    )
    monitor_action(f"run_server called: host={host} port={port} debug={debug}", logger=logger)
    if db_path:
        load_database(db_path, settings)
    print("romdb - Web API")
    print("=" * 50)
    print(f"Listening on http://{host}:{port}")
    print("Press Ctrl+C to stop")
    print()
    app.run(host=host, port=port, debug=debug, threaded=True)
