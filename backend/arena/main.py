from datetime import datetime, timezone
import time

from flask import Blueprint, current_app, jsonify, send_from_directory

main = Blueprint('main', __name__)

NO_STORE_HEADERS = {
    'Surrogate-Control': 'no-store',
    'Cache-Control': 'no-store, no-cache, must-revalidate, proxy-revalidate',
    'Pragma': 'no-cache',
    'Expires': '0',
}


@main.after_app_request
def security_headers(response):
    response.headers['X-Content-Type-Options'] = 'nosniff'
    response.headers['X-XSS-Protection'] = '1; mode=block'
    powered_by = current_app.config.get('POWERED_BY')
    if powered_by:
        response.headers['X-Powered-By'] = powered_by
    response.headers.update(NO_STORE_HEADERS)
    return response


@main.app_errorhandler(404)
def not_found(_error):
    return 'Not Found', 404, {'Content-Type': 'text/plain; charset=utf-8'}


@main.route('/health')
def health():
    sessions = current_app.extensions['arena']
    started = current_app.extensions['arena_started_at']
    return jsonify({
        'status': 'healthy',
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'uptime': round(time.monotonic() - started, 3),
        'players': len(sessions.world.list_players()),
        'collectibles': len(sessions.world.list_collectibles()),
    }), 200


@main.route('/')
def index():
    return send_from_directory(current_app.config['VIEWS_DIR'], 'index.html')


@main.route('/public/<path:filename>')
def public_file(filename):
    return send_from_directory(current_app.config['PUBLIC_DIR'], filename)


@main.route('/assets/<path:filename>')
def asset_file(filename):
    return send_from_directory(current_app.config['ASSETS_DIR'], filename)
