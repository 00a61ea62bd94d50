"""
Session Controller

Read-only HTTP endpoints for monitoring the running game session.
"""

from flask import Blueprint, jsonify
from ..services.game_service import get_game_service
from ..utils.game_logger import game_logger

session_bp = Blueprint('session', __name__)


@session_bp.route('/health', methods=['GET'])
def health():
    """Liveness probe."""
    return jsonify({'success': True, 'status': 'ok'})


@session_bp.route('/session', methods=['GET'])
def get_session_state():
    """Get the public snapshot of the shared session."""
    try:
        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        return jsonify({
            'success': True,
            'state': game_service.get_public_state()
        })
    except Exception as e:
        game_logger.log_error(e, 'get_session_state')
        return jsonify({'success': False, 'error': str(e)}), 500


@session_bp.route('/logs/stats', methods=['GET'])
def get_log_stats():
    """Counts of today's logged events."""
    stats = game_logger.get_log_stats()
    if 'error' in stats:
        return jsonify({'success': False, 'error': stats['error']}), 404
    return jsonify({'success': True, 'stats': stats})
