"""
Hurdle Controller

Handles all hurdle-related HTTP endpoints.
"""

from flask import Blueprint, request, jsonify
from ..config.app_config import Config
from ..config.game_settings import ALLOWED_MAX_ATTEMPTS, DIFFICULTY_FREQUENCY_RANGES, get_word_statistics
from ..exceptions import HurdleError
from ..services.hurdle_service import get_hurdle_service
from ..utils.game_logger import game_logger

hurdle_bp = Blueprint('hurdle', __name__)


def _service_unavailable():
    return jsonify({
        'success': False,
        'error': 'Hurdle service unavailable'
    }), 500


def _session_not_found(action, session_id):
    error_response = {
        'success': False,
        'error': 'Session not found'
    }
    game_logger.log_server_response(request, action, False, error_response, session_id)
    return jsonify(error_response), 404


def _error_response(action, error, session_id=None):
    game_logger.log_error(request, error, action, session_id)
    error_response = {
        'success': False,
        'error': str(error)
    }
    game_logger.log_server_response(request, action, False, error_response, session_id)
    # Engine and argument errors are caller mistakes, anything else is ours
    status_code = 400 if isinstance(error, (HurdleError, ValueError)) else 500
    return jsonify(error_response), status_code


@hurdle_bp.route('/sessions', methods=['POST'])
async def create_session():
    """Start a new hurdle session."""
    try:
        hurdle_service = get_hurdle_service()
        if not hurdle_service:
            return _service_unavailable()

        data = request.get_json(silent=True) or {}
        max_attempts = data.get('max_attempts', Config.MAX_ATTEMPTS)
        difficulty = data.get('difficulty', Config.DIFFICULTY)
        hard_mode = bool(data.get('hard_mode', Config.HARD_MODE))

        if max_attempts not in ALLOWED_MAX_ATTEMPTS or isinstance(max_attempts, bool):
            error_response = {
                'success': False,
                'error': f'Invalid max_attempts. Must be one of {list(ALLOWED_MAX_ATTEMPTS)}'
            }
            game_logger.log_server_response(request, 'create_session', False, error_response)
            return jsonify(error_response), 400

        if difficulty is not None and difficulty not in DIFFICULTY_FREQUENCY_RANGES:
            error_response = {
                'success': False,
                'error': f'Invalid difficulty. Must be one of {sorted(DIFFICULTY_FREQUENCY_RANGES)}'
            }
            game_logger.log_server_response(request, 'create_session', False, error_response)
            return jsonify(error_response), 400

        game_logger.log_user_action(
            request, 'create_session',
            max_attempts=max_attempts, difficulty=difficulty, hard_mode=hard_mode
        )

        controller = await hurdle_service.create_session(max_attempts, difficulty, hard_mode)
        state = hurdle_service.get_state(controller.session_id)

        response_data = {
            'success': True,
            'session_id': controller.session_id,
            'state': state
        }

        game_logger.log_server_response(
            request, 'create_session', True, response_data, controller.session_id,
            max_attempts=max_attempts, hard_mode=hard_mode
        )

        return jsonify(response_data), 201

    except Exception as e:
        return _error_response('create_session', e)


@hurdle_bp.route('/sessions/<session_id>/state', methods=['GET'])
def get_state(session_id):
    """Get current session state."""
    try:
        hurdle_service = get_hurdle_service()
        if not hurdle_service:
            return _service_unavailable()

        game_logger.log_user_action(request, 'get_state', session_id)

        state = hurdle_service.get_state(session_id)
        if state is None:
            return _session_not_found('get_state', session_id)

        response_data = {
            'success': True,
            'state': state
        }

        game_logger.log_server_response(
            request, 'get_state', True, response_data, session_id,
            current_hurdle_number=state['current_hurdle_number']
        )

        return jsonify(response_data)

    except Exception as e:
        return _error_response('get_state', e, session_id)


@hurdle_bp.route('/sessions/<session_id>/guess', methods=['POST'])
async def submit_guess(session_id):
    """Submit a guess for the current hurdle."""
    try:
        hurdle_service = get_hurdle_service()
        if not hurdle_service:
            return _service_unavailable()

        data = request.get_json(silent=True)
        if not data or 'guess' not in data:
            error_response = {
                'success': False,
                'error': 'Guess is required'
            }
            game_logger.log_server_response(request, 'submit_guess', False, error_response, session_id)
            return jsonify(error_response), 400

        guess = data['guess']

        game_logger.log_user_action(request, 'submit_guess', session_id, guess=guess)

        outcome = await hurdle_service.submit_guess(session_id, guess)
        if outcome is None:
            return _session_not_found('submit_guess', session_id)

        result = outcome['result']
        if not result['success']:
            error_response = {
                'success': False,
                'error': result['error'],
                'state': outcome['state']
            }
            game_logger.log_server_response(
                request, 'submit_guess', False, error_response, session_id,
                validation_error=result['error'], attempted_guess=guess
            )
            return jsonify(error_response), 400

        response_data = {
            'success': True,
            'guess': result['guess'],
            'status': result['status'],
            'transition': outcome['transition'],
            'state': outcome['state']
        }

        game_logger.log_server_response(
            request, 'submit_guess', True, response_data, session_id,
            guess=guess, status=result['status']
        )

        return jsonify(response_data)

    except Exception as e:
        return _error_response('submit_guess', e, session_id)


@hurdle_bp.route('/sessions/<session_id>/next', methods=['POST'])
async def next_hurdle(session_id):
    """Start the next hurdle with the previous answer as the first guess."""
    try:
        hurdle_service = get_hurdle_service()
        if not hurdle_service:
            return _service_unavailable()

        game_logger.log_user_action(request, 'next_hurdle', session_id)

        outcome = await hurdle_service.start_next_hurdle(session_id)
        if outcome is None:
            return _session_not_found('next_hurdle', session_id)

        response_data = {
            'success': True,
            **outcome
        }

        game_logger.log_server_response(
            request, 'next_hurdle', True, response_data, session_id,
            hurdle_number=outcome['state']['current_hurdle_number']
        )

        return jsonify(response_data)

    except Exception as e:
        return _error_response('next_hurdle', e, session_id)


@hurdle_bp.route('/sessions/<session_id>/stop', methods=['POST'])
def stop_session(session_id):
    """End a session by player choice."""
    try:
        hurdle_service = get_hurdle_service()
        if not hurdle_service:
            return _service_unavailable()

        game_logger.log_user_action(request, 'stop_session', session_id)

        outcome = hurdle_service.stop_session(session_id)
        if outcome is None:
            return _session_not_found('stop_session', session_id)

        response_data = {
            'success': True,
            **outcome
        }

        game_logger.log_server_response(
            request, 'stop_session', True, response_data, session_id,
            final_score=outcome['final_score']
        )

        return jsonify(response_data)

    except Exception as e:
        return _error_response('stop_session', e, session_id)


@hurdle_bp.route('/sessions/<session_id>', methods=['DELETE'])
def delete_session(session_id):
    """Delete a session."""
    try:
        hurdle_service = get_hurdle_service()
        if not hurdle_service:
            return _service_unavailable()

        game_logger.log_user_action(request, 'delete_session', session_id)

        success = hurdle_service.delete_session(session_id)

        response_data = {
            'success': success
        }

        game_logger.log_server_response(request, 'delete_session', success, response_data, session_id)

        if success:
            game_logger.log_game_event(session_id, 'session_deleted')

        return jsonify(response_data), 200 if success else 404

    except Exception as e:
        return _error_response('delete_session', e, session_id)


@hurdle_bp.route('/stats', methods=['GET'])
def get_stats():
    """Aggregated statistics and the most recent finished rounds."""
    try:
        hurdle_service = get_hurdle_service()
        if not hurdle_service:
            return _service_unavailable()

        game_logger.log_user_action(request, 'get_stats')

        limit = request.args.get('limit', default=10, type=int)

        response_data = {
            'success': True,
            'statistics': hurdle_service.get_statistics(),
            'recent_rounds': hurdle_service.get_recent_rounds(max(0, limit))
        }

        game_logger.log_server_response(request, 'get_stats', True, {'success': True})

        return jsonify(response_data)

    except Exception as e:
        return _error_response('get_stats', e)


@hurdle_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        hurdle_service = get_hurdle_service()

        game_logger.log_user_action(request, 'health_check')

        log_stats = game_logger.get_log_stats()
        word_stats = get_word_statistics()

        response_data = {
            'status': 'healthy',
            'active_sessions': hurdle_service.get_active_session_count() if hurdle_service else 0,
            'total_words': word_stats.get('total_words', 0),
            'log_stats': log_stats
        }

        game_logger.log_server_response(request, 'health_check', True, response_data)

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        error_response = {
            'status': 'error',
            'error': str(e)
        }
        game_logger.log_server_response(request, 'health_check', False, error_response)
        return jsonify(error_response), 500
