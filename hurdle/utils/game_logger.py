"""
Game Logger Module for the Hurdle Server

This module provides structured logging for player actions, server
responses, hurdle events and engine integrity events.
"""

import logging
import json
from datetime import datetime
from typing import Dict, Any, Optional
from pathlib import Path

from ..config.app_config import Config


class GameLogger:
    """
    Centralized logging system for the hurdle game server.

    Features:
    - Player action tracking with IP identification
    - Server response logging
    - Hurdle and session event logging
    - JSON structured logs for easy parsing
    """

    def __init__(self, log_dir: str = "logs", level: str = "INFO"):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.level = logging.getLevelName(level.upper()) if isinstance(level, str) else level
        if not isinstance(self.level, int):
            self.level = logging.INFO

        self.logger = self._setup_logger()

    def _log_file(self) -> Path:
        return self.log_dir / f"hurdle_log_{datetime.now().strftime('%Y-%m-%d')}.log"

    def _setup_logger(self) -> logging.Logger:
        """Setup the main game logger with file and console handlers."""
        logger = logging.getLogger('hurdle_game')
        logger.setLevel(self.level)

        # Prevent duplicate handlers
        if logger.handlers:
            logger.handlers.clear()

        file_handler = logging.FileHandler(self._log_file(), encoding='utf-8')
        file_handler.setLevel(self.level)

        # Console only shows warnings and errors
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)

        file_formatter = logging.Formatter(
            '%(asctime)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        console_formatter = logging.Formatter(
            '%(levelname)s: %(message)s'
        )

        file_handler.setFormatter(file_formatter)
        console_handler.setFormatter(console_formatter)

        logger.addHandler(file_handler)
        logger.addHandler(console_handler)

        return logger

    def _get_user_identity(self, request) -> Dict[str, Optional[str]]:
        """Extract user identity information from request."""
        return {
            'user_ip': getattr(request, 'remote_addr', None) or 'unknown',
        }

    def _create_log_entry(self,
                         event_type: str,
                         action: str,
                         user_info: Dict[str, Optional[str]],
                         details: Dict[str, Any]) -> str:
        """Create a structured log entry."""
        log_entry = {
            'timestamp': datetime.now().isoformat(),
            'event_type': event_type,
            'action': action,
            'user': user_info,
            'details': details
        }
        return json.dumps(log_entry, ensure_ascii=False, default=str)

    def log_user_action(self,
                       request,
                       action: str,
                       session_id: Optional[str] = None,
                       **kwargs):
        """
        Log player actions with full context.

        Args:
            request: Flask request object
            action: Type of action (e.g., 'start_session', 'submit_guess')
            session_id: Hurdle session identifier if applicable
            **kwargs: Additional details to log
        """
        details = {
            'session_id': session_id,
            'endpoint': request.endpoint,
            'method': request.method,
            **kwargs
        }

        log_message = self._create_log_entry('USER_ACTION', action, self._get_user_identity(request), details)
        self.logger.info(log_message)

    def log_server_response(self,
                           request,
                           action: str,
                           success: bool,
                           response_data: Dict[str, Any],
                           session_id: Optional[str] = None,
                           **kwargs):
        """
        Log server responses with full context.

        Args:
            request: Flask request object
            action: Action that was performed
            success: Whether the action succeeded
            response_data: Data being returned to client
            session_id: Hurdle session identifier if applicable
            **kwargs: Additional details to log
        """
        details = {
            'session_id': session_id,
            'success': success,
            'response_data': self._sanitize_response_data(response_data),
            **kwargs
        }

        event_type = 'SERVER_RESPONSE_SUCCESS' if success else 'SERVER_RESPONSE_ERROR'
        log_message = self._create_log_entry(event_type, action, self._get_user_identity(request), details)

        if success:
            self.logger.info(log_message)
        else:
            self.logger.error(log_message)

    def log_game_event(self,
                      session_id: Optional[str],
                      event: str,
                      **kwargs):
        """
        Log hurdle events (hurdle_completed, session_ended, auto_guess, ...).

        Args:
            session_id: Hurdle session identifier
            event: Type of game event
            **kwargs: Additional game details
        """
        details = {
            'session_id': session_id,
            **kwargs
        }

        log_message = self._create_log_entry('GAME_EVENT', event, {'user_ip': 'system'}, details)
        self.logger.info(log_message)

    def log_error(self,
                 request,
                 error: Exception,
                 action: str,
                 session_id: Optional[str] = None):
        """
        Log errors with full context.

        Args:
            request: Flask request object
            error: Exception that occurred
            action: Action that was being performed
            session_id: Hurdle session identifier if applicable
        """
        details = {
            'session_id': session_id,
            'error_type': type(error).__name__,
            'error_message': str(error),
            'action': action
        }

        log_message = self._create_log_entry('ERROR', action, self._get_user_identity(request), details)
        self.logger.error(log_message)

    def _sanitize_response_data(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Keep log lines short and never write an unrevealed answer."""
        if not isinstance(data, dict):
            return {'data_type': type(data).__name__}

        sanitized = data.copy()

        if 'state' in sanitized and isinstance(sanitized['state'], dict):
            state = sanitized['state']
            round_state = state.get('round') or {}
            sanitized['state'] = {
                'current_hurdle_number': state.get('current_hurdle_number'),
                'completed_hurdles_count': state.get('completed_hurdles_count'),
                'total_score': state.get('total_score'),
                'round_status': round_state.get('status'),
                'guesses_count': round_state.get('guess_count'),
                'answer_revealed': round_state.get('answer') is not None
            }

        return sanitized

    def get_log_stats(self) -> Dict[str, Any]:
        """Get statistics about logged events (useful for monitoring)."""
        log_file = self._log_file()
        if not log_file.exists():
            return {'error': 'No log file found for today'}

        stats = {
            'log_file': str(log_file),
            'file_size_mb': round(log_file.stat().st_size / (1024 * 1024), 2),
            'total_entries': 0,
            'user_actions': 0,
            'server_responses': 0,
            'game_events': 0,
            'errors': 0
        }

        try:
            with open(log_file, 'r', encoding='utf-8') as f:
                for line in f:
                    if line.strip():
                        stats['total_entries'] += 1
                        if 'USER_ACTION' in line:
                            stats['user_actions'] += 1
                        elif 'SERVER_RESPONSE' in line:
                            stats['server_responses'] += 1
                        elif 'GAME_EVENT' in line:
                            stats['game_events'] += 1
                        elif 'ERROR' in line:
                            stats['errors'] += 1
        except OSError as e:
            return {'error': f'Failed to get stats: {e}'}

        return stats


# Global logger instance
game_logger = GameLogger(Config.LOG_DIR, Config.LOG_LEVEL)
