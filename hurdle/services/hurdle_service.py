"""
Hurdle Service

Keeps one ChainController per play session and turns controller results
into the plain dictionaries the HTTP layer returns.
"""

import datetime
from dataclasses import asdict
from typing import Dict, List, Optional

from ..config.app_config import Config
from ..config.game_settings import DEFAULT_MAX_ATTEMPTS
from ..models.game import RoundStatus
from ..models.hurdle import EndReason
from ..utils.game_logger import game_logger
from .chain_service import ChainController
from .stats_service import InMemoryStatsRepository, StatsRepository
from .word_provider import FrequencyRange, LocalWordProvider, WordProvider


class HurdleService:
    """
    Session registry for hurdle play.

    This class handles:
    - Creating sessions with a unique session ID
    - Routing guesses to the right controller
    - Completing won hurdles and closing lost sessions
    - Exposing state without revealing unfinished answers
    - Evicting closed sessions once their retention period has passed
    """

    def __init__(self,
                 word_provider: Optional[WordProvider] = None,
                 stats_repository: Optional[StatsRepository] = None,
                 provider_attempts: int = Config.WORD_PROVIDER_RETRIES,
                 retention_seconds: int = Config.SESSION_RETENTION_SECONDS):
        self.word_provider = word_provider or LocalWordProvider()
        self.stats_repository = stats_repository or InMemoryStatsRepository()
        self.provider_attempts = provider_attempts
        self.retention_seconds = retention_seconds
        self.sessions: Dict[str, ChainController] = {}

    def _get_controller(self, session_id: str) -> Optional[ChainController]:
        return self.sessions.get(session_id)

    async def create_session(self,
                             max_attempts: int = DEFAULT_MAX_ATTEMPTS,
                             difficulty: Optional[str] = None,
                             hard_mode: bool = False) -> ChainController:
        """
        Starts a new session at hurdle 1.

        Args:
            max_attempts: Attempts per hurdle (3 or 4)
            difficulty: 'easy', 'medium' or 'hard'; None leaves frequency unconstrained
            hard_mode: Whether revealed clues must be reused

        Returns:
            ChainController: The controller now registered under its session ID
        """
        self.cleanup_closed_sessions()

        controller = ChainController(
            self.word_provider,
            stats_repository=self.stats_repository,
            provider_attempts=self.provider_attempts,
        )
        frequency_range = FrequencyRange.for_difficulty(difficulty) if difficulty else None
        await controller.start_session(max_attempts, frequency_range, hard_mode)

        self.sessions[controller.session_id] = controller
        return controller

    def get_state(self, session_id: str) -> Optional[Dict]:
        controller = self._get_controller(session_id)
        if controller is None:
            return None
        return asdict(controller.get_state())

    async def submit_guess(self, session_id: str, guess) -> Optional[Dict]:
        """
        Submits a guess and settles the outcome.

        A win completes the hurdle; a loss ends the session with 'failure'.

        Returns:
            dict with the guess result, optional transition and state, or
            None if the session does not exist
        """
        controller = self._get_controller(session_id)
        if controller is None:
            return None

        result = await controller.submit_guess(guess)
        response = {'result': result.to_dict(), 'transition': None}

        if result.success:
            response['transition'] = self._settle_round(controller, result.status)

        response['state'] = asdict(controller.get_state())
        return response

    async def start_next_hurdle(self, session_id: str) -> Optional[Dict]:
        """
        Opens the next hurdle with the previous answer as guess #1.

        If the auto-guess happens to solve the new hurdle it is completed
        immediately as a 1-guess hurdle.
        """
        controller = self._get_controller(session_id)
        if controller is None:
            return None

        round_state = await controller.start_next_round()
        transition = self._settle_round(controller, round_state.status)

        return {
            'auto_guess': round_state.get_guesses()[0].to_dict(),
            'transition': transition,
            'state': asdict(controller.get_state()),
        }

    def stop_session(self, session_id: str) -> Optional[Dict]:
        """Ends a session by player choice, revealing the unsolved answer."""
        controller = self._get_controller(session_id)
        if controller is None:
            return None

        current = controller.current_round
        final_answer = current.target_word if current and not current.is_over() else None
        session = controller.end_session(EndReason.MANUAL_STOP, final_answer)

        return {
            'session': session.to_dict(),
            'final_score': controller.calculate_final_score(),
            'state': asdict(controller.get_state()),
        }

    def delete_session(self, session_id: str) -> bool:
        """
        Removes a session from the registry.

        Returns:
            bool: True if the session was deleted, False if not found
        """
        if session_id in self.sessions:
            del self.sessions[session_id]
            return True
        return False

    def cleanup_closed_sessions(self, now: Optional[datetime.datetime] = None) -> int:
        """
        Remove sessions that ended more than `retention_seconds` ago.

        Closed sessions stay readable (final state, answer) until then.
        Called on every session creation.

        Returns:
            int: Number of sessions removed
        """
        cutoff_time = (now or datetime.datetime.now()) - datetime.timedelta(seconds=self.retention_seconds)

        expired_ids = [
            session_id for session_id, controller in self.sessions.items()
            if controller.session is not None
            and controller.session.end_time is not None
            and controller.session.end_time <= cutoff_time
        ]

        for session_id in expired_ids:
            del self.sessions[session_id]

        if expired_ids:
            game_logger.logger.info(f"Session cleanup: removed {len(expired_ids)} closed sessions")

        return len(expired_ids)

    def get_active_session_count(self) -> int:
        return sum(1 for controller in self.sessions.values() if controller.is_active())

    def get_statistics(self) -> Dict:
        return self.stats_repository.get_statistics().to_dict()

    def get_recent_rounds(self, limit: int = 10) -> List[Dict]:
        return self.stats_repository.get_recent_rounds(limit)

    def _settle_round(self, controller: ChainController, status: RoundStatus) -> Optional[Dict]:
        if status == RoundStatus.WON:
            return controller.complete_round().to_dict()

        if status == RoundStatus.LOST:
            controller.end_session(EndReason.FAILURE, controller.current_round.target_word)

        return None


# Global service instance
_hurdle_service = None


def get_hurdle_service() -> Optional[HurdleService]:
    """Get the global hurdle service instance."""
    return _hurdle_service


def initialize_hurdle_service(word_provider: Optional[WordProvider] = None,
                              stats_repository: Optional[StatsRepository] = None) -> HurdleService:
    """Initialize the global hurdle service instance."""
    global _hurdle_service
    _hurdle_service = HurdleService(word_provider, stats_repository)
    return _hurdle_service
