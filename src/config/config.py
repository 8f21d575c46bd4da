import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import yaml

logger = logging.getLogger(__name__)

SETTINGS_PATH = Path(__file__).with_name('solver.yaml')


@dataclass
class SolverSettings:
    timeout_seconds: float = 30.0
    max_matches: Optional[int] = None
    reply_limit: int = 5


class Config:
    def __init__(self, settings_path: Optional[Path] = None, require_discord: bool = True):
        self.discord_token = os.getenv('DISCORD_TOKEN')
        self.owner_id = os.getenv('OWNER_ID')
        self.log_level = os.getenv('LOG_LEVEL', 'INFO').upper()
        self.solver = self._load_solver_settings(settings_path or SETTINGS_PATH)
        self._apply_env_overrides()
        self._check_solver_settings()

        # Validate required environment variables
        if require_discord and not all([self.discord_token, self.owner_id]):
            raise ValueError("Missing required environment variables")

    def _load_solver_settings(self, path: Path) -> SolverSettings:
        if not path.is_file():
            logger.warning("Solver settings file %s not found, using defaults", path)
            return SolverSettings()

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error("YAML parsing error in %s: %s", path, e)
            raise ValueError(f"Failed to load solver settings: {e}") from e

        if not data:
            return SolverSettings()

        section = data.get('solver', {}) or {}
        max_matches = section.get('max_matches')
        try:
            return SolverSettings(
                timeout_seconds=float(section.get('timeout_seconds', 30.0)),
                max_matches=int(max_matches) if max_matches is not None else None,
                reply_limit=int(section.get('reply_limit', 5)),
            )
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid solver setting in {path}: {e}") from e

    def _apply_env_overrides(self) -> None:
        try:
            timeout = os.getenv('COUNTDOWN_TIMEOUT')
            if timeout:
                self.solver.timeout_seconds = float(timeout)

            max_matches = os.getenv('COUNTDOWN_MAX_MATCHES')
            if max_matches:
                self.solver.max_matches = int(max_matches)

            reply_limit = os.getenv('COUNTDOWN_REPLY_LIMIT')
            if reply_limit:
                self.solver.reply_limit = int(reply_limit)
        except ValueError as e:
            raise ValueError(f"Invalid solver override in environment: {e}") from e

    def _check_solver_settings(self) -> None:
        settings = self.solver
        if settings.timeout_seconds < 0:
            raise ValueError(f"Invalid solver setting: timeout_seconds must be >= 0, "
                             f"got {settings.timeout_seconds}")
        if settings.max_matches is not None and settings.max_matches <= 0:
            raise ValueError(f"Invalid solver setting: max_matches must be positive, "
                             f"got {settings.max_matches}")
        if settings.reply_limit < 1:
            raise ValueError(f"Invalid solver setting: reply_limit must be >= 1, "
                             f"got {settings.reply_limit}")
