from __future__ import annotations

import logging
from dataclasses import dataclass

from bikelock.core.errors import InvalidInputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LoginResult:
    message: str
    user: str


class LoginUseCase:
    """Accepts any non-empty username. No credentials are checked and no session is created."""

    def execute(self, *, username: str | None) -> LoginResult:
        if not username:
            raise InvalidInputError("Username required")

        logger.info("User %r logged in", username)
        return LoginResult(message="Logged in", user=username)
