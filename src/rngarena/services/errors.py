"""Service-layer exceptions."""


class CombatError(Exception):
    """Base class for combat engine misuse."""


class CombatSetupError(CombatError):
    """Raised when a combat session is constructed with invalid inputs."""


class CombatAlreadyStartedError(CombatError):
    """Raised when start() is called on a session that has already started."""


class CombatEndedError(CombatError):
    """Raised when a beat is requested from a session that has already ended."""
