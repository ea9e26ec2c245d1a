"""Exception types raised by the board generation engine."""


class ConfigurationError(ValueError):
    """Invalid board or generation settings; generation cannot start."""


class InvariantViolation(RuntimeError):
    """A precondition of the engine was broken by its caller."""


class GenerationExhausted(RuntimeError):
    """No verified layout was found within the attempt cap (strict policy only)."""

    def __init__(self, attempts: int) -> None:
        super().__init__(
            f"No logically solvable layout found after {attempts} attempts."
        )
        self.attempts = attempts
