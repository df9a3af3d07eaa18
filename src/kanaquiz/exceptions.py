class KanaQuizError(Exception):
    """Base class for all quiz errors."""


class ConfigurationError(KanaQuizError):
    """The pair table or batch settings cannot produce well-formed questions."""


class UnknownModeError(KanaQuizError):
    def __init__(self, mode: str):
        super().__init__(f"Unknown character set: {mode}")
        self.mode = mode


class InvalidAnswerError(KanaQuizError):
    pass
