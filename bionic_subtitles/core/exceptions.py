# bionic_subtitles/core/exceptions.py
"""
Errors raised by the processing engine.
"""


class BionicError(ValueError):
    """Base class for invalid processing requests."""

    def __init__(self, value, message: str):
        super().__init__(message)
        self.value = value


class InvalidFormat(BionicError):
    def __init__(self, value):
        super().__init__(value, f"format must be srt, vtt, ass, or plain (got {value!r})")


class InvalidMode(BionicError):
    def __init__(self, value):
        super().__init__(value, f"mode must be focus or calm (got {value!r})")


class InvalidEmphasisMode(BionicError):
    def __init__(self, value):
        super().__init__(value, f"emphasis mode must be markup or unicode (got {value!r})")


class UnsupportedFormat(BionicError):
    def __init__(self, value):
        super().__init__(value, f"Unsupported format: {value}")
