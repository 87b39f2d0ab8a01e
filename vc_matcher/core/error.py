"""Exception hierarchy shared by every vc_matcher module."""

import re

LINE_BREAK = re.compile(r"\n\s*")


def _as_sentence(exc: BaseException) -> str:
    text = str(exc.args[0]).strip() if exc.args else type(exc).__name__
    return LINE_BREAK.sub(". ", text).strip().rstrip(".")


class BaseError(Exception):
    """Root of the vc_matcher exceptions, optionally tagged with an error code."""

    def __init__(self, *args, error_code: str = None):
        """Initialize the error."""
        super().__init__(*args)
        self.error_code = error_code or None

    @property
    def message(self) -> str:
        """First argument of the error, stripped; empty when there is none."""
        return str(self.args[0]).strip() if self.args else ""

    @property
    def roll_up(self) -> str:
        """The error followed by its chain of causes, as one line of sentences."""
        sentences = []
        exc = self
        while exc is not None:
            sentences.append(_as_sentence(exc))
            exc = exc.__cause__
        return ". ".join(sentences) + "."
