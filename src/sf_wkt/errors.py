"""
Exceptions raised by the simple features model and WKT codec.
"""


class SFException(Exception):
    """Base error for simple features handling"""


class WKTParseError(SFException, ValueError):
    """
    Malformed Well-Known Text.

    Attributes:
        token: The offending token, or None at end of input
        expected: Acceptable alternatives at the failure point, if known
    """

    def __init__(
        self,
        message: str,
        token: str | None = None,
        expected: tuple[str, ...] = (),
    ):
        super().__init__(message)
        self.token = token
        self.expected = expected
