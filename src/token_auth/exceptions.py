from enum import StrEnum
from typing import Any, ClassVar

from src.core.errors.exceptions import CoreException


class TokenErrorKind(StrEnum):
    MALFORMED_TOKEN = "malformed_token"
    ALGORITHM_MISMATCH = "algorithm_mismatch"
    INVALID_SIGNATURE = "invalid_signature"
    TOKEN_EXPIRED = "token_expired"
    TOKEN_NOT_YET_EFFECTIVE = "token_not_yet_effective"
    MISSING_SUBJECT_KEY = "missing_subject_key"
    STORE_UNAVAILABLE = "store_unavailable"
    CONFIGURATION_ERROR = "configuration_error"


class TokenException(CoreException):
    """
    Base for every failure raised by the token engine.

    Subclasses pin the externally visible ``kind`` and the HTTP status the
    error handler answers with.
    """

    kind: ClassVar[TokenErrorKind]
    status_code: ClassVar[int] = 401
    default_message: ClassVar[str] = "Invalid token"

    def __init__(
        self, message: str | None = None, additional_info: dict[str, Any] | None = None
    ):
        super().__init__(
            message or self.default_message,
            {"kind": str(self.kind), **(additional_info or {})},
        )


class MalformedTokenException(TokenException):
    kind = TokenErrorKind.MALFORMED_TOKEN
    default_message = "Token is invalid"


class AlgorithmMismatchException(TokenException):
    kind = TokenErrorKind.ALGORITHM_MISMATCH
    default_message = "Algorithm is invalid"


class InvalidSignatureException(TokenException):
    kind = TokenErrorKind.INVALID_SIGNATURE
    default_message = "Signature is invalid"


class TokenExpiredException(TokenException):
    kind = TokenErrorKind.TOKEN_EXPIRED
    default_message = "Token is expired"


class TokenNotYetEffectiveException(TokenException):
    kind = TokenErrorKind.TOKEN_NOT_YET_EFFECTIVE
    default_message = "Token not yet effective"


class MissingSubjectKeyException(TokenException):
    kind = TokenErrorKind.MISSING_SUBJECT_KEY
    status_code = 400
    default_message = "Subject key is missing from the claims"


class StoreUnavailableException(TokenException):
    kind = TokenErrorKind.STORE_UNAVAILABLE
    status_code = 503
    default_message = "Session store is unavailable"


class TokenConfigurationException(TokenException):
    kind = TokenErrorKind.CONFIGURATION_ERROR
    status_code = 500
    default_message = "Token engine is misconfigured"
