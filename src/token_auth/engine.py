from collections.abc import Callable, Mapping
from typing import Any
from uuid import uuid4

from loggers import get_logger
from src.core.utils.datetime_utils import get_unix_now
from src.token_auth.claims import EXPIRE, ISSUED_AT, NOT_BEFORE, Claims
from src.token_auth.encoding import (
    decode_segment,
    encode_segment,
    sign,
    signature_matches,
)
from src.token_auth.exceptions import (
    AlgorithmMismatchException,
    InvalidSignatureException,
    MalformedTokenException,
    MissingSubjectKeyException,
    TokenConfigurationException,
    TokenExpiredException,
    TokenNotYetEffectiveException,
)
from src.token_auth.settings import LoginType, TokenSettings
from src.token_auth.store import SessionStore

logger = get_logger(__name__)

TOKEN_TYPE = "JWT"
REVOKED_SENTINEL = "0"
REVOKED_ENTRY_TTL_SECONDS = 7200


def generate_jti(prefix: str) -> str:
    return f"{prefix}{uuid4().hex}"


class TokenEngine:
    """
    Issues and verifies ``header.body.signature`` tokens.

    In single login mode the store maps every subject to the jti of its only
    live token; issuing a new token for the subject overwrites that entry and
    so invalidates every earlier token. Concurrent issuances for one subject
    resolve by the store's last write.
    """

    def __init__(
        self,
        settings: TokenSettings,
        store: SessionStore | None = None,
        clock: Callable[[], int] = get_unix_now,
    ) -> None:
        if settings.login_type == LoginType.SINGLE and store is None:
            raise TokenConfigurationException(
                "Single login mode requires a session store"
            )
        self.settings = settings
        self._store = store
        self._clock = clock

    @property
    def store(self) -> SessionStore:
        if self._store is None:
            raise TokenConfigurationException("Session store is not configured")
        return self._store

    def whitelist_key(self, subject: Any) -> str:
        return f"{self.settings.cache_prefix}:{subject}"

    # ----- Session store protocol ----- #
    async def add_to_whitelist(self, subject: Any, jti: str) -> bool:
        """Mark ``jti`` as the only live token of ``subject``. The entry never expires."""
        return await self.store.set(self.whitelist_key(subject), jti)

    async def revoke(self, subject: Any) -> bool:
        """
        Invalidate the live token of ``subject``.

        The whitelist entry is overwritten with a value no jti can equal and
        left to expire on its own.
        """
        result = await self.store.set(
            self.whitelist_key(subject),
            REVOKED_SENTINEL,
            ttl=REVOKED_ENTRY_TTL_SECONDS,
        )
        logger.info("Revoked session of subject %s", subject)
        return result

    async def is_effective(self, claims: Claims) -> bool:
        if self.settings.login_type == LoginType.MULTI:
            return True
        stored_jti = await self.store.get(self.whitelist_key(claims.audience))
        return stored_jti is not None and claims.jti == stored_jti

    # ----- Issue / verify ----- #
    async def issue(self, claims: Mapping[str, Any]) -> str:
        """
        Issue a signed token for the given custom claims.

        Args:
            claims: Caller claims, stored under ``payload``. The value under
                the configured subject key becomes the token audience.

        Returns:
            str: ``header.body.signature``

        Raises:
            MissingSubjectKeyException: Single login mode and the subject key
                is absent or empty.
            StoreUnavailableException: The whitelist entry could not be written.
            TypeError: A claim is not JSON serializable. Nothing is written.
        """
        now = self._clock()
        settings = self.settings
        container = Claims()

        subject = claims.get(settings.subject_key)
        if subject is not None:
            container.audience = subject

        if settings.login_type == LoginType.MULTI:
            jti = generate_jti(settings.cache_prefix)
        else:
            # 0, "0", False and empty containers count as no subject
            if not subject or subject == "0":
                raise MissingSubjectKeyException(
                    f"There is no {settings.subject_key} key in the claims"
                )
            jti = generate_jti(f"{settings.cache_prefix}{subject}")

        container.issuer = settings.issuer
        container.jti = jti
        container.issued_at = now
        container.not_before = now
        container.expire = now + settings.ttl
        container.payload = claims

        header = encode_segment(
            {"algorithm": str(settings.algorithm), "type": TOKEN_TYPE}
        )
        body = encode_segment(container.to_dict())
        signature = sign(f"{header}.{body}", settings.secret_bytes, settings.algorithm)

        # Only a fully signed token may supersede the subject's live session
        if settings.login_type == LoginType.SINGLE:
            await self.add_to_whitelist(subject, jti)

        logger.info("Issued token %s for subject %r", jti, container.audience)
        return f"{header}.{body}.{signature}"

    async def verify(self, token: str) -> Claims:
        """
        Verify a token and return its claims.

        Time bounds are checked in a fixed order: issued-in-the-future or
        expired, then session liveness, then not-before. The first failing
        check decides the error.

        Raises:
            MalformedTokenException: Not three segments or undecodable segment.
            AlgorithmMismatchException: Header algorithm differs from the engine's.
            InvalidSignatureException: Signature does not match.
            TokenExpiredException: Expired, issued in the future, or superseded
                by a newer session.
            TokenNotYetEffectiveException: ``nbf`` lies in the future.
        """
        segments = token.split(".")
        if len(segments) != 3:
            logger.debug("Rejected token with %s segments", len(segments))
            raise MalformedTokenException()
        header_segment, body_segment, signature_segment = segments

        header = decode_segment(header_segment)
        algorithm = header.get("algorithm")
        if not algorithm or algorithm != self.settings.algorithm:
            logger.debug("Rejected token signed with algorithm %r", algorithm)
            raise AlgorithmMismatchException()

        signing_input = f"{header_segment}.{body_segment}"
        if not signature_matches(
            signing_input,
            signature_segment,
            self.settings.secret_bytes,
            self.settings.algorithm,
        ):
            logger.debug("Rejected token with invalid signature")
            raise InvalidSignatureException()

        claims = Claims(decode_segment(body_segment))
        now = self._clock()

        if (claims.is_set(ISSUED_AT) and claims.issued_at > now) or (
            claims.is_set(EXPIRE) and claims.expire < now
        ):
            logger.debug("Rejected expired token %s", claims.jti)
            raise TokenExpiredException()
        if not await self.is_effective(claims):
            logger.debug("Rejected superseded token %s", claims.jti)
            raise TokenExpiredException()
        if claims.is_set(NOT_BEFORE) and claims.not_before > now:
            logger.debug("Rejected token %s before nbf", claims.jti)
            raise TokenNotYetEffectiveException()

        return claims
