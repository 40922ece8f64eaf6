from enum import StrEnum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, SecretBytes

from loggers import get_logger
from src.main.config import JWTConfig

if TYPE_CHECKING:
    from src.token_auth.engine import TokenEngine
    from src.token_auth.store import SessionStore

logger = get_logger(__name__)


class LoginType(StrEnum):
    MULTI = "multi"  # stateless, any number of live tokens per subject
    SINGLE = "single"  # one live token per subject, tracked in the store

    @classmethod
    def _missing_(cls, value: object) -> "LoginType | None":
        aliases = {"mpop": cls.MULTI, "sso": cls.SINGLE}
        if isinstance(value, str):
            return aliases.get(value.lower())
        return None


class SigningAlgorithm(StrEnum):
    HS256 = "HS256"
    HS384 = "HS384"
    HS512 = "HS512"


class TokenSettings(BaseModel):
    ttl: int = Field(3600, gt=0)
    login_type: LoginType = LoginType.MULTI
    algorithm: SigningAlgorithm = SigningAlgorithm.HS256
    secret: SecretBytes = SecretBytes(b"")
    subject_key: str = "id"
    cache_prefix: str = "jwt"
    issuer: str = "soraca/jwt"

    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def secret_bytes(self) -> bytes:
        return self.secret.get_secret_value()


class TokenSettingsBuilder:
    """
    Collects engine options before the first token is issued.

    Every setter applies a non-empty value and quietly ignores an empty one,
    so unset environment variables fall back to the defaults of
    ``TokenSettings``.
    """

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}
        self._store: "SessionStore | None" = None

    def _apply(self, name: str, value: Any) -> "TokenSettingsBuilder":
        if not value:
            logger.debug("Ignoring empty value for token option %r", name)
            return self
        self._values[name] = value
        return self

    def set_ttl(self, ttl: int) -> "TokenSettingsBuilder":
        return self._apply("ttl", ttl)

    def set_login_type(self, login_type: str) -> "TokenSettingsBuilder":
        return self._apply("login_type", login_type)

    def set_algorithm(self, algorithm: str) -> "TokenSettingsBuilder":
        return self._apply("algorithm", algorithm)

    def set_secret(self, secret: str | bytes) -> "TokenSettingsBuilder":
        if isinstance(secret, str):
            secret = secret.encode("utf-8")
        return self._apply("secret", secret)

    def set_subject_key(self, subject_key: str) -> "TokenSettingsBuilder":
        return self._apply("subject_key", subject_key)

    def set_cache_prefix(self, cache_prefix: str) -> "TokenSettingsBuilder":
        return self._apply("cache_prefix", cache_prefix)

    def set_issuer(self, issuer: str) -> "TokenSettingsBuilder":
        return self._apply("issuer", issuer)

    def set_store(self, store: "SessionStore | None") -> "TokenSettingsBuilder":
        if store is not None:
            self._store = store
        return self

    def build_settings(self) -> TokenSettings:
        return TokenSettings(**self._values)

    def build(self) -> "TokenEngine":
        from src.token_auth.engine import TokenEngine

        return TokenEngine(self.build_settings(), store=self._store)


def settings_builder_from_config(jwt_config: JWTConfig) -> TokenSettingsBuilder:
    return (
        TokenSettingsBuilder()
        .set_ttl(jwt_config.JWT_TTL)
        .set_login_type(jwt_config.JWT_LOGIN_TYPE)
        .set_algorithm(jwt_config.JWT_ALGORITHM)
        .set_secret(jwt_config.JWT_SECRET_KEY)
        .set_subject_key(jwt_config.JWT_SUBJECT_KEY)
        .set_cache_prefix(jwt_config.JWT_CACHE_PREFIX)
        .set_issuer(jwt_config.JWT_ISSUER)
    )


def build_token_settings(jwt_config: JWTConfig) -> TokenSettings:
    return settings_builder_from_config(jwt_config).build_settings()


def build_token_engine(
    jwt_config: JWTConfig, store: "SessionStore | None" = None
) -> "TokenEngine":
    """Build an engine from the environment-backed JWT section of the config."""
    return settings_builder_from_config(jwt_config).set_store(store).build()
