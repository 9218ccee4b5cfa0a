"""Bearer token verification for optional voter identity."""

import time
from typing import Any, Dict, List, NamedTuple, Optional

import httpx
import structlog
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from rankings.config import settings

logger = structlog.get_logger(__name__)

# Optional bearer: missing header yields None instead of 403
bearer_scheme = HTTPBearer(auto_error=False)


class InvalidToken(Exception):
    """Token could not be verified."""


class VerifiedUser(NamedTuple):
    sub: str
    email: Optional[str] = None
    name: Optional[str] = None


class IdentityVerifier:
    """
    Verify bearer tokens.

    With an issuer domain configured, RS256 tokens are checked against the
    issuer's published signing keys (fetched over HTTPS and cached).
    Without one, HS256 tokens signed with ``secret_key`` are accepted.
    """

    def __init__(
        self,
        domain: str = "",
        audience: str = "",
        secret_key: str = "",
        algorithm: str = "HS256",
        jwks_ttl: float = 3600,
        jwks_min_refresh: float = 60,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.domain = domain
        self.audience = audience
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.jwks_ttl = jwks_ttl
        self.jwks_min_refresh = jwks_min_refresh
        self._http_client = http_client
        self._jwks: List[Dict[str, Any]] = []
        self._jwks_fetched_at: Optional[float] = None
        self._last_refresh_attempt: Optional[float] = None

    @property
    def issuer(self) -> str:
        return f"https://{self.domain}/"

    @property
    def jwks_url(self) -> str:
        return f"https://{self.domain}/.well-known/jwks.json"

    async def verify(self, token: str) -> VerifiedUser:
        """Return the token's subject and profile claims, or raise ``InvalidToken``."""
        try:
            if self.domain:
                claims = await self._decode_rs256(token)
            else:
                claims = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as exc:
            raise InvalidToken(str(exc)) from exc

        sub = claims.get("sub")
        if not sub:
            raise InvalidToken("Token has no subject")
        return VerifiedUser(sub=str(sub), email=claims.get("email"), name=claims.get("name"))

    async def _decode_rs256(self, token: str) -> Dict[str, Any]:
        kid = jwt.get_unverified_header(token).get("kid")
        key = await self._signing_key(kid)
        options = {"verify_aud": bool(self.audience)}
        return jwt.decode(
            token,
            key,
            algorithms=["RS256"],
            audience=self.audience or None,
            issuer=self.issuer,
            options=options,
        )

    async def _signing_key(self, kid: Optional[str]) -> Dict[str, Any]:
        key = self._find_key(kid) if self._jwks_fresh() else None
        if key is None and self._refresh_allowed():
            # Unknown kid may mean the issuer rotated keys
            await self._refresh_jwks()
            key = self._find_key(kid)
        if key is None:
            raise InvalidToken("No signing key matches token")
        return key

    def _jwks_fresh(self) -> bool:
        if self._jwks_fetched_at is None:
            return False
        return time.monotonic() - self._jwks_fetched_at < self.jwks_ttl

    def _refresh_allowed(self) -> bool:
        """At most one fetch attempt per ``jwks_min_refresh`` seconds, successful or not."""
        if self._last_refresh_attempt is None:
            return True
        return time.monotonic() - self._last_refresh_attempt >= self.jwks_min_refresh

    def _find_key(self, kid: Optional[str]) -> Optional[Dict[str, Any]]:
        for key in self._jwks:
            if key.get("kid") == kid:
                return key
        return None

    async def _refresh_jwks(self) -> None:
        self._last_refresh_attempt = time.monotonic()
        try:
            if self._http_client is not None:
                response = await self._http_client.get(self.jwks_url)
            else:
                async with httpx.AsyncClient(timeout=10.0) as client:
                    response = await client.get(self.jwks_url)
            response.raise_for_status()
            keys = response.json().get("keys", [])
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("jwks_fetch_failed", url=self.jwks_url, error=str(exc))
            raise InvalidToken("Signing keys unavailable") from exc

        self._jwks = keys
        self._jwks_fetched_at = time.monotonic()
        logger.info("jwks_refreshed", url=self.jwks_url, key_count=len(keys))


identity_verifier = IdentityVerifier(
    domain=settings.AUTH0_DOMAIN,
    audience=settings.AUTH0_AUDIENCE,
    secret_key=settings.SECRET_KEY,
    algorithm=settings.ALGORITHM,
    jwks_ttl=settings.JWKS_CACHE_TTL_SECONDS,
    jwks_min_refresh=settings.JWKS_MIN_REFRESH_SECONDS,
)


def get_identity_verifier() -> IdentityVerifier:
    return identity_verifier


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> Optional[VerifiedUser]:
    """Verified caller, or None when no usable token was sent."""
    if credentials is None:
        return None
    try:
        return await verifier.verify(credentials.credentials)
    except InvalidToken as exc:
        logger.info("bearer_token_rejected", reason=str(exc))
        return None
