"""Credential verification and bearer token handling.

The token service issues and verifies signed JWTs carrying the
username and role. The user directory holds the two seeded accounts
from settings with hashed passwords.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from catalog_api.domain.exceptions import UnauthenticatedError
from catalog_api.domain.value_objects import Principal, Role
from catalog_api.infrastructure.config import settings

MIN_SECRET_LENGTH = 32

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class TokenService:
    """Issues and verifies HMAC-signed JWT bearer tokens."""

    def __init__(
        self,
        secret: str,
        issuer: str,
        algorithm: str = "HS256",
        expiration_minutes: int = 60,
    ) -> None:
        """Initialize token service.

        Args:
            secret: Signing secret (at least 32 characters).
            issuer: Value of the ``iss`` claim.
            algorithm: JWS algorithm.
            expiration_minutes: Token lifetime.

        Raises:
            ValueError: If the secret is too short.
        """
        if len(secret) < MIN_SECRET_LENGTH:
            raise ValueError(f"JWT secret must be at least {MIN_SECRET_LENGTH} characters")
        self._secret = secret
        self._issuer = issuer
        self._algorithm = algorithm
        self._expiration = timedelta(minutes=expiration_minutes)

    def issue(self, principal: Principal, now: datetime | None = None) -> str:
        """Issue a signed token for a principal."""
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "sub": principal.username,
            "role": principal.role.value,
            "iss": self._issuer,
            "iat": issued_at,
            "exp": issued_at + self._expiration,
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> Principal:
        """Verify a token and return its principal.

        Raises:
            UnauthenticatedError: If the token is expired, forged, or malformed.
        """
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                issuer=self._issuer,
            )
        except JWTError as e:
            raise UnauthenticatedError(
                "Invalid or expired token", error_code="INVALID_TOKEN"
            ) from e

        username = claims.get("sub")
        try:
            role = Role(claims.get("role"))
        except ValueError:
            role = None

        if not username or role is None:
            raise UnauthenticatedError("Invalid or expired token", error_code="INVALID_TOKEN")

        return Principal(username=username, role=role)


@dataclass(frozen=True)
class UserAccount:
    """A known user with a hashed password."""

    username: str
    password_hash: str
    role: Role


class UserDirectory:
    """Lookup of known accounts by username."""

    def __init__(self, accounts: list[UserAccount]) -> None:
        self._accounts = {account.username: account for account in accounts}

    @classmethod
    def from_credentials(cls, credentials: list[tuple[str, str, Role]]) -> "UserDirectory":
        """Build a directory from plain-text credentials, hashing each password."""
        return cls(
            [
                UserAccount(username, pwd_context.hash(password), role)
                for username, password, role in credentials
            ]
        )

    def authenticate(self, username: str, password: str) -> Principal | None:
        """Check a username/password pair.

        Returns:
            The principal on success, None otherwise.
        """
        account = self._accounts.get(username)
        if account is None:
            return None
        if not pwd_context.verify(password, account.password_hash):
            return None
        return Principal(username=account.username, role=account.role)


# Global instances
_token_service: TokenService | None = None
_user_directory: UserDirectory | None = None


def get_token_service() -> TokenService:
    """Get token service singleton."""
    global _token_service
    if _token_service is None:
        _token_service = TokenService(
            secret=settings.jwt_secret,
            issuer=settings.jwt_issuer,
            algorithm=settings.jwt_algorithm,
            expiration_minutes=settings.jwt_expiration_minutes,
        )
    return _token_service


def get_user_directory() -> UserDirectory:
    """Get user directory singleton seeded from settings."""
    global _user_directory
    if _user_directory is None:
        _user_directory = UserDirectory.from_credentials(
            [
                (settings.admin_username, settings.admin_password, Role.ADMIN),
                (settings.viewer_username, settings.viewer_password, Role.USER),
            ]
        )
    return _user_directory
