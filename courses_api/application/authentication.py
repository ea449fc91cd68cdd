"""Basic-аутентификация запроса.

Результат возвращается значением (Authenticated / Rejected), а не
складывается в объект запроса: обработчик сам решает, что с ним делать.
Причина отказа нужна только для логов, клиент всегда видит один и тот же 401.
"""
import base64
import binascii
from dataclasses import dataclass

from ..domain.entities import User
from .ports import IPasswordHasher, IUserRepository

MISSING_CREDENTIALS = "missing credentials"
UNKNOWN_IDENTIFIER = "unknown identifier"
CREDENTIAL_MISMATCH = "credential mismatch"


@dataclass(frozen=True)
class Credentials:
    identifier: str
    secret: str


@dataclass(frozen=True)
class Authenticated:
    identity: User


@dataclass(frozen=True)
class Rejected:
    reason: str
    identifier: str | None = None


AuthResult = Authenticated | Rejected


def parse_basic_credentials(authorization: str | None) -> Credentials | None:
    """`Basic base64(email:password)` -> Credentials, иначе None."""
    if not authorization:
        return None
    scheme, _, param = authorization.strip().partition(" ")
    if scheme.lower() != "basic" or not param.strip():
        return None
    try:
        decoded = base64.b64decode(param.strip().encode("ascii"), validate=True).decode("utf-8")
    except (UnicodeEncodeError, binascii.Error, UnicodeDecodeError):
        # Starlette отдаёт заголовки как latin-1, там бывает не-ASCII
        return None
    # пароль может содержать ":", режем только по первому
    identifier, sep, secret = decoded.partition(":")
    if not sep or not identifier:
        return None
    return Credentials(identifier=identifier, secret=secret)


class Authenticator:
    def __init__(self, users: IUserRepository, hasher: IPasswordHasher):
        self.users = users
        self.hasher = hasher

    def authenticate(self, authorization: str | None) -> AuthResult:
        creds = parse_basic_credentials(authorization)
        if creds is None:
            return Rejected(MISSING_CREDENTIALS)

        user = self.users.get_by_email(creds.identifier)
        if user is None:
            self.hasher.dummy_verify()
            return Rejected(UNKNOWN_IDENTIFIER, creds.identifier)

        if not self.hasher.verify(creds.secret, user.password_hash):
            return Rejected(CREDENTIAL_MISMATCH, creds.identifier)
        return Authenticated(user)
