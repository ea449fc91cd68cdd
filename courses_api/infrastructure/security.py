from passlib.context import CryptContext

from ..config import settings

pwd = CryptContext(
    schemes=["bcrypt_sha256"],
    deprecated="auto",
    bcrypt_sha256__rounds=settings.PASSWORD_HASH_ROUNDS,
    bcrypt_sha256__truncate_error=False,
)


class PasswordHasher:
    def hash(self, plain: str) -> str: return pwd.hash(plain)

    def verify(self, plain: str, hashed: str) -> bool:
        """Сравнение через passlib (соль + сравнение за постоянное время).

        Битый хэш в БД считаем несовпадением, а не ошибкой сервера.
        """
        try:
            return pwd.verify(plain, hashed)
        except (ValueError, TypeError):
            return False

    def dummy_verify(self) -> None:
        # тратим столько же времени, сколько на настоящую проверку,
        # чтобы по задержке нельзя было понять, существует ли email
        pwd.dummy_verify()
