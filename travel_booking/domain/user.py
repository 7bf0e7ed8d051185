import hmac

from pydantic import BaseModel, Field


class User(BaseModel):
    """Учетная запись пользователя системы."""

    username: str = Field(..., min_length=1, max_length=49, pattern=r"^\S+$")
    password: str = Field(..., min_length=1, max_length=49)
    is_admin: bool = False

    @property
    def role(self) -> str:
        return "admin" if self.is_admin else "user"

    def check_password(self, password: str) -> bool:
        """Сравнивает пароль с сохраненным."""
        return hmac.compare_digest(self.password.encode(), password.encode())
