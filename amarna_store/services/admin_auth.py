"""管理後台密碼驗證。"""

from __future__ import annotations

import hmac

LOGIN_ERROR_MESSAGE = "كلمة المرور غير صحيحة"


class AdminAuthenticator:
    """Single shared admin password; no accounts, lockout or tokens."""

    def __init__(self, password: str) -> None:
        self._password = password.encode("utf-8")

    def verify(self, candidate: str) -> bool:
        if not candidate:
            return False
        return hmac.compare_digest(candidate.encode("utf-8"), self._password)
