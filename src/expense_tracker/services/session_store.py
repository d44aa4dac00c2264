"""
Хранилище состояния мульти-аккаунтной сессии.

Раскладка ключей (для client_storage к ним добавляется префикс приложения, см. app.CLIENT_STORAGE_PREFIX):
- token: токен доступа, сырая строка
- user: активный пользователь, JSON объект
- accounts: известные аккаунты, JSON массив
- currentAccountId: идентификатор активного аккаунта, сырая строка

Состояние читается один раз при старте и перезаписывается целиком после каждой мутации.
"""

import json
import logging
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError

from expense_tracker.models import Account, SessionSnapshot, StorageKey
from expense_tracker.services.storage import KeyValueStore

logger = logging.getLogger(__name__)


class SessionStore:
    """Загрузка и сохранение SessionSnapshot в KeyValueStore."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def load(self) -> SessionSnapshot:
        """
        Читает сохранённое состояние.

        Повреждённые значения отбрасываются с предупреждением в логе.
        Пользователь восстанавливается, только если сохранён и токен.

        Raises:
            StorageError: Хранилище недоступно
        """
        raw = self.store.read(key.value for key in StorageKey)

        token = raw.get(StorageKey.TOKEN.value) or None
        user = self._parse_account(raw.get(StorageKey.USER.value))
        accounts = self._parse_accounts(raw.get(StorageKey.ACCOUNTS.value))
        current_account_id = raw.get(StorageKey.CURRENT_ACCOUNT_ID.value) or None

        if user is not None and token is None:
            logger.warning("В хранилище есть пользователь без токена, сессия не восстановлена")
            user = None

        snapshot = SessionSnapshot(
            token=token,
            user=user if token else None,
            accounts=accounts,
            current_account_id=current_account_id,
        )
        logger.info(
            f"Состояние сессии загружено: аккаунтов {len(snapshot.accounts)}, "
            f"активный {snapshot.current_account_id or 'нет'}"
        )
        return snapshot

    def save(self, snapshot: SessionSnapshot) -> None:
        """
        Перезаписывает все ключи сессии одной операцией.

        Raises:
            StorageError: Не удалось записать
        """
        self.store.write({
            StorageKey.TOKEN.value: snapshot.token,
            StorageKey.USER.value: (
                json.dumps(snapshot.user.to_storage(), ensure_ascii=False) if snapshot.user else None
            ),
            StorageKey.ACCOUNTS.value: json.dumps(
                [account.to_storage() for account in snapshot.accounts], ensure_ascii=False
            ),
            StorageKey.CURRENT_ACCOUNT_ID.value: snapshot.current_account_id,
        })
        logger.debug(f"Состояние сессии сохранено: аккаунтов {len(snapshot.accounts)}")

    def _parse_account(self, raw: Optional[str]) -> Optional[Account]:
        if not raw:
            return None
        try:
            return Account.model_validate(json.loads(raw))
        except (ValueError, PydanticValidationError) as e:
            logger.warning(f"Не удалось разобрать сохранённого пользователя: {e}")
            return None

    def _parse_accounts(self, raw: Optional[str]) -> List[Account]:
        if not raw:
            return []
        try:
            items = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Не удалось разобрать список аккаунтов: {e}")
            return []
        if not isinstance(items, list):
            logger.warning(f"Список аккаунтов имеет неожиданный тип: {type(items)}")
            return []

        accounts: List[Account] = []
        seen = set()
        for item in items:
            try:
                account = Account.model_validate(item)
            except PydanticValidationError as e:
                logger.warning(f"Пропущен повреждённый аккаунт: {e}")
                continue
            # Дубликаты по id схлопываются, первое вхождение сохраняет позицию
            if account.id in seen:
                continue
            seen.add(account.id)
            accounts.append(account)
        return accounts
