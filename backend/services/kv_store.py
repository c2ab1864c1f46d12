# services/kv_store.py
# 키-값 저장소. 문자열 키에 문자열 값을 통째로 읽고/덮어쓴다.
import logging
from typing import Optional

from sqlalchemy.orm import sessionmaker

from models.kv_entry import KVEntry

logger = logging.getLogger(__name__)


class SqlKeyValueStore:
    """
    kv_entries 테이블 위의 get/put 구현.

    :param session_factory: SQLAlchemy 세션 팩토리
    :type session_factory: sessionmaker
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        """
        키에 저장된 값을 반환한다. 없으면 None.
        """
        with self._session_factory() as db:
            row = db.get(KVEntry, key)
            return row.value if row else None

    def put(self, key: str, value: str) -> None:
        """
        키의 값을 덮어쓴다(없으면 새로 만든다).
        """
        with self._session_factory() as db:
            row = db.get(KVEntry, key)
            if row is None:
                db.add(KVEntry(key=key, value=value))
            else:
                row.value = value
            db.commit()
        logger.debug("kv put %s (%d bytes)", key, len(value))
