# dependencies.py
# 라우터에서 Depends로 주입받는 저장소/전송기. 테스트에서는 app.dependency_overrides로 교체한다.
from functools import lru_cache

from fastapi import Depends

from database import SessionLocal
from services.kv_store import SqlKeyValueStore
from services.schedule_service import ScheduleRepository
from services.notification_service import NotificationDispatcher, NotifyXSender
from settings import SCHEDULE_KEY, NOTIFYX_BASE_URL, NOTIFY_TIMEOUT


@lru_cache(maxsize=1)
def get_repository() -> ScheduleRepository:
    # 락을 공유해야 하므로 프로세스당 하나
    return ScheduleRepository(SqlKeyValueStore(SessionLocal), key=SCHEDULE_KEY)


def get_sender() -> NotifyXSender:
    return NotifyXSender(NOTIFYX_BASE_URL, timeout=NOTIFY_TIMEOUT)


def get_dispatcher(
    repository: ScheduleRepository = Depends(get_repository),
    sender=Depends(get_sender),
) -> NotificationDispatcher:
    return NotificationDispatcher(repository, sender)
