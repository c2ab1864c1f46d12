# services/schedule_service.py
# 일정 저장소: 전체 목록을 하나의 키에서 읽고 -> 수정하고 -> 다시 통째로 쓴다.
import json
import logging
import threading
from datetime import datetime, timezone
from typing import List, Dict, Any, Optional, Tuple
from uuid import uuid4

from pydantic import TypeAdapter

from schemas.schedule_schema import Schedule, ScheduleCreate, ScheduleUpdate, Priority
from services.errors import ValidationError, NotFoundError

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "date", "time")
MSG_REQUIRED = "제목, 날짜, 시간은 필수 항목입니다."
MSG_NOT_FOUND = "일정이 존재하지 않습니다."
MSG_DELETED = "삭제되었습니다."

_SCHEDULE_LIST = TypeAdapter(List[Schedule])


def _now_iso() -> str:
    """
    현재 UTC 시각을 밀리초 단위 ISO 문자열(끝에 Z)로 반환한다.

    :return: 예) "2024-01-01T09:00:00.000Z"
    :rtype: str
    """

    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


SORT_FORMATS = ("%Y-%m-%d %H:%M", "%Y-%m-%d %H:%M:%S")


def _parse_when(date_str: str, time_str: str) -> Optional[datetime]:
    # "9:00"처럼 시가 한 자리인 값도 허용
    for fmt in SORT_FORMATS:
        try:
            return datetime.strptime(f"{date_str} {time_str}", fmt)
        except ValueError:
            continue
    try:
        dt = datetime.fromisoformat(f"{date_str}T{time_str}")
    except ValueError:
        return None
    # 오프셋이 붙은 시간도 벽시계 값으로 비교
    return dt.replace(tzinfo=None)


def _sort_key(s: Schedule) -> Tuple[int, datetime]:
    """
    date + time을 하나의 시각으로 합친 정렬 키.
    파싱할 수 없는 일정은 (1, datetime.max)로 맨 뒤에 모이고, 안정 정렬이라 서로의 순서는 유지된다.

    :param s: 일정
    :type s: Schedule
    :return: (파싱 실패 여부, 벽시계 시각)
    :rtype: Tuple[int, datetime]
    """

    dt = _parse_when(s.date.strip(), s.time.strip())
    return (0, dt) if dt else (1, datetime.max)


def sort_schedules(items: List[Schedule]) -> List[Schedule]:
    return sorted(items, key=_sort_key)


class ScheduleRepository:
    """
    하나의 키에 저장된 일정 목록 전체를 다루는 저장소.
    읽기-수정-쓰기는 모두 같은 락 안에서 수행되어, 한 프로세스 안의 동시 요청끼리 서로의 변경을 덮어쓰지 않는다.

    :param store: get(key)/put(key, value)를 제공하는 키-값 저장소
    :param key: 목록을 저장할 키
    :type key: str
    """

    def __init__(self, store, key: str = "schedules"):
        self.store = store
        self.key = key
        self._lock = threading.Lock()

    # 내부 입출력
    def _load(self) -> List[Schedule]:
        raw = self.store.get(self.key)
        if not raw:
            return []
        return _SCHEDULE_LIST.validate_json(raw)

    def _save(self, items: List[Schedule]) -> None:
        payload = [s.model_dump(mode="json", exclude_none=True) for s in items]
        self.store.put(self.key, json.dumps(payload, ensure_ascii=False))

    @staticmethod
    def _index_of(items: List[Schedule], schedule_id: str) -> int:
        for i, s in enumerate(items):
            if s.id == schedule_id:
                return i
        raise NotFoundError(MSG_NOT_FOUND)

    # 조회
    def list(self) -> List[Dict[str, Any]]:
        """
        저장된 목록을 그대로 반환한다(필터/페이지 없음). 저장된 것이 없으면 빈 리스트.
        """
        with self._lock:
            items = self._load()
        return [s.model_dump(mode="json", exclude_none=True) for s in items]

    def get(self, schedule_id: str) -> Dict[str, Any]:
        with self._lock:
            items = self._load()
        s = items[self._index_of(items, schedule_id)]
        return s.model_dump(mode="json", exclude_none=True)

    # 생성
    def create(self, payload: ScheduleCreate) -> Dict[str, Any]:
        """
        새 일정 생성.
        1. 제목/날짜/시간 필수 검사(공백만 있는 값도 누락으로 본다)
        2. id/완료 여부/생성·수정 시각 부여
        3. 목록에 추가 후 (date, time) 오름차순 정렬하여 저장

        :param payload: 생성 요청 본문
        :type payload: ScheduleCreate
        :return: 생성된 일정
        :rtype: Dict[str, Any]
        :raises ValidationError: 필수 항목 누락
        """

        missing = [f for f in REQUIRED_FIELDS if not (getattr(payload, f) or "").strip()]
        if missing:
            raise ValidationError(MSG_REQUIRED)

        now = _now_iso()
        schedule = Schedule(
            id=str(uuid4()),
            title=payload.title,
            description=payload.description or "",
            date=payload.date,
            time=payload.time,
            priority=payload.priority or Priority.medium,
            completed=False,
            notified=payload.notified,
            enableNotification=payload.enableNotification,
            createdAt=now,
            updatedAt=now,
        )

        with self._lock:
            items = self._load()
            items.append(schedule)
            self._save(sort_schedules(items))

        logger.info("schedule created id=%s date=%s time=%s", schedule.id, schedule.date, schedule.time)
        return schedule.model_dump(mode="json", exclude_none=True)

    # 수정
    def update(self, schedule_id: str, patch: ScheduleUpdate) -> Dict[str, Any]:
        """
        기존 일정 위에 patch를 얕게 병합한다. patch에 없는(또는 null인) 필드는 그대로 유지된다.

        :param schedule_id: 대상 일정 ID
        :type schedule_id: str
        :param patch: 부분 수정 본문
        :type patch: ScheduleUpdate
        :return: 병합된 일정
        :rtype: Dict[str, Any]
        :raises NotFoundError: 해당 ID 없음
        """

        data = patch.model_dump(exclude_unset=True, exclude_none=True)
        with self._lock:
            items = self._load()
            idx = self._index_of(items, schedule_id)
            merged = items[idx].model_copy(update={**data, "updatedAt": _now_iso()})
            items[idx] = merged
            self._save(sort_schedules(items))

        logger.info("schedule updated id=%s fields=%s", schedule_id, sorted(data))
        return merged.model_dump(mode="json", exclude_none=True)

    # 삭제
    def delete(self, schedule_id: str) -> Dict[str, str]:
        with self._lock:
            items = self._load()
            remaining = [s for s in items if s.id != schedule_id]
            if len(remaining) == len(items):
                raise NotFoundError(MSG_NOT_FOUND)
            self._save(remaining)

        logger.info("schedule deleted id=%s", schedule_id)
        return {"message": MSG_DELETED}
