# services/notification_service.py
# 일정 알림 전송
# - NotifyXSender: NotifyX 푸시 API 호출(requests)
# - NotificationDispatcher: 일정 조회 -> 메시지 구성 -> 전송 -> notified 표시
import logging
import requests
from typing import Dict, Any

from schemas.schedule_schema import ScheduleUpdate
from services.errors import ValidationError, NotFoundError, UpstreamError
from services.schedule_service import ScheduleRepository

logger = logging.getLogger(__name__)

PRIORITY_LABELS = {"high": "높음", "medium": "보통", "low": "낮음"}
DEFAULT_CONTENT = "일정 시간이 되었습니다."
MSG_REQUIRED = "API Key와 일정 ID는 필수 항목입니다."
MSG_SENT = "알림을 전송했습니다."


def priority_label(priority) -> str:
    """
    우선순위 값을 한국어 라벨로 바꾼다. 알 수 없는 값은 '보통'.
    """
    return PRIORITY_LABELS.get(priority, PRIORITY_LABELS["medium"])


def build_message(schedule: Dict[str, Any]) -> Dict[str, str]:
    """
    일정 하나로 NotifyX 요청 본문을 만든다.

    :param schedule: 일정 레코드
    :type schedule: Dict[str, Any]
    :return: {title, content, description}
    :rtype: Dict[str, str]
    """

    return {
        "title": f"일정 알림: {schedule['title']}",
        "content": schedule.get("description") or DEFAULT_CONTENT,
        "description": (
            f"시간: {schedule['date']} {schedule['time']}, "
            f"우선순위: {priority_label(schedule.get('priority'))}"
        ),
    }


class NotifyXSender:
    """
    NotifyX(https://www.notifyx.cn) 전송기. apiKey는 URL 경로 마지막 세그먼트로 들어간다.
    """

    def __init__(self, base_url: str, timeout: float = 20):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def send(self, api_key: str, message: Dict[str, str]) -> None:
        """
        :raises UpstreamError: 연결 실패 또는 2xx가 아닌 응답(본문 포함)
        """
        try:
            r = requests.post(f"{self.base_url}/{api_key}", json=message, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("[NotifyX] request failed | key=%s****** | %s", api_key[:6], e)
            raise UpstreamError(f"알림 전송 실패: {e}") from e

        if not r.ok:
            logger.error("[NotifyX] send failed %s | key=%s****** | body=%s", r.status_code, api_key[:6], r.text)
            raise UpstreamError(f"알림 전송 실패: {r.text}")


class NotificationDispatcher:
    """
    일정 알림 디스패처. 전송기(sender)는 send(api_key, message)만 있으면 교체 가능하다.
    """

    def __init__(self, repository: ScheduleRepository, sender):
        self.repository = repository
        self.sender = sender

    def notify(self, api_key: str, schedule_id: str) -> Dict[str, str]:
        """
        일정 알림 전송
        1. 입력 검사(apiKey, scheduleId)
        2. 일정 조회(없으면 외부 호출 없이 404)
        3. 메시지 구성 후 전송
        4. 성공 시 notified=True로 저장

        :param api_key: NotifyX API Key
        :type api_key: str
        :param schedule_id: 일정 ID
        :type schedule_id: str
        :return: {"message": ...}
        :rtype: Dict[str, str]
        :raises ValidationError: 입력 누락
        :raises NotFoundError: 일정 없음
        :raises UpstreamError: 외부 전송 실패
        """

        if not api_key or not schedule_id:
            raise ValidationError(MSG_REQUIRED)

        schedule = self.repository.get(schedule_id)
        self.sender.send(api_key, build_message(schedule))
        try:
            self.repository.update(schedule_id, ScheduleUpdate(notified=True))
        except NotFoundError:
            # 전송 직후 삭제된 일정: 알림은 이미 나갔으므로 성공으로 응답
            logger.warning("schedule id=%s deleted before it could be marked notified", schedule_id)

        logger.info("notification sent for schedule id=%s", schedule_id)
        return {"message": MSG_SENT}
