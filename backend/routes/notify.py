# routes/notify.py
# 일정 알림 전송 엔드포인트. 브라우저의 주기적 점검(1분)이나 '알림' 버튼이 호출한다.
from typing import Dict

from fastapi import APIRouter, Depends

from dependencies import get_dispatcher
from schemas.schedule_schema import NotifyIn, MessageOut
from services.notification_service import NotificationDispatcher

router = APIRouter(prefix="/api", tags=["notify"])


@router.post("/notify", response_model=MessageOut)
def notify(body: NotifyIn, dispatcher: NotificationDispatcher = Depends(get_dispatcher)) -> Dict[str, str]:
    """
    :param body: {apiKey, scheduleId}
    :type body: NotifyIn
    :return: {"message": ...}
    :rtype: Dict[str, str]
    """
    return dispatcher.notify(body.apiKey, body.scheduleId)
