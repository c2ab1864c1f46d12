import pytest
import requests

from schemas.schedule_schema import ScheduleCreate
from services import notification_service
from services.errors import NotFoundError, UpstreamError, ValidationError
from services.notification_service import (
    NotificationDispatcher,
    NotifyXSender,
    build_message,
    priority_label,
)


class FakeResponse:
    def __init__(self, status_code=200, text="ok"):
        self.status_code = status_code
        self.text = text

    @property
    def ok(self):
        return 200 <= self.status_code < 400


@pytest.fixture
def schedule(repo):
    return repo.create(ScheduleCreate(title="회의", date="2024-01-01", time="09:00", priority="high"))


@pytest.fixture
def dispatcher(repo, sender):
    return NotificationDispatcher(repo, sender)


def test_priority_label_falls_back_to_medium():
    assert priority_label("high") == "높음"
    assert priority_label("low") == "낮음"
    assert priority_label("urgent") == "보통"
    assert priority_label(None) == "보통"


def test_build_message():
    msg = build_message({"title": "회의", "description": "", "date": "2024-01-01", "time": "09:00", "priority": "high"})
    assert msg == {
        "title": "일정 알림: 회의",
        "content": "일정 시간이 되었습니다.",
        "description": "시간: 2024-01-01 09:00, 우선순위: 높음",
    }


def test_build_message_uses_description():
    msg = build_message({"title": "t", "description": "준비물 확인", "date": "d", "time": "t"})
    assert msg["content"] == "준비물 확인"


@pytest.mark.parametrize("api_key, schedule_id", [(None, "x"), ("key", None), ("", "x"), ("key", "")])
def test_notify_requires_arguments(dispatcher, sender, api_key, schedule_id):
    with pytest.raises(ValidationError):
        dispatcher.notify(api_key, schedule_id)
    assert sender.sent == []


def test_notify_unknown_schedule_skips_upstream(dispatcher, sender):
    with pytest.raises(NotFoundError):
        dispatcher.notify("key", "missing")
    assert sender.sent == []


def test_notify_marks_schedule_notified(dispatcher, sender, repo, schedule):
    assert dispatcher.notify("key", schedule["id"]) == {"message": "알림을 전송했습니다."}
    assert sender.sent[0][0] == "key"
    assert sender.sent[0][1]["title"] == "일정 알림: 회의"
    assert repo.get(schedule["id"])["notified"] is True


def test_notify_upstream_failure_keeps_unnotified(dispatcher, sender, repo, schedule):
    sender.error = UpstreamError("알림 전송 실패: bad key")
    with pytest.raises(UpstreamError):
        dispatcher.notify("key", schedule["id"])
    assert "notified" not in repo.get(schedule["id"])


def test_notifyx_sender_posts_message(monkeypatch):
    calls = []

    def fake_post(url, json=None, timeout=None):
        calls.append((url, json, timeout))
        return FakeResponse(200)

    monkeypatch.setattr(notification_service.requests, "post", fake_post)
    NotifyXSender("https://notify.example/api/v1/send/", timeout=5).send("abc123", {"title": "t"})
    assert calls == [("https://notify.example/api/v1/send/abc123", {"title": "t"}, 5)]


def test_notifyx_sender_error_carries_body(monkeypatch):
    monkeypatch.setattr(
        notification_service.requests, "post", lambda url, json=None, timeout=None: FakeResponse(401, "invalid key")
    )
    with pytest.raises(UpstreamError) as exc:
        NotifyXSender("https://notify.example").send("abc123", {"title": "t"})
    assert "invalid key" in exc.value.message


def test_notifyx_sender_connection_error(monkeypatch):
    def boom(url, json=None, timeout=None):
        raise requests.ConnectionError("unreachable")

    monkeypatch.setattr(notification_service.requests, "post", boom)
    with pytest.raises(UpstreamError) as exc:
        NotifyXSender("https://notify.example").send("abc123", {"title": "t"})
    assert "unreachable" in exc.value.message


def test_notify_succeeds_when_schedule_deleted_after_send(repo, schedule):
    class DeletingSender:
        def __init__(self):
            self.sent = []

        def send(self, api_key, message):
            self.sent.append(message)
            repo.delete(schedule["id"])

    sender = DeletingSender()
    result = NotificationDispatcher(repo, sender).notify("key", schedule["id"])
    assert result == {"message": "알림을 전송했습니다."}
    assert len(sender.sent) == 1
    assert repo.list() == []
