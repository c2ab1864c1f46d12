# settings.py
# 환경 변수 기반 설정. .env 파일이 있으면 먼저 읽어 들인다.
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./schedule.db")

# 전체 일정 목록을 저장하는 단일 키
SCHEDULE_KEY = os.getenv("SCHEDULE_KEY", "schedules")

# NotifyX 푸시 알림 엔드포인트(뒤에 /{apiKey}가 붙음)
NOTIFYX_BASE_URL = os.getenv("NOTIFYX_BASE_URL", "https://www.notifyx.cn/api/v1/send").rstrip("/")
NOTIFY_TIMEOUT = float(os.getenv("NOTIFY_TIMEOUT", "20"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))
