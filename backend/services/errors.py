# services/errors.py
# 서비스 계층 예외. status_code는 main.py의 핸들러가 응답 코드로 사용한다.


class ScheduleError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ScheduleError):
    """필수 입력 누락/빈 값"""
    status_code = 400


class NotFoundError(ScheduleError):
    """존재하지 않는 일정 ID"""
    status_code = 404


class UpstreamError(ScheduleError):
    """외부 알림 서비스 호출 실패"""
    status_code = 500
