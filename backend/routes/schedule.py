# routes/schedule.py
# 일정 CRUD 라우터. 실제 처리는 ScheduleRepository가 담당하고, 여기서는 상태 코드만 정한다.
# 오류(ValidationError/NotFoundError)는 main.py의 예외 핸들러가 {"error": ...}로 변환한다.
from typing import List, Dict, Any

from fastapi import APIRouter, Depends

from dependencies import get_repository
from schemas.schedule_schema import Schedule, ScheduleCreate, ScheduleUpdate, MessageOut
from services.schedule_service import ScheduleRepository

router = APIRouter(prefix="/api/schedules", tags=["schedules"])


@router.get("", response_model=List[Schedule], response_model_exclude_none=True)
def list_schedules(repo: ScheduleRepository = Depends(get_repository)) -> List[Dict[str, Any]]:
    """
    저장된 일정 전체를 (date, time) 오름차순으로 반환한다.
    """
    return repo.list()


@router.post("", status_code=201, response_model=Schedule, response_model_exclude_none=True)
def create_schedule(payload: ScheduleCreate, repo: ScheduleRepository = Depends(get_repository)) -> Dict[str, Any]:
    """
    일정 생성. 제목/날짜/시간이 없으면 400.
    """
    return repo.create(payload)


@router.put("/{schedule_id}", response_model=Schedule, response_model_exclude_none=True)
def update_schedule(
    schedule_id: str,
    patch: ScheduleUpdate,
    repo: ScheduleRepository = Depends(get_repository),
) -> Dict[str, Any]:
    """
    일정 부분 수정. 넘어온 필드만 덮어쓴다. 없는 ID면 404.
    """
    return repo.update(schedule_id, patch)


@router.delete("/{schedule_id}", response_model=MessageOut)
def delete_schedule(schedule_id: str, repo: ScheduleRepository = Depends(get_repository)) -> Dict[str, str]:
    return repo.delete(schedule_id)
