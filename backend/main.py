import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from database import init_db
from routes.schedule import router as schedule_router
from routes.notify import router as notify_router
from routes.pages import router as pages_router
from services.errors import ScheduleError
from settings import LOG_LEVEL, HOST, PORT

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


app = FastAPI(title="Schedule Manager", lifespan=lifespan, redirect_slashes=False)


# OPTIONS는 라우팅 전에 어떤 경로든 204로 응답하고, 나머지 응답에는 허용 Origin 헤더를 붙인다.
@app.middleware("http")
async def preflight_and_cors(request: Request, call_next):
    if request.method == "OPTIONS":
        return Response(status_code=204, headers=CORS_HEADERS)
    response = await call_next(request)
    response.headers.setdefault("Access-Control-Allow-Origin", "*")
    return response


def _error(status_code: int, message: str) -> JSONResponse:
    # 500 핸들러는 미들웨어 바깥에서 실행되므로 Origin 헤더를 직접 붙인다
    return JSONResponse(
        status_code=status_code,
        content={"error": message},
        headers={"Access-Control-Allow-Origin": "*"},
    )


@app.exception_handler(ScheduleError)
async def schedule_error_handler(request: Request, exc: ScheduleError):
    return _error(exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # 404(없는 경로) / 405(허용되지 않은 메서드)
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # 잘못된 JSON, 알 수 없는 priority 등은 400으로 통일
    fields = ", ".join(".".join(str(p) for p in err.get("loc", ())[1:]) or "body" for err in exc.errors())
    return _error(400, f"잘못된 요청입니다: {fields}")


@app.exception_handler(Exception)
async def unknown_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error(500, str(exc))


app.include_router(pages_router)
app.include_router(schedule_router)
app.include_router(notify_router)


@app.get("/health")
def health():
    return {"ok": True}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=HOST, port=PORT)
