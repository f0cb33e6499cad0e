"""
FastAPI 메인 애플리케이션
스킨케어 프로필-제품 매칭 API 서버
"""
import asyncio
import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from matchcare.api.admin import router as admin_router
from matchcare.api.ingredients import router as ingredients_router
from matchcare.api.quiz import router as quiz_router
from matchcare.api.recommendation import router as recommendation_router
from matchcare.config.settings import Settings, load_settings
from matchcare.models.response import ErrorDetail
from matchcare.services.container import build_container
from matchcare.shared.constants import SYSTEM_VERSION
from matchcare.utils.time_tracker import measure_time

# 로깅 설정
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """애플리케이션 생명주기 관리"""
    settings: Settings = app.state.settings
    logging.getLogger().setLevel(settings.log_level)
    logger.info(f"스킨케어 매칭 API 서버 시작 (environment={settings.environment})")

    container = build_container(settings)

    # 지식 그래프 로드는 워커 스레드에서 (실패 시 기본 매핑)
    with measure_time("knowledge_load"):
        graph_loaded = await asyncio.to_thread(container.knowledge.load)
    if not graph_loaded:
        logger.warning("지식 그래프 없이 기본 매핑 모드로 진행")

    app.state.container = container

    yield

    logger.info("애플리케이션 종료 시작")
    app.state.container = None
    logger.info("스킨케어 매칭 API 서버 종료 완료")


def _error_response(request: Request, status_code: int, detail: ErrorDetail) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": detail.model_dump(),
            "timestamp": datetime.now().isoformat(),
            "path": str(request.url.path),
        },
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """설정으로 애플리케이션 생성 (None이면 환경변수에서 로드)"""
    settings = settings or load_settings()

    app = FastAPI(
        title="스킨케어 매칭 API",
        description="""
    # 스킨 프로필 기반 제품 매칭 API

    사용자(또는 게스트)의 스킨 프로필과 후보 제품을 받아 0-100 매칭 점수, 추천 사유,
    추천 목록, 루틴을 계산합니다. 프로필과 제품 저장은 호출하는 서비스가 담당합니다.

    ## 📋 API 구조
    - `POST /api/v1/recommend` - 추천 목록
    - `POST /api/v1/recommend/score` - 단일 제품 매칭 점수
    - `POST /api/v1/recommend/routine` - 아침/저녁 루틴
    - `POST /api/v1/recommend/similar` - 핵심 성분 유사 제품
    - `GET /api/v1/quiz/questions` - 퀴즈 질문
    - `POST /api/v1/quiz/classify` - 피부 타입 판정
    - `POST /api/v1/quiz/profile` - 퀴즈 응답 → 프로필
    - `GET /api/v1/ingredients/{name}` - 성분 지식
    - `POST /api/v1/ingredients/compatibility` - 성분-프로필 호환성
    - `GET /api/v1/admin/health` - 서비스 상태
    """,
        version=SYSTEM_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.container = None

    # CORS 미들웨어
    if settings.debug:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    else:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["http://localhost:3000"],
            allow_credentials=True,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """요청 로깅 미들웨어"""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        logger.debug(
            f"요청 완료: {request.method} {request.url.path} "
            f"status={response.status_code} time={process_time:.3f}s"
        )
        response.headers["X-Process-Time"] = str(process_time)
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """HTTP 예외 처리기"""
        logger.warning(f"HTTP 예외: {exc.status_code} {exc.detail} for {request.method} {request.url.path}")

        if isinstance(exc.detail, dict) and "code" in exc.detail:
            detail = ErrorDetail(**exc.detail)
        else:
            detail = ErrorDetail(code=f"HTTP_{exc.status_code}", message=str(exc.detail))
        return _error_response(request, exc.status_code, detail)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """일반 예외 처리기"""
        logger.error(
            f"예상치 못한 오류: {exc} for {request.method} {request.url.path}",
            exc_info=True
        )
        detail = ErrorDetail(
            code="INTERNAL_SERVER_ERROR",
            message="서버 내부 오류가 발생했습니다",
            details={"error_type": type(exc).__name__},
        )
        return _error_response(request, 500, detail)

    app.include_router(recommendation_router)
    app.include_router(quiz_router)
    app.include_router(ingredients_router)
    app.include_router(admin_router)

    @app.get("/", summary="API 정보")
    async def root():
        return {
            "service": "스킨케어 매칭 API",
            "version": SYSTEM_VERSION,
            "status": "running",
            "timestamp": datetime.now().isoformat(),
            "endpoints": {
                "recommendation": "/api/v1/recommend",
                "quiz": "/api/v1/quiz/questions",
                "health": "/api/v1/admin/health",
                "docs": "/docs",
            },
        }

    @app.get("/health", summary="간단한 헬스체크")
    async def health():
        return {
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "matchcare.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
