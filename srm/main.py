"""
FastAPI应用主入口
"""

from fastapi import FastAPI, Request, status
from fastapi.staticfiles import StaticFiles
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from srm.config import UPLOAD_DIR, UPLOAD_URL_PREFIX
from srm.database import init_db, SessionLocal
from srm.exceptions import SRMError
from srm.migrate_db import migrate_database
from srm.routers import users, products, orders, statistics, suppliers
from srm.services.user_service import UserService
from srm.logger import get_logger
from contextlib import asynccontextmanager

logger = get_logger(__name__)


def bootstrap():
    """迁移旧数据库、创建表并初始化默认账号"""
    migrate_database()
    init_db()
    db = SessionLocal()
    try:
        UserService(db).ensure_default_accounts()
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    try:
        bootstrap()
        logger.info("数据库初始化完成")
    except Exception as e:
        logger.error(f"数据库初始化失败: {e}", exc_info=True)
        raise
    yield


# 创建FastAPI应用
app = FastAPI(
    title="供应商关系管理系统",
    description="供应商、商品、采购订单及资质管理的后端API",
    version="1.0.0",
    lifespan=lifespan
)

# 配置CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # 生产环境应该设置具体的域名
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 注册路由
app.include_router(users.router)
app.include_router(products.router)
app.include_router(orders.router)
app.include_router(statistics.router)
app.include_router(suppliers.router)

# 挂载上传文件目录
UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
app.mount(UPLOAD_URL_PREFIX, StaticFiles(directory=str(UPLOAD_DIR)), name="uploads")


@app.get("/")
async def root():
    return {"message": "供应商关系管理系统 API"}


@app.exception_handler(SRMError)
async def srm_exception_handler(request: Request, exc: SRMError):
    """
    业务异常处理器，按异常类型返回对应状态码

    Args:
        request: FastAPI请求对象
        exc: 业务异常

    Returns:
        JSONResponse: 错误响应
    """
    logger.info(
        f"请求失败: {exc.__class__.__name__}: {exc.message}",
        extra={"path": request.url.path, "method": request.method}
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "detail": exc.message,
            "error_type": exc.__class__.__name__
        }
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    全局异常处理器，记录所有未捕获的异常

    Args:
        request: FastAPI请求对象
        exc: 异常对象

    Returns:
        JSONResponse: 错误响应
    """
    logger.error(
        f"未处理的异常: {exc.__class__.__name__}",
        exc_info=True,
        extra={
            "path": request.url.path,
            "method": request.method,
            "query_params": str(request.query_params),
            "client": request.client.host if request.client else None,
        }
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "detail": "服务器内部错误",
            "error_type": exc.__class__.__name__
        }
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    请求验证异常处理器

    Args:
        request: FastAPI请求对象
        exc: 验证异常对象

    Returns:
        JSONResponse: 错误响应
    """
    logger.warning(
        f"请求验证失败: {exc.errors()}",
        extra={
            "path": request.url.path,
            "method": request.method,
        }
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": jsonable_encoder(exc.errors())}
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=3000)
