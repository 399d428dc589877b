"""
业务异常定义

所有业务异常都继承自SRMError，并携带对应的HTTP状态码，
由main.py中的异常处理器统一转换为JSON响应。
"""

from fastapi import status


class SRMError(Exception):
    """业务异常基类"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "服务器内部错误"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidCredentials(SRMError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "用户名或密码错误"


class AccountDisabled(SRMError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "账号已被停用"


class Unauthenticated(SRMError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "未登录"


class InvalidToken(SRMError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "登录已失效，请重新登录"


class Forbidden(SRMError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "无权执行此操作"


class NotFound(SRMError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "记录不存在"


class Conflict(SRMError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "数据已存在"


class InvalidTransition(Conflict):
    """订单状态流转不合法"""
    default_message = "订单当前状态不允许此操作"


class InvalidRequest(SRMError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "请求参数无效"


class StoreFailure(SRMError):
    default_message = "数据保存失败"
