class PortfolioError(Exception):
    """作品集后端基础异常类"""
    def __init__(self, message, code=500, payload=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.payload = payload

    def to_dict(self):
        rv = dict(self.payload or ())
        rv['message'] = self.message
        return rv

class ValidationError(PortfolioError):
    """请求数据校验失败"""
    def __init__(self, message="Validation error", payload=None):
        super().__init__(message, code=400, payload=payload)

class Unauthorized(PortfolioError):
    """未登录或令牌无效"""
    def __init__(self, message="Unauthorized", payload=None):
        super().__init__(message, code=401, payload=payload)

class PermissionDenied(PortfolioError):
    """权限不足 / IP 已封禁"""
    def __init__(self, message="Access denied", payload=None):
        super().__init__(message, code=403, payload=payload)

class NotFound(PortfolioError):
    """资源不存在"""
    def __init__(self, message="Not found", payload=None):
        super().__init__(message, code=404, payload=payload)

class Conflict(PortfolioError):
    """资源已存在"""
    def __init__(self, message="Already exists", payload=None):
        super().__init__(message, code=409, payload=payload)

class Gone(PortfolioError):
    """接口已下线"""
    def __init__(self, message="No longer supported", payload=None):
        super().__init__(message, code=410, payload=payload)
