# ovh_errors.py


class OvhApiError(IOError):
    """OVH API 客户端异常基类"""


class SigningError(OvhApiError):
    """签名失败（哈希算法不可用 / 未知签名版本 / 编码错误）"""


class TransportError(OvhApiError):
    """请求失败：网络错误或非 2xx 响应"""

    def __init__(self, message: str, status_code: int = None, body: str = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
