# ovh_signer.py
"""
OVH 请求签名

签名格式: $<version>$<hex digest>
待签名字符串: secret+consumer+METHOD+url+body+timestamp
"""
import hashlib

from ovh_errors import SigningError

SEPARATOR = "+"
DEFAULT_VERSION = "1"


def canonical_string(secret: str, consumer: str, method: str, url: str, body: str, timestamp: int) -> str:
    """拼接待签名字符串（字段顺序不可改动）"""
    return SEPARATOR.join([secret, consumer, method.upper(), url, body or "", str(timestamp)])


class SignatureScheme:
    version = None

    @property
    def prefix(self) -> str:
        return f"${self.version}$"

    def digest(self, message: str) -> str:
        raise NotImplementedError

    def sign(self, message: str) -> str:
        return self.prefix + self.digest(message)


class Sha1Scheme(SignatureScheme):
    version = "1"

    def digest(self, message: str) -> str:
        try:
            return hashlib.sha1(message.encode("utf-8")).hexdigest()
        except ValueError as e:
            raise SigningError("Error generating sha1 sign") from e


_SCHEMES = {}


def register_scheme(scheme: SignatureScheme) -> SignatureScheme:
    if not scheme.version:
        raise ValueError("signature scheme needs a version")
    _SCHEMES[scheme.version] = scheme
    return scheme


def get_scheme(version: str = DEFAULT_VERSION) -> SignatureScheme:
    try:
        return _SCHEMES[version]
    except KeyError:
        raise SigningError(f"Unsupported signature version: {version}") from None


register_scheme(Sha1Scheme())


def sign(secret: str, consumer: str, method: str, url: str, body: str, timestamp: int,
         version: str = DEFAULT_VERSION) -> str:
    """计算请求签名，相同输入总是得到相同结果"""
    message = canonical_string(secret, consumer, method, url, body, timestamp)
    return get_scheme(version).sign(message)
