# ovh_client.py
import os
from dataclasses import dataclass, field
from enum import Enum

import requests
from dotenv import load_dotenv
from loguru import logger

import ovh_signer
import ovh_time
from ovh_errors import TransportError

load_dotenv()

__version__ = "1.0.0"

OVH_API_EU_BASE_URL = "https://eu.api.ovh.com/1.0"
OVH_API_CA_BASE_URL = "https://ca.api.ovh.com/1.0"
ENDPOINTS = {
    "ovh-eu": OVH_API_EU_BASE_URL,
    "ovh-ca": OVH_API_CA_BASE_URL,
}

USER_AGENT = f"ovh-api-client/{__version__}"
CONTENT_TYPE_JSON = "application/json; charset=utf8"


class Method(str, Enum):
    GET = "GET"
    PUT = "PUT"
    POST = "POST"
    DELETE = "DELETE"


@dataclass(frozen=True)
class Credentials:
    application_key: str
    application_secret: str = field(repr=False)
    consumer_key: str

    @classmethod
    def from_env(cls) -> "Credentials":
        """从 .env / 环境变量读取 OVH_APPLICATION_KEY 等"""
        values = {
            "application_key": os.getenv("OVH_APPLICATION_KEY"),
            "application_secret": os.getenv("OVH_APPLICATION_SECRET"),
            "consumer_key": os.getenv("OVH_CONSUMER_KEY"),
        }
        missing = [f"OVH_{name.upper()}" for name, value in values.items() if not value]
        if missing:
            raise ValueError(f"⚠️ 请先在 .env 文件中设置 {', '.join(missing)}")
        return cls(**values)


@dataclass(frozen=True)
class ClientConfig:
    root_url: str
    time_drift: int = 0


@dataclass(frozen=True)
class SignedRequest:
    full_url: str
    timestamp: int
    signature: str


def resolve_endpoint(endpoint: str) -> str:
    """ovh-eu / ovh-ca 别名或完整 URL"""
    root_url = ENDPOINTS.get(endpoint, endpoint)
    if not root_url.startswith(("http://", "https://")):
        raise ValueError(f"Unknown endpoint: {endpoint}")
    return root_url.rstrip("/")


class OvhClient:
    """
    OVH REST API 签名客户端。
    初始化时同步一次服务器时间，之后每个请求单独签名，返回原始响应体。
    """

    def __init__(self, endpoint: str, credentials: Credentials, transport=None, clock=ovh_time.now,
                 timeout: float = None):
        self.credentials = credentials
        self._transport = transport or requests.request
        self._clock = clock
        self._timeout = timeout

        root_url = resolve_endpoint(endpoint)
        drift = ovh_time.compute_drift(root_url + ovh_time.TIME_PATH, transport=self._transport,
                                       clock=clock, timeout=timeout)
        self.config = ClientConfig(root_url=root_url, time_drift=drift)
        logger.info(f"初始化 OVH 客户端: {root_url}, drift={drift}s")

    @classmethod
    def from_env(cls, endpoint: str = None, **kwargs) -> "OvhClient":
        endpoint = endpoint or os.getenv("OVH_ENDPOINT", "ovh-eu")
        return cls(endpoint, Credentials.from_env(), **kwargs)

    # ----------------- 只读属性 -----------------
    @property
    def root_url(self) -> str:
        return self.config.root_url

    @property
    def time_drift(self) -> int:
        return self.config.time_drift

    @property
    def application_key(self) -> str:
        return self.credentials.application_key

    @property
    def application_secret(self) -> str:
        return self.credentials.application_secret

    @property
    def consumer_key(self) -> str:
        return self.credentials.consumer_key

    # ----------------- 内部工具 -----------------
    def sign_request(self, method, path: str, body: str = None) -> SignedRequest:
        """计算完整 URL、修正后的时间戳和签名（不发送请求）"""
        method = Method(method.upper())
        full_url = self.config.root_url + path
        timestamp = ovh_time.corrected_timestamp(self.config.time_drift, clock=self._clock)
        signature = ovh_signer.sign(
            self.credentials.application_secret,
            self.credentials.consumer_key,
            method.value,
            full_url,
            body or "",
            timestamp,
        )
        return SignedRequest(full_url=full_url, timestamp=timestamp, signature=signature)

    def _headers(self, signed: SignedRequest) -> dict:
        return {
            "X-Ovh-Application": self.credentials.application_key,
            "X-Ovh-Timestamp": str(signed.timestamp),
            "X-Ovh-Consumer": self.credentials.consumer_key,
            "X-Ovh-Signature": signed.signature,
            "Content-type": CONTENT_TYPE_JSON,
            "Accept": CONTENT_TYPE_JSON,
            "User-Agent": USER_AGENT,
        }

    def call(self, method, path: str, body: str = None) -> str:
        """核心请求函数：签名、发送，原样返回响应体"""
        method = Method(method.upper())
        body = body or ""
        signed = self.sign_request(method, path, body)
        logger.debug(f"{method.value} {signed.full_url} ts={signed.timestamp}")

        response = None
        try:
            response = self._transport(
                method.value,
                signed.full_url,
                headers=self._headers(signed),
                data=body.encode("utf-8") if body else None,
                timeout=self._timeout,
            )
            response.raise_for_status()
            return response.content.decode("utf-8", errors="replace")
        except OSError as e:
            status_code = getattr(response, "status_code", None)
            text = response.content.decode("utf-8", errors="replace") if response is not None else None
            logger.error(f"API 请求失败: {method.value} {path} | {text if text is not None else str(e)}")
            raise TransportError(f"{method.value} {signed.full_url} failed: {e}", status_code, text) from e

    # ----------------- 公共接口 -----------------
    def get(self, path: str) -> str:
        return self.call(Method.GET, path)

    def put(self, path: str, body: str = None) -> str:
        return self.call(Method.PUT, path, body)

    def post(self, path: str, body: str = None) -> str:
        return self.call(Method.POST, path, body)

    def delete(self, path: str) -> str:
        return self.call(Method.DELETE, path)
