# ovh_time.py
"""
服务器时间同步

客户端初始化时请求一次 /auth/time，记录本地时钟与服务器的偏差（drift），
之后每次签名都用 drift 修正本地时间戳。不做周期性重新同步。
"""
import time

import requests
from loguru import logger

TIME_PATH = "/auth/time"


def now() -> int:
    """返回 10 位秒级时间戳（UTC）"""
    return int(time.time())


def fetch_server_time(time_url: str, transport=requests.request, timeout=None) -> int:
    """GET 时间接口（无需签名），返回服务器时间戳"""
    response = transport("GET", time_url, timeout=timeout)
    response.raise_for_status()
    return int(response.content.decode("utf-8").strip())


def compute_drift(time_url: str, transport=requests.request, clock=now, timeout=None) -> int:
    """
    drift = 本地时间 - 服务器时间
    请求失败、响应不是整数时返回 0，初始化不能因此失败。
    """
    # requests.RequestException 是 IOError 的子类
    try:
        server_ts = fetch_server_time(time_url, transport=transport, timeout=timeout)
    except (OSError, ValueError) as e:
        logger.warning(f"获取服务器时间失败，drift 置 0: {time_url} | {e}")
        return 0
    drift = int(clock()) - server_ts
    logger.debug(f"服务器时间 {server_ts}, drift={drift}s")
    return drift


def corrected_timestamp(drift: int, clock=now) -> int:
    """用 drift 估算当前服务器时间"""
    return int(clock()) - drift
