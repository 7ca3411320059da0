#!/usr/bin/env python3
"""
ovh_cli.py - OVH API 命令行调用
功能：
 - 读取配置(.env / 环境变量)
 - 对任意 API 路径发起签名请求
 - 原样输出响应体
 - 日志 (loguru)

用法：
    ovh-api GET /me
    ovh-api POST /domain/zone/example.com/refresh --body '{}'
"""

import argparse
import os
import sys

from loguru import logger

from ovh_client import Credentials, Method, OvhClient
from ovh_errors import TransportError


def parse_args(argv=None):
    p = argparse.ArgumentParser(prog="ovh-api")
    p.add_argument("method", type=str.upper, choices=[m.value for m in Method])
    p.add_argument("path", help="API 路径，例如 /me")
    p.add_argument("--body", default=None, help="请求体（已序列化的 JSON）")
    p.add_argument("--endpoint", default=os.getenv("OVH_ENDPOINT", "ovh-eu"))
    p.add_argument("--timeout", type=float, default=None)
    p.add_argument("--log-file", default=None)
    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    if args.log_file:
        logger.add(args.log_file, rotation="10 MB", retention="7 days", level="INFO")

    try:
        client = OvhClient(args.endpoint, Credentials.from_env(), timeout=args.timeout)
    except ValueError as e:
        logger.error(str(e))
        return 2

    try:
        result = client.call(args.method, args.path, args.body)
    except TransportError:
        logger.exception("请求失败：")
        return 1

    print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
