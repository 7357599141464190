"""
설정 모듈

secrets.yaml 로드 및 요청 옵션
"""

from binance_futures.core.config.loader import (
    RequestOptions,
    Secrets,
    SecretsLoadError,
    Settings,
    get_request_options,
    get_settings,
    load_secrets,
)

__all__ = [
    "RequestOptions",
    "Secrets",
    "SecretsLoadError",
    "Settings",
    "get_request_options",
    "get_settings",
    "load_secrets",
]
