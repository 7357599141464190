"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from pathlib import Path


# 프로젝트 루트 (이 파일 기준 3단계 상위: binance_futures/core/constants.py → 저장소 루트)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent.parent


class BinanceEndpoints:
    """Binance API 엔드포인트 (고정값)

    공식 문서: https://developers.binance.com/docs/derivatives/usds-margined-futures/general-info
    """

    # Production (USDT-M Futures)
    PROD_REST_URL: str = "https://fapi.binance.com"

    # Testnet (USDT-M Futures)
    TEST_REST_URL: str = "https://testnet.binancefuture.com"


class ApiHeaders:
    """요청/응답 헤더 이름"""

    API_KEY: str = "X-MBX-APIKEY"
    USED_WEIGHT_1M: str = "X-MBX-USED-WEIGHT-1m"
    ORDER_COUNT_1M: str = "X-MBX-ORDER-COUNT-1m"
    RETRY_AFTER: str = "Retry-After"


class Defaults:
    """기본값 상수"""

    TIMEOUT_SEC: float = 30.0
    RECV_WINDOW_MS: int = 5000
    USER_AGENT: str = "binance-futures-sdk/0.1"
    LOG_LEVEL: str = "INFO"


class ApiLimits:
    """엔드포인트별 limit 파라미터 허용 범위 (문서 기준)"""

    DEPTH_LIMITS: tuple[int, ...] = (5, 10, 20, 50, 100, 500, 1000)
    TRADES_MAX: int = 1000
    AGG_TRADES_MAX: int = 1000
    KLINES_MAX: int = 1500
    FUNDING_RATE_MAX: int = 1000
    FORCE_ORDERS_MAX: int = 1000
    ALL_ORDERS_MAX: int = 1000
    USER_TRADES_MAX: int = 1000
    INCOME_MAX: int = 1000
    FUTURES_DATA_MAX: int = 500

    LEVERAGE_MIN: int = 1
    LEVERAGE_MAX: int = 125

    RECV_WINDOW_MAX: int = 60000


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"

    # 설정 파일
    SECRETS_FILE: Path = CONFIG_DIR / "secrets.yaml"


class RateLimitThresholds:
    """Rate Limit 임계값"""

    WEIGHT_WARN: int = 1500  # 경고
