"""
core/constants.py 테스트

경로가 pathlib.Path 타입이고, 상수가 정상적으로 접근 가능한지 확인
"""

from pathlib import Path

from binance_futures.core.constants import (
    PROJECT_ROOT,
    ApiHeaders,
    ApiLimits,
    BinanceEndpoints,
    Paths,
    RateLimitThresholds,
)


class TestProjectRoot:
    """PROJECT_ROOT 테스트"""

    def test_project_root_is_path(self) -> None:
        """PROJECT_ROOT가 Path 타입인지 확인"""
        assert isinstance(PROJECT_ROOT, Path)
        assert PROJECT_ROOT.is_absolute()

    def test_project_root_contains_package(self) -> None:
        """PROJECT_ROOT에 binance_futures 패키지가 있는지 확인"""
        assert (PROJECT_ROOT / "binance_futures").exists()


class TestBinanceEndpoints:
    """BinanceEndpoints 테스트"""

    def test_production_rest_url(self) -> None:
        assert BinanceEndpoints.PROD_REST_URL == "https://fapi.binance.com"

    def test_testnet_rest_url(self) -> None:
        assert BinanceEndpoints.TEST_REST_URL == "https://testnet.binancefuture.com"


class TestPaths:
    """Paths 테스트"""

    def test_paths_are_path_type(self) -> None:
        assert isinstance(Paths.CONFIG_DIR, Path)
        assert isinstance(Paths.LOGS_DIR, Path)
        assert isinstance(Paths.SECRETS_FILE, Path)

    def test_secrets_file_in_config_dir(self) -> None:
        assert Paths.SECRETS_FILE.parent == Paths.CONFIG_DIR
        assert Paths.SECRETS_FILE.name == "secrets.yaml"


class TestLimits:
    """ApiLimits / RateLimitThresholds 테스트"""

    def test_depth_limits(self) -> None:
        assert ApiLimits.DEPTH_LIMITS == (5, 10, 20, 50, 100, 500, 1000)

    def test_leverage_range(self) -> None:
        assert ApiLimits.LEVERAGE_MIN == 1
        assert ApiLimits.LEVERAGE_MAX == 125

    def test_weight_warn_below_exchange_limit(self) -> None:
        """경고 임계값은 1분 가중치 한도(2400)보다 낮음"""
        assert 0 < RateLimitThresholds.WEIGHT_WARN < 2400

    def test_api_key_header(self) -> None:
        assert ApiHeaders.API_KEY == "X-MBX-APIKEY"
