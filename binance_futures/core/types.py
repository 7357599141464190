"""
타입 정의 모듈

거래소 wire code Enum 정의
모든 Enum은 WireEnum(str, Enum)을 상속하여 문자열 직렬화 및 lookup 가능
"""

from binance_futures.core.utils.enum_lookup import WireEnum


class TradingMode(WireEnum):
    """거래 모드 (실거래 / 테스트넷)"""

    PRODUCTION = "production"
    TESTNET = "testnet"


class OrderSide(WireEnum):
    """주문 방향"""

    BUY = "BUY"
    SELL = "SELL"


class PositionSide(WireEnum):
    """포지션 방향 (Hedge Mode용)"""

    BOTH = "BOTH"
    LONG = "LONG"
    SHORT = "SHORT"


class OrderType(WireEnum):
    """주문 유형"""

    LIMIT = "LIMIT"
    MARKET = "MARKET"
    STOP = "STOP"
    STOP_MARKET = "STOP_MARKET"
    TAKE_PROFIT = "TAKE_PROFIT"
    TAKE_PROFIT_MARKET = "TAKE_PROFIT_MARKET"
    TRAILING_STOP_MARKET = "TRAILING_STOP_MARKET"
    LIQUIDATION = "LIQUIDATION"


class OrderStatus(WireEnum):
    """주문 상태"""

    NEW = "NEW"
    PARTIALLY_FILLED = "PARTIALLY_FILLED"
    FILLED = "FILLED"
    CANCELED = "CANCELED"  # Binance API 사용 (미국식 철자)
    REJECTED = "REJECTED"
    EXPIRED = "EXPIRED"
    NEW_INSURANCE = "NEW_INSURANCE"  # 보험기금 청산
    NEW_ADL = "NEW_ADL"  # 자동 감소(ADL)


class TimeInForce(WireEnum):
    """주문 유효 기간"""

    GTC = "GTC"  # Good Till Cancel
    IOC = "IOC"  # Immediate Or Cancel
    FOK = "FOK"  # Fill Or Kill
    GTX = "GTX"  # Post Only
    GTD = "GTD"  # Good Till Date


class WorkingType(WireEnum):
    """STOP 주문 트리거 기준 가격"""

    MARK_PRICE = "MARK_PRICE"
    CONTRACT_PRICE = "CONTRACT_PRICE"


class MarginType(WireEnum):
    """마진 타입 (positionRisk 응답은 소문자)"""

    CROSS = "cross"
    ISOLATED = "isolated"


class CandlestickInterval(WireEnum):
    """캔들스틱 간격"""

    ONE_MINUTE = "1m"
    THREE_MINUTES = "3m"
    FIVE_MINUTES = "5m"
    FIFTEEN_MINUTES = "15m"
    HALF_HOURLY = "30m"
    HOURLY = "1h"
    TWO_HOURLY = "2h"
    FOUR_HOURLY = "4h"
    SIX_HOURLY = "6h"
    EIGHT_HOURLY = "8h"
    TWELVE_HOURLY = "12h"
    DAILY = "1d"
    THREE_DAILY = "3d"
    WEEKLY = "1w"
    MONTHLY = "1M"


class PeriodType(WireEnum):
    """통계 데이터(futures/data) 집계 기간"""

    FIVE_MINUTES = "5m"
    FIFTEEN_MINUTES = "15m"
    THIRTY_MINUTES = "30m"
    ONE_HOUR = "1h"
    TWO_HOURS = "2h"
    FOUR_HOURS = "4h"
    SIX_HOURS = "6h"
    TWELVE_HOURS = "12h"
    ONE_DAY = "1d"


class IncomeType(WireEnum):
    """Income History 유형"""

    TRANSFER = "TRANSFER"
    WELCOME_BONUS = "WELCOME_BONUS"
    REALIZED_PNL = "REALIZED_PNL"
    FUNDING_FEE = "FUNDING_FEE"
    COMMISSION = "COMMISSION"
    INSURANCE_CLEAR = "INSURANCE_CLEAR"
    REFERRAL_KICKBACK = "REFERRAL_KICKBACK"
    COMMISSION_REBATE = "COMMISSION_REBATE"
    API_REBATE = "API_REBATE"
    CONTEST_REWARD = "CONTEST_REWARD"
    CROSS_COLLATERAL_TRANSFER = "CROSS_COLLATERAL_TRANSFER"
    OPTIONS_PREMIUM_FEE = "OPTIONS_PREMIUM_FEE"
    OPTIONS_SETTLE_PROFIT = "OPTIONS_SETTLE_PROFIT"
    INTERNAL_TRANSFER = "INTERNAL_TRANSFER"
    AUTO_EXCHANGE = "AUTO_EXCHANGE"
    DELIVERED_SETTELMENT = "DELIVERED_SETTELMENT"  # 거래소 표기 그대로
    COIN_SWAP_DEPOSIT = "COIN_SWAP_DEPOSIT"
    COIN_SWAP_WITHDRAW = "COIN_SWAP_WITHDRAW"
    POSITION_LIMIT_INCREASE_FEE = "POSITION_LIMIT_INCREASE_FEE"


class DepositState(WireEnum):
    """입금 상태"""

    UNKNOWN = "unknown"
    CONFIRMING = "confirming"
    SAFE = "safe"
    CONFIRMED = "confirmed"
    ORPHAN = "orphan"


class QueryDirection(WireEnum):
    """페이지 조회 방향"""

    PREV = "prev"
    NEXT = "next"


WIRE_ENUMS: tuple[type[WireEnum], ...] = (
    TradingMode,
    OrderSide,
    PositionSide,
    OrderType,
    OrderStatus,
    TimeInForce,
    WorkingType,
    MarginType,
    CandlestickInterval,
    PeriodType,
    IncomeType,
    DepositState,
    QueryDirection,
)
