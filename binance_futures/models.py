"""
도메인 데이터 모델

Binance Futures API 응답을 표준화한 불변 레코드.
- 금액/수량: Decimal (응답 문자열 그대로 생성, float 미사용)
- 시간: 밀리초 타임스탬프 (int)
- enum 필드: WireEnum 멤버
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from binance_futures.core.errors import ValidationError
from binance_futures.core.types import (
    IncomeType,
    MarginType,
    OrderSide,
    OrderStatus,
    OrderType,
    PositionSide,
    TimeInForce,
    WorkingType,
)


# -------------------------------------------------------------------------
# 공통
# -------------------------------------------------------------------------

@dataclass(frozen=True)
class ResponseResult:
    """단순 결과 응답 ({"code": 200, "msg": "success"})

    batchOrders 응답에서는 개별 주문 실패 envelope에도 사용.
    """

    code: int
    msg: str

    @property
    def is_success(self) -> bool:
        return self.code == 200


# -------------------------------------------------------------------------
# 거래소 정보
# -------------------------------------------------------------------------

@dataclass(frozen=True)
class RateLimit:
    """요청 제한 규칙

    Attributes:
        rate_limit_type: REQUEST_WEIGHT / ORDERS
        interval: SECOND / MINUTE / DAY
        interval_num: 간격 배수
        limit: 제한 값
    """

    rate_limit_type: str
    interval: str
    interval_num: int
    limit: int


@dataclass(frozen=True)
class ExchangeFilter:
    """거래소 전체 필터 (필드 구성이 필터마다 달라 원본 dict 보존)"""

    filter_type: str
    values: dict[str, Any] = field(default_factory=dict, compare=True, hash=False)


@dataclass(frozen=True)
class ExchangeInfoEntry:
    """심볼별 거래 규칙

    Attributes:
        symbol: 거래 심볼
        status: 거래 상태 (TRADING 등)
        maint_margin_percent: 유지 증거금 비율
        required_margin_percent: 필요 증거금 비율
        base_asset: 기초 자산
        quote_asset: 견적 자산
        price_precision: 가격 정밀도
        quantity_precision: 수량 정밀도
        base_asset_precision: 기초 자산 정밀도
        quote_precision: 견적 자산 정밀도
        order_types: 허용 주문 유형
        time_in_force: 허용 주문 유효 기간
        filters: 심볼 필터 (PRICE_FILTER, LOT_SIZE 등)
    """

    symbol: str
    status: str
    maint_margin_percent: Decimal
    required_margin_percent: Decimal
    base_asset: str
    quote_asset: str
    price_precision: int
    quantity_precision: int
    base_asset_precision: int
    quote_precision: int
    order_types: tuple[OrderType, ...] = ()
    time_in_force: tuple[TimeInForce, ...] = ()
    filters: tuple[ExchangeFilter, ...] = ()


@dataclass(frozen=True)
class ExchangeInformation:
    """거래소 거래 규칙 및 심볼 정보"""

    timezone: str
    server_time: int
    rate_limits: tuple[RateLimit, ...] = ()
    exchange_filters: tuple[ExchangeFilter, ...] = ()
    symbols: tuple[ExchangeInfoEntry, ...] = ()

    def get_symbol(self, symbol: str) -> ExchangeInfoEntry | None:
        """심볼 규칙 조회 (없으면 None)"""
        for entry in self.symbols:
            if entry.symbol == symbol:
                return entry
        return None


# -------------------------------------------------------------------------
# 시장 데이터
# -------------------------------------------------------------------------

@dataclass(frozen=True)
class OrderBookEntry:
    """호가 한 단계 (가격, 수량)"""

    price: Decimal
    qty: Decimal


@dataclass(frozen=True)
class OrderBook:
    """호가창"""

    last_update_id: int
    bids: tuple[OrderBookEntry, ...] = ()
    asks: tuple[OrderBookEntry, ...] = ()
    event_time: int | None = None
    transaction_time: int | None = None

    @property
    def best_bid(self) -> OrderBookEntry | None:
        return self.bids[0] if self.bids else None

    @property
    def best_ask(self) -> OrderBookEntry | None:
        return self.asks[0] if self.asks else None


@dataclass(frozen=True)
class Trade:
    """공개 체결 (recent / historical trades)"""

    id: int
    price: Decimal
    qty: Decimal
    quote_qty: Decimal
    time: int
    is_buyer_maker: bool


@dataclass(frozen=True)
class AggregateTrade:
    """집계 체결 (aggTrades)

    Attributes:
        id: 집계 체결 ID
        price: 가격
        qty: 수량
        first_id: 첫 체결 ID
        last_id: 마지막 체결 ID
        time: 체결 시간
        is_buyer_maker: 매수자가 메이커인지 여부
    """

    id: int
    price: Decimal
    qty: Decimal
    first_id: int
    last_id: int
    time: int
    is_buyer_maker: bool


@dataclass(frozen=True)
class Candlestick:
    """캔들스틱 (klines 배열 한 행)"""

    open_time: int
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: Decimal
    close_time: int
    quote_asset_volume: Decimal
    num_trades: int
    taker_buy_base_asset_volume: Decimal
    taker_buy_quote_asset_volume: Decimal


@dataclass(frozen=True)
class MarkPrice:
    """마크 가격 및 펀딩 정보 (premiumIndex)"""

    symbol: str
    mark_price: Decimal
    index_price: Decimal | None
    last_funding_rate: Decimal
    next_funding_time: int
    time: int


@dataclass(frozen=True)
class FundingRate:
    """펀딩비 이력"""

    symbol: str
    funding_rate: Decimal
    funding_time: int
    mark_price: Decimal | None = None


@dataclass(frozen=True)
class PriceChangeTicker:
    """24시간 가격 변동 통계"""

    symbol: str
    price_change: Decimal
    price_change_percent: Decimal
    weighted_avg_price: Decimal
    last_price: Decimal
    last_qty: Decimal
    open_price: Decimal
    high_price: Decimal
    low_price: Decimal
    volume: Decimal
    quote_volume: Decimal
    open_time: int
    close_time: int
    first_id: int
    last_id: int
    count: int


@dataclass(frozen=True)
class SymbolPrice:
    """최근 체결가"""

    symbol: str
    price: Decimal
    time: int | None = None


@dataclass(frozen=True)
class SymbolOrderBook:
    """최우선 호가"""

    symbol: str
    bid_price: Decimal
    bid_qty: Decimal
    ask_price: Decimal
    ask_qty: Decimal
    time: int | None = None


@dataclass(frozen=True)
class LiquidationOrder:
    """강제 청산 주문"""

    symbol: str
    price: Decimal
    orig_qty: Decimal
    executed_qty: Decimal
    average_price: Decimal
    status: OrderStatus
    time_in_force: TimeInForce
    type: OrderType
    side: OrderSide
    time: int


@dataclass(frozen=True)
class OpenInterestStat:
    """미결제약정 통계"""

    symbol: str
    sum_open_interest: Decimal
    sum_open_interest_value: Decimal
    timestamp: int


@dataclass(frozen=True)
class CommonLongShortRatio:
    """롱/숏 비율 통계 (계좌/포지션 공통)"""

    symbol: str
    long_short_ratio: Decimal
    long_account: Decimal
    short_account: Decimal
    timestamp: int


# -------------------------------------------------------------------------
# 주문 / 체결
# -------------------------------------------------------------------------

@dataclass(frozen=True)
class Order:
    """주문 정보

    Attributes:
        order_id: 거래소 주문 ID
        client_order_id: 클라이언트 주문 ID
        symbol: 거래 심볼
        side: 주문 방향
        position_side: 포지션 방향
        status: 주문 상태
        type: 주문 유형
        orig_type: 원래 주문 유형 (트리거 전)
        time_in_force: 주문 유효 기간
        price: 지정가 ("0"이면 시장가)
        avg_price: 평균 체결가
        orig_qty: 주문 수량
        executed_qty: 체결 수량
        cum_quote: 누적 체결 금액
        stop_price: 트리거 가격
        reduce_only: 포지션 축소 전용 여부
        close_position: 전량 청산 주문 여부
        working_type: 트리거 기준 가격
        activate_price: 트레일링 활성화 가격
        price_rate: 트레일링 콜백 비율
        update_time: 마지막 업데이트 시간
    """

    order_id: int
    symbol: str
    status: OrderStatus
    price: Decimal
    client_order_id: str = ""
    side: OrderSide | None = None
    position_side: PositionSide | None = None
    type: OrderType | None = None
    orig_type: OrderType | None = None
    time_in_force: TimeInForce | None = None
    avg_price: Decimal | None = None
    orig_qty: Decimal = Decimal("0")
    executed_qty: Decimal = Decimal("0")
    cum_quote: Decimal = Decimal("0")
    stop_price: Decimal | None = None
    reduce_only: bool = False
    close_position: bool = False
    working_type: WorkingType | None = None
    activate_price: Decimal | None = None
    price_rate: Decimal | None = None
    time: int | None = None
    update_time: int | None = None

    @property
    def remaining_qty(self) -> Decimal:
        """잔여 수량"""
        return self.orig_qty - self.executed_qty

    @property
    def is_filled(self) -> bool:
        """완전 체결 여부"""
        return self.status == OrderStatus.FILLED

    @property
    def is_open(self) -> bool:
        """오픈 주문 여부 (NEW 또는 PARTIALLY_FILLED)"""
        return self.status in (OrderStatus.NEW, OrderStatus.PARTIALLY_FILLED)


@dataclass(frozen=True)
class MyTrade:
    """계정 체결 내역 (userTrades)"""

    id: int
    order_id: int
    symbol: str
    side: OrderSide
    position_side: PositionSide
    price: Decimal
    qty: Decimal
    quote_qty: Decimal
    realized_pnl: Decimal
    commission: Decimal
    commission_asset: str
    is_buyer: bool
    is_maker: bool
    time: int
    margin_asset: str | None = None


@dataclass(frozen=True)
class Income:
    """수익/비용 이력 (income)"""

    symbol: str
    income_type: IncomeType
    income: Decimal
    asset: str
    time: int
    info: str = ""
    tran_id: int | None = None
    trade_id: str = ""


# -------------------------------------------------------------------------
# 계좌
# -------------------------------------------------------------------------

@dataclass(frozen=True)
class AccountBalance:
    """자산별 잔고 (/fapi/v2/balance)

    Attributes:
        account_alias: 계정 별칭
        asset: 자산 코드
        balance: 지갑 잔고
        cross_wallet_balance: Cross 지갑 잔고
        cross_un_pnl: Cross 미실현 손익
        available_balance: 사용 가능 잔고
        max_withdraw_amount: 최대 출금 가능액
        margin_available: 증거금 사용 가능 여부
        update_time: 업데이트 시간
    """

    asset: str
    balance: Decimal
    available_balance: Decimal
    account_alias: str = ""
    cross_wallet_balance: Decimal = Decimal("0")
    cross_un_pnl: Decimal = Decimal("0")
    max_withdraw_amount: Decimal = Decimal("0")
    margin_available: bool = True
    update_time: int | None = None

    @property
    def total(self) -> Decimal:
        """총 잔고 (지갑 + 미실현 손익)"""
        return self.balance + self.cross_un_pnl


@dataclass(frozen=True)
class Asset:
    """계좌 정보 내 자산"""

    asset: str
    wallet_balance: Decimal
    unrealized_profit: Decimal
    margin_balance: Decimal
    maint_margin: Decimal
    initial_margin: Decimal
    position_initial_margin: Decimal
    open_order_initial_margin: Decimal
    max_withdraw_amount: Decimal
    available_balance: Decimal | None = None
    update_time: int | None = None


@dataclass(frozen=True)
class Position:
    """계좌 정보 내 포지션"""

    symbol: str
    initial_margin: Decimal
    maint_margin: Decimal
    unrealized_profit: Decimal
    position_initial_margin: Decimal
    open_order_initial_margin: Decimal
    leverage: int
    isolated: bool
    entry_price: Decimal
    max_notional: Decimal
    position_side: PositionSide
    position_amt: Decimal = Decimal("0")
    update_time: int | None = None


@dataclass(frozen=True)
class AccountInformation:
    """계좌 정보 (/fapi/v2/account)"""

    can_deposit: bool
    can_trade: bool
    can_withdraw: bool
    fee_tier: int
    max_withdraw_amount: Decimal
    total_initial_margin: Decimal
    total_maint_margin: Decimal
    total_margin_balance: Decimal
    total_open_order_initial_margin: Decimal
    total_position_initial_margin: Decimal
    total_unrealized_profit: Decimal
    total_wallet_balance: Decimal
    update_time: int
    assets: tuple[Asset, ...] = ()
    positions: tuple[Position, ...] = ()

    def get_asset(self, asset: str) -> Asset | None:
        for item in self.assets:
            if item.asset == asset:
                return item
        return None


@dataclass(frozen=True)
class Leverage:
    """레버리지 변경 결과"""

    symbol: str
    leverage: int
    max_notional_value: Decimal


@dataclass(frozen=True)
class PositionRisk:
    """포지션 위험 정보 (/fapi/v2/positionRisk)"""

    symbol: str
    position_amt: Decimal
    entry_price: Decimal
    mark_price: Decimal
    unrealized_profit: Decimal
    liquidation_price: Decimal
    leverage: int
    max_notional_value: Decimal
    margin_type: MarginType
    isolated_margin: Decimal
    is_auto_add_margin: bool
    position_side: PositionSide
    update_time: int | None = None

    @property
    def is_flat(self) -> bool:
        """포지션 없음 여부"""
        return self.position_amt == Decimal("0")


# -------------------------------------------------------------------------
# User Data Stream 페이로드 (ACCOUNT_UPDATE)
# -------------------------------------------------------------------------

@dataclass(frozen=True)
class BalanceUpdate:
    """ACCOUNT_UPDATE 잔고 항목"""

    asset: str
    wallet_balance: Decimal
    cross_wallet_balance: Decimal | None = None
    balance_change: Decimal | None = None


@dataclass(frozen=True)
class PositionUpdate:
    """ACCOUNT_UPDATE 포지션 항목"""

    symbol: str
    amount: Decimal
    entry_price: Decimal
    pre_fee: Decimal
    unrealized_pnl: Decimal
    margin_type: MarginType
    isolated_wallet: Decimal
    position_side: PositionSide


@dataclass(frozen=True)
class AccountUpdate:
    """ACCOUNT_UPDATE 이벤트의 "a" 객체"""

    balances: tuple[BalanceUpdate, ...] = ()
    positions: tuple[PositionUpdate, ...] = ()
    reason: str | None = None


# -------------------------------------------------------------------------
# 요청
# -------------------------------------------------------------------------

@dataclass
class OrderRequest:
    """주문 요청

    post_order / post_batch_orders에 전달되는 주문 요청 정보.

    Attributes:
        symbol: 거래 심볼
        side: 주문 방향
        order_type: 주문 유형
        quantity: 주문 수량
        price: 지정가 (LIMIT 주문 필수)
        stop_price: 트리거 가격 (STOP 주문 필수)
        client_order_id: 클라이언트 주문 ID (선택)
        time_in_force: 주문 유효 기간
        reduce_only: 포지션 축소 전용 여부
        position_side: 포지션 방향 (Hedge Mode)
        working_type: 트리거 기준 가격
    """

    symbol: str
    side: OrderSide
    order_type: OrderType
    quantity: Decimal | None = None
    price: Decimal | None = None
    stop_price: Decimal | None = None
    client_order_id: str | None = None
    time_in_force: TimeInForce | None = None
    reduce_only: bool | None = None
    position_side: PositionSide | None = None
    working_type: WorkingType | None = None

    def __post_init__(self) -> None:
        """유효성 검증"""
        if not self.symbol:
            raise ValidationError("symbol must not be empty")

        if self.side is None or self.order_type is None:
            raise ValidationError("side and order_type are required")

        # 수량은 양수여야 함
        if self.quantity is not None and self.quantity <= Decimal("0"):
            raise ValidationError("quantity must be positive")

        # LIMIT 주문은 가격 필수
        if self.order_type in (OrderType.LIMIT, OrderType.STOP, OrderType.TAKE_PROFIT):
            if self.price is None:
                raise ValidationError(f"price is required for {self.order_type.value} orders")

        # STOP 주문은 stop_price 필수
        stop_types = (
            OrderType.STOP_MARKET,
            OrderType.TAKE_PROFIT_MARKET,
            OrderType.STOP,
            OrderType.TAKE_PROFIT,
        )
        if self.order_type in stop_types and self.stop_price is None:
            raise ValidationError("stop_price is required for STOP orders")

    @classmethod
    def market(
        cls,
        symbol: str,
        side: OrderSide,
        quantity: Decimal,
        client_order_id: str | None = None,
        reduce_only: bool | None = None,
    ) -> "OrderRequest":
        """시장가 주문 생성"""
        return cls(
            symbol=symbol,
            side=side,
            order_type=OrderType.MARKET,
            quantity=quantity,
            client_order_id=client_order_id,
            reduce_only=reduce_only,
        )

    @classmethod
    def limit(
        cls,
        symbol: str,
        side: OrderSide,
        quantity: Decimal,
        price: Decimal,
        client_order_id: str | None = None,
        time_in_force: TimeInForce = TimeInForce.GTC,
        reduce_only: bool | None = None,
    ) -> "OrderRequest":
        """지정가 주문 생성"""
        return cls(
            symbol=symbol,
            side=side,
            order_type=OrderType.LIMIT,
            quantity=quantity,
            price=price,
            client_order_id=client_order_id,
            time_in_force=time_in_force,
            reduce_only=reduce_only,
        )

    @classmethod
    def stop_market(
        cls,
        symbol: str,
        side: OrderSide,
        quantity: Decimal,
        stop_price: Decimal,
        client_order_id: str | None = None,
        reduce_only: bool = True,
    ) -> "OrderRequest":
        """스탑 마켓 주문 생성 (손절)"""
        return cls(
            symbol=symbol,
            side=side,
            order_type=OrderType.STOP_MARKET,
            quantity=quantity,
            stop_price=stop_price,
            client_order_id=client_order_id,
            reduce_only=reduce_only,
        )

    def to_params(self) -> dict[str, str]:
        """wire 파라미터 dict로 변환 (순서 고정, None 제외)"""
        result: dict[str, str] = {
            "symbol": self.symbol,
            "side": self.side.value,
        }

        if self.position_side is not None:
            result["positionSide"] = self.position_side.value

        result["type"] = self.order_type.value

        if self.time_in_force is not None:
            result["timeInForce"] = self.time_in_force.value

        if self.quantity is not None:
            result["quantity"] = format(self.quantity, "f")

        if self.price is not None:
            result["price"] = format(self.price, "f")

        if self.reduce_only is not None:
            result["reduceOnly"] = "true" if self.reduce_only else "false"

        if self.client_order_id is not None:
            result["newClientOrderId"] = self.client_order_id

        if self.stop_price is not None:
            result["stopPrice"] = format(self.stop_price, "f")

        if self.working_type is not None:
            result["workingType"] = self.working_type.value

        return result
