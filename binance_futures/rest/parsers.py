"""
Binance API 응답 -> 도메인 모델 변환

JsonWrapper를 입력받아 binance_futures.models의 불변 레코드를 생성.
- 필수 필드는 필수 접근자 사용 (누락 시 ParseError 그대로 전파)
- 생략 가능한 필드는 *_or_default 접근자 사용
- enum 필드는 WireEnum.lookup (알 수 없는 코드는 EnumLookupError)
모든 함수는 부수효과 없음.
"""

from decimal import Decimal
from typing import Callable, TypeVar

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
from binance_futures.core.utils.json_wrapper import JsonWrapper
from binance_futures.models import (
    AccountBalance,
    AccountInformation,
    AccountUpdate,
    AggregateTrade,
    Asset,
    BalanceUpdate,
    Candlestick,
    CommonLongShortRatio,
    ExchangeFilter,
    ExchangeInfoEntry,
    ExchangeInformation,
    FundingRate,
    Income,
    Leverage,
    LiquidationOrder,
    MarkPrice,
    MyTrade,
    OpenInterestStat,
    Order,
    OrderBook,
    OrderBookEntry,
    Position,
    PositionRisk,
    PositionUpdate,
    PriceChangeTicker,
    RateLimit,
    ResponseResult,
    SymbolOrderBook,
    SymbolPrice,
    Trade,
)


T = TypeVar("T")


def parse_list(json: JsonWrapper, parser: Callable[[JsonWrapper], T]) -> list[T]:
    """배열 응답의 각 원소에 파서 적용"""
    return [parser(item) for item in json.items()]


def _one_or_many(json: JsonWrapper, parser: Callable[[JsonWrapper], T]) -> list[T]:
    """symbol 지정 시 단일 객체, 미지정 시 배열을 반환하는 엔드포인트용"""
    if json.is_object:
        return [parser(json)]
    return parse_list(json, parser)


def _optional_enum(json: JsonWrapper, key: str, enum_type: type[T]) -> T | None:
    code = json.get_string_or_default(key, None)
    return None if code is None else enum_type.lookup(code)  # type: ignore[attr-defined]


# -------------------------------------------------------------------------
# 공통
# -------------------------------------------------------------------------

def parse_response_result(json: JsonWrapper) -> ResponseResult:
    """{"code": 200, "msg": "success"} 형식 응답"""
    return ResponseResult(
        code=json.get_int("code"),
        msg=json.get_string("msg"),
    )


def parse_listen_key(json: JsonWrapper) -> str:
    """POST /fapi/v1/listenKey 응답: {"listenKey": "..."}"""
    return json.get_string("listenKey")


def parse_server_time(json: JsonWrapper) -> int:
    """GET /fapi/v1/time 응답: {"serverTime": 1499827319559}"""
    return json.get_int("serverTime")


# -------------------------------------------------------------------------
# 거래소 정보
# -------------------------------------------------------------------------

def parse_rate_limit(json: JsonWrapper) -> RateLimit:
    return RateLimit(
        rate_limit_type=json.get_string("rateLimitType"),
        interval=json.get_string("interval"),
        interval_num=json.get_int("intervalNum"),
        limit=json.get_int("limit"),
    )


def parse_exchange_filter(json: JsonWrapper) -> ExchangeFilter:
    values = {
        key: value
        for key, value in json.unwrap().items()
        if key != "filterType"
    }
    return ExchangeFilter(filter_type=json.get_string("filterType"), values=values)


def parse_exchange_info_entry(json: JsonWrapper) -> ExchangeInfoEntry:
    return ExchangeInfoEntry(
        symbol=json.get_string("symbol"),
        status=json.get_string("status"),
        maint_margin_percent=json.get_decimal("maintMarginPercent"),
        required_margin_percent=json.get_decimal("requiredMarginPercent"),
        base_asset=json.get_string("baseAsset"),
        quote_asset=json.get_string("quoteAsset"),
        price_precision=json.get_int("pricePrecision"),
        quantity_precision=json.get_int("quantityPrecision"),
        base_asset_precision=json.get_int("baseAssetPrecision"),
        quote_precision=json.get_int("quotePrecision"),
        order_types=tuple(
            OrderType.lookup(item.unwrap())
            for item in json.get_list_or_default("orderTypes", [])
        ),
        time_in_force=tuple(
            TimeInForce.lookup(item.unwrap())
            for item in json.get_list_or_default("timeInForce", [])
        ),
        filters=tuple(
            parse_exchange_filter(item)
            for item in json.get_list_or_default("filters", [])
        ),
    )


def parse_exchange_information(json: JsonWrapper) -> ExchangeInformation:
    """GET /fapi/v1/exchangeInfo 응답

    {
        "timezone": "UTC",
        "serverTime": 1565246363776,
        "rateLimits": [{"rateLimitType": "REQUEST_WEIGHT", "interval": "MINUTE",
                        "intervalNum": 1, "limit": 2400}],
        "exchangeFilters": [],
        "symbols": [{"symbol": "BTCUSDT", "status": "TRADING", ...}]
    }
    """
    return ExchangeInformation(
        timezone=json.get_string("timezone"),
        server_time=json.get_int("serverTime"),
        rate_limits=tuple(parse_rate_limit(item) for item in json.get_list("rateLimits")),
        exchange_filters=tuple(
            parse_exchange_filter(item)
            for item in json.get_list_or_default("exchangeFilters", [])
        ),
        symbols=tuple(parse_exchange_info_entry(item) for item in json.get_list("symbols")),
    )


# -------------------------------------------------------------------------
# 시장 데이터
# -------------------------------------------------------------------------

def _parse_book_side(rows: list[JsonWrapper]) -> tuple[OrderBookEntry, ...]:
    # 각 행: ["4.00000000", "431.00000000"]
    return tuple(
        OrderBookEntry(price=row.get_decimal_at(0), qty=row.get_decimal_at(1))
        for row in rows
    )


def parse_order_book(json: JsonWrapper) -> OrderBook:
    """GET /fapi/v1/depth 응답"""
    return OrderBook(
        last_update_id=json.get_int("lastUpdateId"),
        bids=_parse_book_side(json.get_list("bids")),
        asks=_parse_book_side(json.get_list("asks")),
        event_time=json.get_int_or_default("E", None),
        transaction_time=json.get_int_or_default("T", None),
    )


def parse_trade(json: JsonWrapper) -> Trade:
    """GET /fapi/v1/trades, /fapi/v1/historicalTrades 원소

    {"id": 28457, "price": "4.00000100", "qty": "12.00000000",
     "quoteQty": "48.00", "time": 1499865549590, "isBuyerMaker": true}
    """
    return Trade(
        id=json.get_int("id"),
        price=json.get_decimal("price"),
        qty=json.get_decimal("qty"),
        quote_qty=json.get_decimal("quoteQty"),
        time=json.get_int("time"),
        is_buyer_maker=json.get_bool("isBuyerMaker"),
    )


def parse_aggregate_trade(json: JsonWrapper) -> AggregateTrade:
    """GET /fapi/v1/aggTrades 원소 (단축 키 사용)"""
    return AggregateTrade(
        id=json.get_int("a"),
        price=json.get_decimal("p"),
        qty=json.get_decimal("q"),
        first_id=json.get_int("f"),
        last_id=json.get_int("l"),
        time=json.get_int("T"),
        is_buyer_maker=json.get_bool("m"),
    )


def parse_candlestick(json: JsonWrapper) -> Candlestick:
    """GET /fapi/v1/klines 원소 (위치 기반 배열)

    [open_time, open, high, low, close, volume, close_time,
     quote_volume, trades, taker_buy_volume, taker_buy_quote_volume, ignore]
    """
    return Candlestick(
        open_time=json.get_int_at(0),
        open=json.get_decimal_at(1),
        high=json.get_decimal_at(2),
        low=json.get_decimal_at(3),
        close=json.get_decimal_at(4),
        volume=json.get_decimal_at(5),
        close_time=json.get_int_at(6),
        quote_asset_volume=json.get_decimal_at(7),
        num_trades=json.get_int_at(8),
        taker_buy_base_asset_volume=json.get_decimal_at(9),
        taker_buy_quote_asset_volume=json.get_decimal_at(10),
    )


def parse_mark_price(json: JsonWrapper) -> MarkPrice:
    """GET /fapi/v1/premiumIndex 원소"""
    return MarkPrice(
        symbol=json.get_string("symbol"),
        mark_price=json.get_decimal("markPrice"),
        index_price=json.get_decimal_or_default("indexPrice", None),
        last_funding_rate=json.get_decimal("lastFundingRate"),
        next_funding_time=json.get_int("nextFundingTime"),
        time=json.get_int("time"),
    )


def parse_mark_prices(json: JsonWrapper) -> list[MarkPrice]:
    return _one_or_many(json, parse_mark_price)


def parse_funding_rate(json: JsonWrapper) -> FundingRate:
    """GET /fapi/v1/fundingRate 원소"""
    # 과거 데이터는 markPrice가 빈 문자열로 오는 경우가 있음
    mark_price = None
    if json.get_string_or_default("markPrice", ""):
        mark_price = json.get_decimal("markPrice")
    return FundingRate(
        symbol=json.get_string("symbol"),
        funding_rate=json.get_decimal("fundingRate"),
        funding_time=json.get_int("fundingTime"),
        mark_price=mark_price,
    )


def parse_price_change_ticker(json: JsonWrapper) -> PriceChangeTicker:
    """GET /fapi/v1/ticker/24hr 원소"""
    return PriceChangeTicker(
        symbol=json.get_string("symbol"),
        price_change=json.get_decimal("priceChange"),
        price_change_percent=json.get_decimal("priceChangePercent"),
        weighted_avg_price=json.get_decimal("weightedAvgPrice"),
        last_price=json.get_decimal("lastPrice"),
        last_qty=json.get_decimal("lastQty"),
        open_price=json.get_decimal("openPrice"),
        high_price=json.get_decimal("highPrice"),
        low_price=json.get_decimal("lowPrice"),
        volume=json.get_decimal("volume"),
        quote_volume=json.get_decimal("quoteVolume"),
        open_time=json.get_int("openTime"),
        close_time=json.get_int("closeTime"),
        first_id=json.get_int("firstId"),
        last_id=json.get_int("lastId"),
        count=json.get_int("count"),
    )


def parse_price_change_tickers(json: JsonWrapper) -> list[PriceChangeTicker]:
    return _one_or_many(json, parse_price_change_ticker)


def parse_symbol_price(json: JsonWrapper) -> SymbolPrice:
    return SymbolPrice(
        symbol=json.get_string("symbol"),
        price=json.get_decimal("price"),
        time=json.get_int_or_default("time", None),
    )


def parse_symbol_prices(json: JsonWrapper) -> list[SymbolPrice]:
    return _one_or_many(json, parse_symbol_price)


def parse_symbol_order_book(json: JsonWrapper) -> SymbolOrderBook:
    return SymbolOrderBook(
        symbol=json.get_string("symbol"),
        bid_price=json.get_decimal("bidPrice"),
        bid_qty=json.get_decimal("bidQty"),
        ask_price=json.get_decimal("askPrice"),
        ask_qty=json.get_decimal("askQty"),
        time=json.get_int_or_default("time", None),
    )


def parse_symbol_order_books(json: JsonWrapper) -> list[SymbolOrderBook]:
    return _one_or_many(json, parse_symbol_order_book)


def parse_liquidation_order(json: JsonWrapper) -> LiquidationOrder:
    """GET /fapi/v1/allForceOrders 원소"""
    return LiquidationOrder(
        symbol=json.get_string("symbol"),
        price=json.get_decimal("price"),
        orig_qty=json.get_decimal("origQty"),
        executed_qty=json.get_decimal("executedQty"),
        average_price=json.get_decimal("averagePrice"),
        status=OrderStatus.lookup(json.get_string("status")),
        time_in_force=TimeInForce.lookup(json.get_string("timeInForce")),
        type=OrderType.lookup(json.get_string("type")),
        side=OrderSide.lookup(json.get_string("side")),
        time=json.get_int("time"),
    )


def parse_open_interest_stat(json: JsonWrapper) -> OpenInterestStat:
    """GET /futures/data/openInterestHist 원소"""
    return OpenInterestStat(
        symbol=json.get_string("symbol"),
        sum_open_interest=json.get_decimal("sumOpenInterest"),
        sum_open_interest_value=json.get_decimal("sumOpenInterestValue"),
        timestamp=json.get_int("timestamp"),
    )


def parse_long_short_ratio(json: JsonWrapper) -> CommonLongShortRatio:
    """GET /futures/data/*LongShort*Ratio 원소

    포지션 비율 엔드포인트는 longPosition/shortPosition 키를 쓰는 경우가 있어
    longAccount/shortAccount가 없으면 대체 키를 사용.
    """
    long_key = "longAccount" if json.contains_key("longAccount") else "longPosition"
    short_key = "shortAccount" if json.contains_key("shortAccount") else "shortPosition"
    return CommonLongShortRatio(
        symbol=json.get_string("symbol"),
        long_short_ratio=json.get_decimal("longShortRatio"),
        long_account=json.get_decimal(long_key),
        short_account=json.get_decimal(short_key),
        timestamp=json.get_int("timestamp"),
    )


# -------------------------------------------------------------------------
# 주문 / 체결
# -------------------------------------------------------------------------

def parse_order(json: JsonWrapper) -> Order:
    """주문 응답 (POST/DELETE/GET /fapi/v1/order, openOrders, allOrders)

    {
        "orderId": 22542179,
        "symbol": "BTCUSDT",
        "status": "NEW",
        "clientOrderId": "testOrder",
        "price": "0",
        "avgPrice": "0.00000",
        "origQty": "10",
        "executedQty": "0",
        "cumQuote": "0",
        "timeInForce": "GTC",
        "type": "TRAILING_STOP_MARKET",
        "reduceOnly": false,
        "closePosition": false,
        "side": "BUY",
        "positionSide": "SHORT",
        "stopPrice": "9300",
        "workingType": "CONTRACT_PRICE",
        "origType": "TRAILING_STOP_MARKET",
        "activatePrice": "9020",
        "priceRate": "0.3",
        "updateTime": 1566818724722
    }
    """
    return Order(
        order_id=json.get_int("orderId"),
        symbol=json.get_string("symbol"),
        status=OrderStatus.lookup(json.get_string("status")),
        price=json.get_decimal("price"),
        client_order_id=json.get_string_or_default("clientOrderId", ""),
        side=_optional_enum(json, "side", OrderSide),
        position_side=_optional_enum(json, "positionSide", PositionSide),
        type=_optional_enum(json, "type", OrderType),
        orig_type=_optional_enum(json, "origType", OrderType),
        time_in_force=_optional_enum(json, "timeInForce", TimeInForce),
        avg_price=json.get_decimal_or_default("avgPrice", None),
        orig_qty=json.get_decimal_or_default("origQty", Decimal("0")),
        executed_qty=json.get_decimal_or_default("executedQty", Decimal("0")),
        cum_quote=json.get_decimal_or_default("cumQuote", Decimal("0")),
        stop_price=json.get_decimal_or_default("stopPrice", None),
        reduce_only=json.get_bool_or_default("reduceOnly", False),
        close_position=json.get_bool_or_default("closePosition", False),
        working_type=_optional_enum(json, "workingType", WorkingType),
        activate_price=json.get_decimal_or_default("activatePrice", None),
        price_rate=json.get_decimal_or_default("priceRate", None),
        time=json.get_int_or_default("time", None),
        update_time=json.get_int_or_default("updateTime", None),
    )


def parse_batch_order_results(json: JsonWrapper) -> list[Order | ResponseResult]:
    """POST /fapi/v1/batchOrders 응답

    주문별로 성공 시 주문 객체, 실패 시 {"code": -2022, "msg": "..."}.
    """
    results: list[Order | ResponseResult] = []
    for item in json.items():
        if item.contains_key("code") and not item.contains_key("orderId"):
            results.append(parse_response_result(item))
        else:
            results.append(parse_order(item))
    return results


def parse_my_trade(json: JsonWrapper) -> MyTrade:
    """GET /fapi/v1/userTrades 원소"""
    return MyTrade(
        id=json.get_int("id"),
        order_id=json.get_int("orderId"),
        symbol=json.get_string("symbol"),
        side=OrderSide.lookup(json.get_string("side")),
        position_side=PositionSide.lookup(json.get_string("positionSide")),
        price=json.get_decimal("price"),
        qty=json.get_decimal("qty"),
        quote_qty=json.get_decimal("quoteQty"),
        realized_pnl=json.get_decimal("realizedPnl"),
        commission=json.get_decimal("commission"),
        commission_asset=json.get_string("commissionAsset"),
        is_buyer=json.get_bool("buyer"),
        is_maker=json.get_bool("maker"),
        time=json.get_int("time"),
        margin_asset=json.get_string_or_default("marginAsset", None),
    )


def parse_income(json: JsonWrapper) -> Income:
    """GET /fapi/v1/income 원소

    {"symbol": "BTCUSDT", "incomeType": "REALIZED_PNL", "income": "1.23456789",
     "asset": "USDT", "info": "", "time": 1570636800000,
     "tranId": 9689322392, "tradeId": ""}
    """
    return Income(
        symbol=json.get_string_or_default("symbol", ""),
        income_type=IncomeType.lookup(json.get_string("incomeType")),
        income=json.get_decimal("income"),
        asset=json.get_string("asset"),
        time=json.get_int("time"),
        info=json.get_string_or_default("info", ""),
        tran_id=json.get_int_or_default("tranId", None),
        trade_id=json.get_string_or_default("tradeId", ""),
    )


# -------------------------------------------------------------------------
# 계좌
# -------------------------------------------------------------------------

def parse_account_balance(json: JsonWrapper) -> AccountBalance:
    """GET /fapi/v2/balance 원소

    {
        "accountAlias": "SgsR",
        "asset": "USDT",
        "balance": "122607.35137903",
        "crossWalletBalance": "23.72469206",
        "crossUnPnl": "0.00000000",
        "availableBalance": "23.72469206",
        "maxWithdrawAmount": "23.72469206",
        "marginAvailable": true,
        "updateTime": 1617939110373
    }
    """
    return AccountBalance(
        asset=json.get_string("asset"),
        balance=json.get_decimal("balance"),
        available_balance=json.get_decimal("availableBalance"),
        account_alias=json.get_string_or_default("accountAlias", ""),
        cross_wallet_balance=json.get_decimal_or_default("crossWalletBalance", Decimal("0")),
        cross_un_pnl=json.get_decimal_or_default("crossUnPnl", Decimal("0")),
        max_withdraw_amount=json.get_decimal_or_default("maxWithdrawAmount", Decimal("0")),
        margin_available=json.get_bool_or_default("marginAvailable", True),
        update_time=json.get_int_or_default("updateTime", None),
    )


def parse_asset(json: JsonWrapper) -> Asset:
    return Asset(
        asset=json.get_string("asset"),
        wallet_balance=json.get_decimal("walletBalance"),
        unrealized_profit=json.get_decimal("unrealizedProfit"),
        margin_balance=json.get_decimal("marginBalance"),
        maint_margin=json.get_decimal("maintMargin"),
        initial_margin=json.get_decimal("initialMargin"),
        position_initial_margin=json.get_decimal("positionInitialMargin"),
        open_order_initial_margin=json.get_decimal("openOrderInitialMargin"),
        max_withdraw_amount=json.get_decimal("maxWithdrawAmount"),
        available_balance=json.get_decimal_or_default("availableBalance", None),
        update_time=json.get_int_or_default("updateTime", None),
    )


def parse_position(json: JsonWrapper) -> Position:
    return Position(
        symbol=json.get_string("symbol"),
        initial_margin=json.get_decimal("initialMargin"),
        maint_margin=json.get_decimal("maintMargin"),
        unrealized_profit=json.get_decimal("unrealizedProfit"),
        position_initial_margin=json.get_decimal("positionInitialMargin"),
        open_order_initial_margin=json.get_decimal("openOrderInitialMargin"),
        leverage=json.get_int("leverage"),
        isolated=json.get_bool("isolated"),
        entry_price=json.get_decimal("entryPrice"),
        max_notional=json.get_decimal("maxNotional"),
        position_side=PositionSide.lookup(json.get_string("positionSide")),
        position_amt=json.get_decimal_or_default("positionAmt", Decimal("0")),
        update_time=json.get_int_or_default("updateTime", None),
    )


def parse_account_information(json: JsonWrapper) -> AccountInformation:
    """GET /fapi/v2/account 응답 (assets, positions 중첩)"""
    return AccountInformation(
        can_deposit=json.get_bool("canDeposit"),
        can_trade=json.get_bool("canTrade"),
        can_withdraw=json.get_bool("canWithdraw"),
        fee_tier=json.get_int("feeTier"),
        max_withdraw_amount=json.get_decimal("maxWithdrawAmount"),
        total_initial_margin=json.get_decimal("totalInitialMargin"),
        total_maint_margin=json.get_decimal("totalMaintMargin"),
        total_margin_balance=json.get_decimal("totalMarginBalance"),
        total_open_order_initial_margin=json.get_decimal("totalOpenOrderInitialMargin"),
        total_position_initial_margin=json.get_decimal("totalPositionInitialMargin"),
        total_unrealized_profit=json.get_decimal("totalUnrealizedProfit"),
        total_wallet_balance=json.get_decimal("totalWalletBalance"),
        update_time=json.get_int("updateTime"),
        assets=tuple(parse_asset(item) for item in json.get_list("assets")),
        positions=tuple(parse_position(item) for item in json.get_list("positions")),
    )


def parse_leverage(json: JsonWrapper) -> Leverage:
    """POST /fapi/v1/leverage 응답"""
    return Leverage(
        symbol=json.get_string("symbol"),
        leverage=json.get_int("leverage"),
        max_notional_value=json.get_decimal("maxNotionalValue"),
    )


def parse_position_risk(json: JsonWrapper) -> PositionRisk:
    """GET /fapi/v2/positionRisk 원소

    {
        "symbol": "XRPUSDT",
        "positionAmt": "100",
        "entryPrice": "0.5123",
        "markPrice": "0.5200",
        "unRealizedProfit": "0.77",
        "liquidationPrice": "0.2500",
        "leverage": "20",
        "maxNotionalValue": "25000",
        "marginType": "cross",
        "isolatedMargin": "0.00000000",
        "isAutoAddMargin": "false",
        "positionSide": "LONG",
        "updateTime": 1625474304765
    }
    """
    return PositionRisk(
        symbol=json.get_string("symbol"),
        position_amt=json.get_decimal("positionAmt"),
        entry_price=json.get_decimal("entryPrice"),
        mark_price=json.get_decimal("markPrice"),
        unrealized_profit=json.get_decimal("unRealizedProfit"),
        liquidation_price=json.get_decimal("liquidationPrice"),
        leverage=json.get_int("leverage"),
        max_notional_value=json.get_decimal("maxNotionalValue"),
        margin_type=MarginType.lookup(json.get_string("marginType")),
        isolated_margin=json.get_decimal("isolatedMargin"),
        is_auto_add_margin=json.get_bool("isAutoAddMargin"),
        position_side=PositionSide.lookup(json.get_string("positionSide")),
        update_time=json.get_int_or_default("updateTime", None),
    )


# -------------------------------------------------------------------------
# User Data Stream 페이로드
# -------------------------------------------------------------------------

def parse_balance_update(json: JsonWrapper) -> BalanceUpdate:
    return BalanceUpdate(
        asset=json.get_string("a"),
        wallet_balance=json.get_decimal("wb"),
        cross_wallet_balance=json.get_decimal_or_default("cw", None),
        balance_change=json.get_decimal_or_default("bc", None),
    )


def parse_position_update(json: JsonWrapper) -> PositionUpdate:
    return PositionUpdate(
        symbol=json.get_string("s"),
        amount=json.get_decimal("pa"),
        entry_price=json.get_decimal("ep"),
        pre_fee=json.get_decimal("cr"),
        unrealized_pnl=json.get_decimal("up"),
        margin_type=MarginType.lookup(json.get_string("mt")),
        isolated_wallet=json.get_decimal("iw"),
        position_side=PositionSide.lookup(json.get_string("ps")),
    )


def parse_account_update(json: JsonWrapper) -> AccountUpdate:
    """ACCOUNT_UPDATE 이벤트의 "a" 객체

    {"m": "ORDER", "B": [{"a": "USDT", "wb": "122624.12345678", ...}],
     "P": [{"s": "BTCUSDT", "pa": "0", "ep": "0.00000", ...}]}
    """
    return AccountUpdate(
        balances=tuple(parse_balance_update(item) for item in json.get_list_or_default("B", [])),
        positions=tuple(parse_position_update(item) for item in json.get_list_or_default("P", [])),
        reason=json.get_string_or_default("m", None),
    )
