"""
엔드포인트별 요청 생성

각 메서드는 인자를 검증하고(실패 시 ValidationError, 네트워크 호출 없음)
RestApiRequest(경로, 파라미터, 보안 유형, 파서)를 반환.
동기/비동기 클라이언트가 공통으로 사용.
"""

import json
import time
from decimal import Decimal
from typing import Any, Sequence

from binance_futures.core.constants import ApiLimits
from binance_futures.core.errors import ValidationError
from binance_futures.core.types import (
    CandlestickInterval,
    IncomeType,
    OrderSide,
    OrderType,
    PeriodType,
    PositionSide,
    TimeInForce,
    WorkingType,
)
from binance_futures.core.utils.json_wrapper import JsonWrapper
from binance_futures.models import (
    AccountBalance,
    AccountInformation,
    AggregateTrade,
    Candlestick,
    CommonLongShortRatio,
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
    OrderRequest,
    PositionRisk,
    PriceChangeTicker,
    ResponseResult,
    SymbolOrderBook,
    SymbolPrice,
    Trade,
)
from binance_futures.rest import parsers
from binance_futures.rest.request_builder import (
    PreparedRequest,
    RequestBuilder,
    RestApiRequest,
    SecurityType,
)


BATCH_ORDERS_MAX = 5


def _check_symbol(symbol: str | None) -> str:
    if not isinstance(symbol, str) or not symbol.strip():
        raise ValidationError("symbol must be a non-empty string")
    return symbol


def _check_optional_symbol(symbol: str | None) -> str | None:
    if symbol is None:
        return None
    return _check_symbol(symbol)


def _check_limit(limit: int | None, maximum: int, minimum: int = 1) -> int | None:
    if limit is None:
        return None
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise ValidationError(f"limit must be an integer, got {limit!r}")
    if not minimum <= limit <= maximum:
        raise ValidationError(f"limit must be between {minimum} and {maximum}, got {limit}")
    return limit


def _check_not_none(name: str, value: Any) -> Any:
    if value is None:
        raise ValidationError(f"{name} is required")
    return value


def _check_time_range(start_time: int | None, end_time: int | None) -> None:
    if start_time is not None and end_time is not None and start_time > end_time:
        raise ValidationError("start_time must not be after end_time")


def _check_order_reference(order_id: int | None, orig_client_order_id: str | None) -> None:
    if order_id is None and not orig_client_order_id:
        raise ValidationError("order_id or orig_client_order_id required")


def _list_of(parser):
    return lambda json: parsers.parse_list(json, parser)


class RestApiRequestImpl:
    """엔드포인트 요청 팩토리

    API 키/시크릿, recvWindow, 서버 시간 오프셋을 보관하고
    RestApiRequest를 PreparedRequest로 변환.

    Args:
        api_key: API 키 (공개 엔드포인트만 쓰면 빈 문자열 가능)
        secret_key: API 시크릿
        recv_window: 서명 요청 유효 시간 (밀리초)
    """

    def __init__(self, api_key: str = "", secret_key: str = "", recv_window: int | None = None):
        self.api_key = api_key
        self.secret_key = secret_key
        self.recv_window = recv_window

        # 서버 시간 동기화용 오프셋 (밀리초)
        self.time_offset: int = 0

    def get_timestamp(self) -> int:
        """서버 시간 오프셋이 적용된 타임스탬프 반환 (밀리초)"""
        return int(time.time() * 1000) + self.time_offset

    def prepare(self, request: RestApiRequest[Any], timestamp: int | None = None) -> PreparedRequest:
        """헤더/서명 부착"""
        if request.signed and timestamp is None:
            timestamp = self.get_timestamp()
        return request.prepare(
            api_key=self.api_key,
            secret_key=self.secret_key,
            timestamp=timestamp,
            recv_window=self.recv_window,
        )

    # -------------------------------------------------------------------------
    # 시장 데이터 (공개)
    # -------------------------------------------------------------------------

    def get_server_time(self) -> RestApiRequest[int]:
        return RestApiRequest("GET", "/fapi/v1/time", RequestBuilder(), parsers.parse_server_time)

    def get_exchange_information(self) -> RestApiRequest[ExchangeInformation]:
        return RestApiRequest(
            "GET",
            "/fapi/v1/exchangeInfo",
            RequestBuilder(),
            parsers.parse_exchange_information,
        )

    def get_order_book(self, symbol: str, limit: int | None = None) -> RestApiRequest[OrderBook]:
        _check_symbol(symbol)
        if limit is not None and limit not in ApiLimits.DEPTH_LIMITS:
            raise ValidationError(
                f"limit must be one of {ApiLimits.DEPTH_LIMITS}, got {limit!r}"
            )
        builder = RequestBuilder().require("symbol", symbol).put_to_url("limit", limit)
        return RestApiRequest("GET", "/fapi/v1/depth", builder, parsers.parse_order_book)

    def get_recent_trades(self, symbol: str, limit: int | None = None) -> RestApiRequest[list[Trade]]:
        _check_symbol(symbol)
        _check_limit(limit, ApiLimits.TRADES_MAX)
        builder = RequestBuilder().require("symbol", symbol).put_to_url("limit", limit)
        return RestApiRequest("GET", "/fapi/v1/trades", builder, _list_of(parsers.parse_trade))

    def get_old_trades(
        self,
        symbol: str,
        limit: int | None = None,
        from_id: int | None = None,
    ) -> RestApiRequest[list[Trade]]:
        _check_symbol(symbol)
        _check_limit(limit, ApiLimits.TRADES_MAX)
        builder = (
            RequestBuilder()
            .require("symbol", symbol)
            .put_to_url("limit", limit)
            .put_to_url("fromId", from_id)
        )
        return RestApiRequest(
            "GET",
            "/fapi/v1/historicalTrades",
            builder,
            _list_of(parsers.parse_trade),
            security=SecurityType.API_KEY,
        )

    def get_aggregate_trades(
        self,
        symbol: str,
        from_id: int | None = None,
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> RestApiRequest[list[AggregateTrade]]:
        _check_symbol(symbol)
        _check_time_range(start_time, end_time)
        _check_limit(limit, ApiLimits.AGG_TRADES_MAX)
        builder = (
            RequestBuilder()
            .require("symbol", symbol)
            .put_to_url("fromId", from_id)
            .put_to_url("startTime", start_time)
            .put_to_url("endTime", end_time)
            .put_to_url("limit", limit)
        )
        return RestApiRequest(
            "GET",
            "/fapi/v1/aggTrades",
            builder,
            _list_of(parsers.parse_aggregate_trade),
        )

    def get_candlestick(
        self,
        symbol: str,
        interval: CandlestickInterval,
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> RestApiRequest[list[Candlestick]]:
        _check_symbol(symbol)
        _check_not_none("interval", interval)
        _check_time_range(start_time, end_time)
        _check_limit(limit, ApiLimits.KLINES_MAX)
        builder = (
            RequestBuilder()
            .require("symbol", symbol)
            .require("interval", interval)
            .put_to_url("startTime", start_time)
            .put_to_url("endTime", end_time)
            .put_to_url("limit", limit)
        )
        return RestApiRequest(
            "GET",
            "/fapi/v1/klines",
            builder,
            _list_of(parsers.parse_candlestick),
        )

    def get_mark_price(self, symbol: str | None = None) -> RestApiRequest[list[MarkPrice]]:
        _check_optional_symbol(symbol)
        builder = RequestBuilder().put_to_url("symbol", symbol)
        return RestApiRequest("GET", "/fapi/v1/premiumIndex", builder, parsers.parse_mark_prices)

    def get_funding_rate(
        self,
        symbol: str | None = None,
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> RestApiRequest[list[FundingRate]]:
        _check_optional_symbol(symbol)
        _check_time_range(start_time, end_time)
        _check_limit(limit, ApiLimits.FUNDING_RATE_MAX)
        builder = (
            RequestBuilder()
            .put_to_url("symbol", symbol)
            .put_to_url("startTime", start_time)
            .put_to_url("endTime", end_time)
            .put_to_url("limit", limit)
        )
        return RestApiRequest(
            "GET",
            "/fapi/v1/fundingRate",
            builder,
            _list_of(parsers.parse_funding_rate),
        )

    def get_24hr_ticker_price_change(
        self,
        symbol: str | None = None,
    ) -> RestApiRequest[list[PriceChangeTicker]]:
        _check_optional_symbol(symbol)
        builder = RequestBuilder().put_to_url("symbol", symbol)
        return RestApiRequest(
            "GET",
            "/fapi/v1/ticker/24hr",
            builder,
            parsers.parse_price_change_tickers,
        )

    def get_symbol_price_ticker(self, symbol: str | None = None) -> RestApiRequest[list[SymbolPrice]]:
        _check_optional_symbol(symbol)
        builder = RequestBuilder().put_to_url("symbol", symbol)
        return RestApiRequest("GET", "/fapi/v1/ticker/price", builder, parsers.parse_symbol_prices)

    def get_symbol_order_book_ticker(
        self,
        symbol: str | None = None,
    ) -> RestApiRequest[list[SymbolOrderBook]]:
        _check_optional_symbol(symbol)
        builder = RequestBuilder().put_to_url("symbol", symbol)
        return RestApiRequest(
            "GET",
            "/fapi/v1/ticker/bookTicker",
            builder,
            parsers.parse_symbol_order_books,
        )

    def get_liquidation_orders(
        self,
        symbol: str | None = None,
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> RestApiRequest[list[LiquidationOrder]]:
        _check_optional_symbol(symbol)
        _check_time_range(start_time, end_time)
        _check_limit(limit, ApiLimits.FORCE_ORDERS_MAX)
        builder = (
            RequestBuilder()
            .put_to_url("symbol", symbol)
            .put_to_url("startTime", start_time)
            .put_to_url("endTime", end_time)
            .put_to_url("limit", limit)
        )
        return RestApiRequest(
            "GET",
            "/fapi/v1/allForceOrders",
            builder,
            _list_of(parsers.parse_liquidation_order),
        )

    # -------------------------------------------------------------------------
    # 통계 데이터 (futures/data)
    # -------------------------------------------------------------------------

    def _futures_data(
        self,
        path: str,
        symbol: str,
        period: PeriodType,
        start_time: int | None,
        end_time: int | None,
        limit: int | None,
        parser,
    ) -> RestApiRequest[Any]:
        _check_symbol(symbol)
        _check_not_none("period", period)
        _check_time_range(start_time, end_time)
        _check_limit(limit, ApiLimits.FUTURES_DATA_MAX)
        builder = (
            RequestBuilder()
            .require("symbol", symbol)
            .require("period", period)
            .put_to_url("startTime", start_time)
            .put_to_url("endTime", end_time)
            .put_to_url("limit", limit)
        )
        return RestApiRequest("GET", path, builder, _list_of(parser))

    def get_open_interest_stat(
        self,
        symbol: str,
        period: PeriodType,
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> RestApiRequest[list[OpenInterestStat]]:
        return self._futures_data(
            "/futures/data/openInterestHist",
            symbol, period, start_time, end_time, limit,
            parsers.parse_open_interest_stat,
        )

    def get_top_trader_account_ratio(
        self,
        symbol: str,
        period: PeriodType,
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> RestApiRequest[list[CommonLongShortRatio]]:
        return self._futures_data(
            "/futures/data/topLongShortAccountRatio",
            symbol, period, start_time, end_time, limit,
            parsers.parse_long_short_ratio,
        )

    def get_top_trader_position_ratio(
        self,
        symbol: str,
        period: PeriodType,
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> RestApiRequest[list[CommonLongShortRatio]]:
        return self._futures_data(
            "/futures/data/topLongShortPositionRatio",
            symbol, period, start_time, end_time, limit,
            parsers.parse_long_short_ratio,
        )

    def get_global_account_ratio(
        self,
        symbol: str,
        period: PeriodType,
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> RestApiRequest[list[CommonLongShortRatio]]:
        return self._futures_data(
            "/futures/data/globalLongShortAccountRatio",
            symbol, period, start_time, end_time, limit,
            parsers.parse_long_short_ratio,
        )

    # -------------------------------------------------------------------------
    # 주문 (서명)
    # -------------------------------------------------------------------------

    def post_order(
        self,
        symbol: str,
        side: OrderSide,
        position_side: PositionSide | None,
        order_type: OrderType,
        time_in_force: TimeInForce | None = None,
        quantity: str | Decimal | None = None,
        price: str | Decimal | None = None,
        reduce_only: str | bool | None = None,
        new_client_order_id: str | None = None,
        stop_price: str | Decimal | None = None,
        working_type: WorkingType | None = None,
    ) -> RestApiRequest[Order]:
        _check_symbol(symbol)
        _check_not_none("side", side)
        _check_not_none("order_type", order_type)
        builder = (
            RequestBuilder()
            .require("symbol", symbol)
            .require("side", side)
            .put_to_url("positionSide", position_side)
            .require("type", order_type)
            .put_to_url("timeInForce", time_in_force)
            .put_to_url("quantity", quantity)
            .put_to_url("price", price)
            .put_to_url("reduceOnly", reduce_only)
            .put_to_url("newClientOrderId", new_client_order_id)
            .put_to_url("stopPrice", stop_price)
            .put_to_url("workingType", working_type)
        )
        return RestApiRequest(
            "POST",
            "/fapi/v1/order",
            builder,
            parsers.parse_order,
            security=SecurityType.SIGNED,
            is_order=True,
        )

    def post_order_request(self, request: OrderRequest) -> RestApiRequest[Order]:
        """OrderRequest 기반 주문 생성 (검증은 OrderRequest에서 수행됨)"""
        builder = RequestBuilder()
        for name, value in request.to_params().items():
            builder.put_to_url(name, value)
        return RestApiRequest(
            "POST",
            "/fapi/v1/order",
            builder,
            parsers.parse_order,
            security=SecurityType.SIGNED,
            is_order=True,
        )

    def post_batch_orders(
        self,
        batch_orders: Sequence[OrderRequest] | str,
    ) -> RestApiRequest[list[Order | ResponseResult]]:
        """batchOrders: OrderRequest 목록 또는 이미 직렬화된 JSON 배열 문자열"""
        if isinstance(batch_orders, str):
            try:
                decoded = json.loads(batch_orders)
            except ValueError:
                raise ValidationError("batch_orders is not valid JSON") from None
            if not isinstance(decoded, list):
                raise ValidationError("batch_orders must be a JSON array")
            count = len(decoded)
            payload = batch_orders
        else:
            count = len(batch_orders)
            payload = json.dumps(
                [order.to_params() for order in batch_orders],
                separators=(",", ":"),
            )
        if not 1 <= count <= BATCH_ORDERS_MAX:
            raise ValidationError(
                f"batch_orders must contain 1 to {BATCH_ORDERS_MAX} orders, got {count}"
            )
        builder = RequestBuilder().require("batchOrders", payload)
        return RestApiRequest(
            "POST",
            "/fapi/v1/batchOrders",
            builder,
            parsers.parse_batch_order_results,
            security=SecurityType.SIGNED,
            is_order=True,
        )

    def cancel_order(
        self,
        symbol: str,
        order_id: int | None = None,
        orig_client_order_id: str | None = None,
    ) -> RestApiRequest[Order]:
        _check_symbol(symbol)
        _check_order_reference(order_id, orig_client_order_id)
        builder = (
            RequestBuilder()
            .require("symbol", symbol)
            .put_to_url("orderId", order_id)
            .put_to_url("origClientOrderId", orig_client_order_id)
        )
        return RestApiRequest(
            "DELETE",
            "/fapi/v1/order",
            builder,
            parsers.parse_order,
            security=SecurityType.SIGNED,
            is_order=True,
        )

    def change_position_side(self, dual: bool) -> RestApiRequest[ResponseResult]:
        _check_not_none("dual", dual)
        builder = RequestBuilder().require("dualSidePosition", bool(dual))
        return RestApiRequest(
            "POST",
            "/fapi/v1/positionSide/dual",
            builder,
            parsers.parse_response_result,
            security=SecurityType.SIGNED,
        )

    def get_order(
        self,
        symbol: str,
        order_id: int | None = None,
        orig_client_order_id: str | None = None,
    ) -> RestApiRequest[Order]:
        _check_symbol(symbol)
        _check_order_reference(order_id, orig_client_order_id)
        builder = (
            RequestBuilder()
            .require("symbol", symbol)
            .put_to_url("orderId", order_id)
            .put_to_url("origClientOrderId", orig_client_order_id)
        )
        return RestApiRequest(
            "GET",
            "/fapi/v1/order",
            builder,
            parsers.parse_order,
            security=SecurityType.SIGNED,
        )

    def get_open_orders(self, symbol: str | None = None) -> RestApiRequest[list[Order]]:
        _check_optional_symbol(symbol)
        builder = RequestBuilder().put_to_url("symbol", symbol)
        return RestApiRequest(
            "GET",
            "/fapi/v1/openOrders",
            builder,
            _list_of(parsers.parse_order),
            security=SecurityType.SIGNED,
        )

    def get_all_orders(
        self,
        symbol: str,
        order_id: int | None = None,
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> RestApiRequest[list[Order]]:
        _check_symbol(symbol)
        _check_time_range(start_time, end_time)
        _check_limit(limit, ApiLimits.ALL_ORDERS_MAX)
        builder = (
            RequestBuilder()
            .require("symbol", symbol)
            .put_to_url("orderId", order_id)
            .put_to_url("startTime", start_time)
            .put_to_url("endTime", end_time)
            .put_to_url("limit", limit)
        )
        return RestApiRequest(
            "GET",
            "/fapi/v1/allOrders",
            builder,
            _list_of(parsers.parse_order),
            security=SecurityType.SIGNED,
        )

    # -------------------------------------------------------------------------
    # 계좌 (서명)
    # -------------------------------------------------------------------------

    def get_balance(self) -> RestApiRequest[list[AccountBalance]]:
        return RestApiRequest(
            "GET",
            "/fapi/v2/balance",
            RequestBuilder(),
            _list_of(parsers.parse_account_balance),
            security=SecurityType.SIGNED,
        )

    def get_account_information(self) -> RestApiRequest[AccountInformation]:
        return RestApiRequest(
            "GET",
            "/fapi/v2/account",
            RequestBuilder(),
            parsers.parse_account_information,
            security=SecurityType.SIGNED,
        )

    def change_initial_leverage(self, symbol: str, leverage: int) -> RestApiRequest[Leverage]:
        _check_symbol(symbol)
        if isinstance(leverage, bool) or not isinstance(leverage, int):
            raise ValidationError(f"leverage must be an integer, got {leverage!r}")
        if not ApiLimits.LEVERAGE_MIN <= leverage <= ApiLimits.LEVERAGE_MAX:
            raise ValidationError(
                f"leverage must be between {ApiLimits.LEVERAGE_MIN} and "
                f"{ApiLimits.LEVERAGE_MAX}, got {leverage}"
            )
        builder = RequestBuilder().require("symbol", symbol).require("leverage", leverage)
        return RestApiRequest(
            "POST",
            "/fapi/v1/leverage",
            builder,
            parsers.parse_leverage,
            security=SecurityType.SIGNED,
        )

    def get_position_risk(self, symbol: str | None = None) -> RestApiRequest[list[PositionRisk]]:
        _check_optional_symbol(symbol)
        builder = RequestBuilder().put_to_url("symbol", symbol)
        return RestApiRequest(
            "GET",
            "/fapi/v2/positionRisk",
            builder,
            _list_of(parsers.parse_position_risk),
            security=SecurityType.SIGNED,
        )

    def get_account_trades(
        self,
        symbol: str,
        start_time: int | None = None,
        end_time: int | None = None,
        from_id: int | None = None,
        limit: int | None = None,
    ) -> RestApiRequest[list[MyTrade]]:
        _check_symbol(symbol)
        _check_time_range(start_time, end_time)
        _check_limit(limit, ApiLimits.USER_TRADES_MAX)
        builder = (
            RequestBuilder()
            .require("symbol", symbol)
            .put_to_url("startTime", start_time)
            .put_to_url("endTime", end_time)
            .put_to_url("fromId", from_id)
            .put_to_url("limit", limit)
        )
        return RestApiRequest(
            "GET",
            "/fapi/v1/userTrades",
            builder,
            _list_of(parsers.parse_my_trade),
            security=SecurityType.SIGNED,
        )

    def get_income_history(
        self,
        symbol: str | None = None,
        income_type: IncomeType | None = None,
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> RestApiRequest[list[Income]]:
        _check_optional_symbol(symbol)
        _check_time_range(start_time, end_time)
        _check_limit(limit, ApiLimits.INCOME_MAX)
        builder = (
            RequestBuilder()
            .put_to_url("symbol", symbol)
            .put_to_url("incomeType", income_type)
            .put_to_url("startTime", start_time)
            .put_to_url("endTime", end_time)
            .put_to_url("limit", limit)
        )
        return RestApiRequest(
            "GET",
            "/fapi/v1/income",
            builder,
            _list_of(parsers.parse_income),
            security=SecurityType.SIGNED,
        )

    # -------------------------------------------------------------------------
    # User Data Stream (API 키 헤더만)
    # -------------------------------------------------------------------------

    def start_user_data_stream(self) -> RestApiRequest[str]:
        return RestApiRequest(
            "POST",
            "/fapi/v1/listenKey",
            RequestBuilder(),
            parsers.parse_listen_key,
            security=SecurityType.API_KEY,
        )

    def keep_user_data_stream(self, listen_key: str) -> RestApiRequest[None]:
        builder = RequestBuilder().require("listenKey", listen_key)
        return RestApiRequest(
            "PUT",
            "/fapi/v1/listenKey",
            builder,
            None,
            security=SecurityType.API_KEY,
        )

    def close_user_data_stream(self, listen_key: str) -> RestApiRequest[None]:
        builder = RequestBuilder().require("listenKey", listen_key)
        return RestApiRequest(
            "DELETE",
            "/fapi/v1/listenKey",
            builder,
            None,
            security=SecurityType.API_KEY,
        )
