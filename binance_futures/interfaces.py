"""
클라이언트 / 전송 인터페이스 정의

Protocol 기반으로 정의하여 의존성 주입 및 Mock 교체 가능.
- IRequestClient / IAsyncRequestClient: 엔드포인트 호출 표면
- ITransport / IAsyncTransport: HTTP 전송 계층 (테스트에서 가짜 구현으로 교체)
"""

from typing import TYPE_CHECKING, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
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
    from binance_futures.rest.transport import TransportResponse


@runtime_checkable
class ITransport(Protocol):
    """동기 HTTP 전송 인터페이스

    query_string은 서명이 끝난 상태로 전달되며 그대로 전송해야 함.
    연결 실패/타임아웃은 TransportError로 변환.
    """

    def send(
        self,
        method: str,
        path: str,
        headers: dict[str, str],
        query_string: str,
    ) -> "TransportResponse":
        ...

    def close(self) -> None:
        ...


@runtime_checkable
class IAsyncTransport(Protocol):
    """비동기 HTTP 전송 인터페이스"""

    async def send(
        self,
        method: str,
        path: str,
        headers: dict[str, str],
        query_string: str,
    ) -> "TransportResponse":
        ...

    async def close(self) -> None:
        ...


@runtime_checkable
class IRequestClient(Protocol):
    """Binance Futures REST 클라이언트 인터페이스

    금액/수량은 반드시 Decimal 타입 사용.
    인자 검증 실패는 네트워크 호출 전에 ValidationError.
    """

    # -------------------------------------------------------------------------
    # 시장 데이터
    # -------------------------------------------------------------------------

    def get_server_time(self) -> int:
        """서버 시간 (밀리초)"""
        ...

    def get_exchange_information(self) -> "ExchangeInformation":
        ...

    def get_order_book(self, symbol: str, limit: int | None = None) -> "OrderBook":
        """호가 조회

        Args:
            symbol: 거래 심볼
            limit: 5, 10, 20, 50, 100, 500, 1000 중 하나
        """
        ...

    def get_recent_trades(self, symbol: str, limit: int | None = None) -> list["Trade"]:
        ...

    def get_old_trades(
        self,
        symbol: str,
        limit: int | None = None,
        from_id: int | None = None,
    ) -> list["Trade"]:
        ...

    def get_aggregate_trades(
        self,
        symbol: str,
        from_id: int | None = None,
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> list["AggregateTrade"]:
        ...

    def get_candlestick(
        self,
        symbol: str,
        interval: "CandlestickInterval",
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> list["Candlestick"]:
        ...

    def get_mark_price(self, symbol: str | None = None) -> list["MarkPrice"]:
        ...

    def get_funding_rate(
        self,
        symbol: str | None = None,
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> list["FundingRate"]:
        ...

    def get_24hr_ticker_price_change(self, symbol: str | None = None) -> list["PriceChangeTicker"]:
        ...

    def get_symbol_price_ticker(self, symbol: str | None = None) -> list["SymbolPrice"]:
        ...

    def get_symbol_order_book_ticker(self, symbol: str | None = None) -> list["SymbolOrderBook"]:
        ...

    def get_liquidation_orders(
        self,
        symbol: str | None = None,
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> list["LiquidationOrder"]:
        ...

    def get_open_interest_stat(
        self,
        symbol: str,
        period: "PeriodType",
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> list["OpenInterestStat"]:
        ...

    def get_top_trader_account_ratio(
        self,
        symbol: str,
        period: "PeriodType",
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> list["CommonLongShortRatio"]:
        ...

    def get_top_trader_position_ratio(
        self,
        symbol: str,
        period: "PeriodType",
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> list["CommonLongShortRatio"]:
        ...

    def get_global_account_ratio(
        self,
        symbol: str,
        period: "PeriodType",
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> list["CommonLongShortRatio"]:
        ...

    # -------------------------------------------------------------------------
    # 주문
    # -------------------------------------------------------------------------

    def post_order(
        self,
        symbol: str,
        side: "OrderSide",
        position_side: "PositionSide | None",
        order_type: "OrderType",
        time_in_force: "TimeInForce | None" = None,
        quantity: object = None,
        price: object = None,
        reduce_only: object = None,
        new_client_order_id: str | None = None,
        stop_price: object = None,
        working_type: "WorkingType | None" = None,
    ) -> "Order":
        """주문 생성

        Raises:
            OrderError: 주문 거부
        """
        ...

    def place_order(self, request: "OrderRequest") -> "Order":
        ...

    def post_batch_orders(
        self,
        batch_orders: "Sequence[OrderRequest] | str",
    ) -> list["Order | ResponseResult"]:
        ...

    def cancel_order(
        self,
        symbol: str,
        order_id: int | None = None,
        orig_client_order_id: str | None = None,
    ) -> "Order":
        ...

    def change_position_side(self, dual: bool) -> "ResponseResult":
        ...

    def get_order(
        self,
        symbol: str,
        order_id: int | None = None,
        orig_client_order_id: str | None = None,
    ) -> "Order":
        ...

    def get_open_orders(self, symbol: str | None = None) -> list["Order"]:
        ...

    def get_all_orders(
        self,
        symbol: str,
        order_id: int | None = None,
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> list["Order"]:
        ...

    # -------------------------------------------------------------------------
    # 계좌
    # -------------------------------------------------------------------------

    def get_balance(self) -> list["AccountBalance"]:
        ...

    def get_account_information(self) -> "AccountInformation":
        ...

    def change_initial_leverage(self, symbol: str, leverage: int) -> "Leverage":
        ...

    def get_position_risk(self, symbol: str | None = None) -> list["PositionRisk"]:
        ...

    def get_account_trades(
        self,
        symbol: str,
        start_time: int | None = None,
        end_time: int | None = None,
        from_id: int | None = None,
        limit: int | None = None,
    ) -> list["MyTrade"]:
        ...

    def get_income_history(
        self,
        symbol: str | None = None,
        income_type: "IncomeType | None" = None,
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> list["Income"]:
        ...

    # -------------------------------------------------------------------------
    # listenKey 관리 (User Data Stream)
    # -------------------------------------------------------------------------

    def start_user_data_stream(self) -> str:
        """listenKey 생성"""
        ...

    def keep_user_data_stream(self, listen_key: str) -> None:
        """listenKey 유효기간 연장"""
        ...

    def close_user_data_stream(self, listen_key: str) -> None:
        ...


@runtime_checkable
class IAsyncRequestClient(Protocol):
    """비동기 클라이언트 인터페이스

    메서드 구성은 IRequestClient와 동일하며 모두 코루틴.
    """

    async def get_server_time(self) -> int:
        ...

    async def get_exchange_information(self) -> "ExchangeInformation":
        ...

    async def get_order_book(self, symbol: str, limit: int | None = None) -> "OrderBook":
        ...

    async def get_recent_trades(self, symbol: str, limit: int | None = None) -> list["Trade"]:
        ...

    async def get_old_trades(
        self,
        symbol: str,
        limit: int | None = None,
        from_id: int | None = None,
    ) -> list["Trade"]:
        ...

    async def get_aggregate_trades(
        self,
        symbol: str,
        from_id: int | None = None,
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> list["AggregateTrade"]:
        ...

    async def get_candlestick(
        self,
        symbol: str,
        interval: "CandlestickInterval",
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> list["Candlestick"]:
        ...

    async def get_mark_price(self, symbol: str | None = None) -> list["MarkPrice"]:
        ...

    async def get_funding_rate(
        self,
        symbol: str | None = None,
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> list["FundingRate"]:
        ...

    async def get_24hr_ticker_price_change(
        self,
        symbol: str | None = None,
    ) -> list["PriceChangeTicker"]:
        ...

    async def get_symbol_price_ticker(self, symbol: str | None = None) -> list["SymbolPrice"]:
        ...

    async def get_symbol_order_book_ticker(
        self,
        symbol: str | None = None,
    ) -> list["SymbolOrderBook"]:
        ...

    async def get_liquidation_orders(
        self,
        symbol: str | None = None,
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> list["LiquidationOrder"]:
        ...

    async def get_open_interest_stat(
        self,
        symbol: str,
        period: "PeriodType",
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> list["OpenInterestStat"]:
        ...

    async def get_top_trader_account_ratio(
        self,
        symbol: str,
        period: "PeriodType",
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> list["CommonLongShortRatio"]:
        ...

    async def get_top_trader_position_ratio(
        self,
        symbol: str,
        period: "PeriodType",
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> list["CommonLongShortRatio"]:
        ...

    async def get_global_account_ratio(
        self,
        symbol: str,
        period: "PeriodType",
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> list["CommonLongShortRatio"]:
        ...

    async def post_order(
        self,
        symbol: str,
        side: "OrderSide",
        position_side: "PositionSide | None",
        order_type: "OrderType",
        time_in_force: "TimeInForce | None" = None,
        quantity: object = None,
        price: object = None,
        reduce_only: object = None,
        new_client_order_id: str | None = None,
        stop_price: object = None,
        working_type: "WorkingType | None" = None,
    ) -> "Order":
        ...

    async def place_order(self, request: "OrderRequest") -> "Order":
        ...

    async def post_batch_orders(
        self,
        batch_orders: "Sequence[OrderRequest] | str",
    ) -> list["Order | ResponseResult"]:
        ...

    async def cancel_order(
        self,
        symbol: str,
        order_id: int | None = None,
        orig_client_order_id: str | None = None,
    ) -> "Order":
        ...

    async def change_position_side(self, dual: bool) -> "ResponseResult":
        ...

    async def get_order(
        self,
        symbol: str,
        order_id: int | None = None,
        orig_client_order_id: str | None = None,
    ) -> "Order":
        ...

    async def get_open_orders(self, symbol: str | None = None) -> list["Order"]:
        ...

    async def get_all_orders(
        self,
        symbol: str,
        order_id: int | None = None,
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> list["Order"]:
        ...

    async def get_balance(self) -> list["AccountBalance"]:
        ...

    async def get_account_information(self) -> "AccountInformation":
        ...

    async def change_initial_leverage(self, symbol: str, leverage: int) -> "Leverage":
        ...

    async def get_position_risk(self, symbol: str | None = None) -> list["PositionRisk"]:
        ...

    async def get_account_trades(
        self,
        symbol: str,
        start_time: int | None = None,
        end_time: int | None = None,
        from_id: int | None = None,
        limit: int | None = None,
    ) -> list["MyTrade"]:
        ...

    async def get_income_history(
        self,
        symbol: str | None = None,
        income_type: "IncomeType | None" = None,
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> list["Income"]:
        ...

    async def start_user_data_stream(self) -> str:
        ...

    async def keep_user_data_stream(self, listen_key: str) -> None:
        ...

    async def close_user_data_stream(self, listen_key: str) -> None:
        ...
