"""
Binance Futures REST 동기 클라이언트

IRequestClient Protocol 구현.
요청 생성/검증은 RestApiRequestImpl, 전송은 ITransport, 응답 처리는 response 모듈.
재시도 없음: 모든 에러는 로깅 후 호출자에게 그대로 전파.
"""

import logging
import time
from decimal import Decimal
from typing import Any, Sequence, TypeVar

from binance_futures.core.config.loader import RequestOptions, Settings, get_settings
from binance_futures.core.errors import BinanceApiError, RateLimitError
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
from binance_futures.interfaces import ITransport
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
from binance_futures.rest.rate_limiter import RateLimitTracker
from binance_futures.rest.request_builder import RestApiRequest
from binance_futures.rest.request_impl import RestApiRequestImpl
from binance_futures.rest.response import handle_response
from binance_futures.rest.transport import HttpxTransport

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SyncRequestClient:
    """Binance Futures REST 동기 클라이언트

    모든 금액/수량은 Decimal 타입으로 반환.

    Args:
        api_key: API 키 (공개 엔드포인트만 쓰면 생략 가능)
        secret_key: API 시크릿
        options: 요청 옵션 (URL, 타임아웃, recvWindow)
        transport: 전송 계층 (None이면 HttpxTransport 생성, 주입 시 close하지 않음)
    """

    def __init__(
        self,
        api_key: str = "",
        secret_key: str = "",
        options: RequestOptions | None = None,
        transport: ITransport | None = None,
    ):
        self.options = options or RequestOptions()
        self.request_impl = RestApiRequestImpl(
            api_key=api_key,
            secret_key=secret_key,
            recv_window=self.options.recv_window,
        )
        self.rate_tracker = RateLimitTracker()

        self._owns_transport = transport is None
        self._transport: ITransport = transport or HttpxTransport(
            base_url=self.options.url,
            timeout=self.options.timeout,
            user_agent=self.options.user_agent,
        )

    @classmethod
    def create(
        cls,
        api_key: str = "",
        secret_key: str = "",
        options: RequestOptions | None = None,
    ) -> "SyncRequestClient":
        """기본 httpx 전송으로 클라이언트 생성"""
        return cls(api_key=api_key, secret_key=secret_key, options=options)

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        transport: ITransport | None = None,
    ) -> "SyncRequestClient":
        """secrets.yaml 설정으로 클라이언트 생성 (모드별 URL 자동 선택)"""
        settings = settings or get_settings()
        return cls(
            api_key=settings.api_key,
            secret_key=settings.api_secret,
            options=settings.request_options,
            transport=transport,
        )

    def close(self) -> None:
        """전송 계층 종료 (직접 생성한 경우만)"""
        if self._owns_transport:
            self._transport.close()

    def __enter__(self) -> "SyncRequestClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # 실행
    # -------------------------------------------------------------------------

    def _execute(self, request: RestApiRequest[T]) -> T:
        """요청 실행

        Raises:
            ValidationError: 키 누락 등 요청 준비 실패
            TransportError: 연결 실패, 타임아웃
            RateLimitError: 429/418 응답
            BinanceApiError: API 에러 응답
            ParseError: 응답 구조 불일치
        """
        prepared = self.request_impl.prepare(request)
        logger.debug(
            "API request",
            extra={"method": prepared.method, "path": prepared.path, "signed": request.signed},
        )

        response = self._transport.send(
            prepared.method,
            prepared.path,
            prepared.headers,
            prepared.query_string,
        )

        # Rate Limit 헤더 추적
        if self.rate_tracker.update_from_headers(response.headers):
            logger.warning(
                "Request weight threshold reached",
                extra={"rate_info": self.rate_tracker.to_dict()},
            )

        try:
            return handle_response(request, response)
        except RateLimitError as e:
            logger.warning(
                "Rate limited by Binance",
                extra={"path": request.path, "retry_after": e.retry_after},
            )
            raise
        except BinanceApiError as e:
            logger.error(
                "API error",
                extra={
                    "path": request.path,
                    "status_code": e.status_code,
                    "error_code": e.code,
                    "error_message": e.message,
                },
            )
            raise

    def sync_time(self) -> int:
        """서버 시간과 동기화

        로컬 시간과 서버 시간의 차이를 계산하여 이후 서명 요청의 timestamp에 적용.

        Returns:
            계산된 시간 오프셋 (밀리초)
        """
        local_time = int(time.time() * 1000)
        server_time = self.get_server_time()
        self.request_impl.time_offset = server_time - local_time

        logger.info(
            "서버 시간 동기화 완료",
            extra={"offset_ms": self.request_impl.time_offset},
        )

        return self.request_impl.time_offset

    # -------------------------------------------------------------------------
    # 시장 데이터
    # -------------------------------------------------------------------------

    def get_server_time(self) -> int:
        """서버 시간 조회 (밀리초)"""
        return self._execute(self.request_impl.get_server_time())

    def get_exchange_information(self) -> ExchangeInformation:
        return self._execute(self.request_impl.get_exchange_information())

    def get_order_book(self, symbol: str, limit: int | None = None) -> OrderBook:
        return self._execute(self.request_impl.get_order_book(symbol, limit))

    def get_recent_trades(self, symbol: str, limit: int | None = None) -> list[Trade]:
        return self._execute(self.request_impl.get_recent_trades(symbol, limit))

    def get_old_trades(
        self,
        symbol: str,
        limit: int | None = None,
        from_id: int | None = None,
    ) -> list[Trade]:
        """과거 체결 조회 (API 키 필요)"""
        return self._execute(self.request_impl.get_old_trades(symbol, limit, from_id))

    def get_aggregate_trades(
        self,
        symbol: str,
        from_id: int | None = None,
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> list[AggregateTrade]:
        return self._execute(
            self.request_impl.get_aggregate_trades(symbol, from_id, start_time, end_time, limit)
        )

    def get_candlestick(
        self,
        symbol: str,
        interval: CandlestickInterval,
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> list[Candlestick]:
        """캔들스틱(Kline) 조회"""
        return self._execute(
            self.request_impl.get_candlestick(symbol, interval, start_time, end_time, limit)
        )

    def get_mark_price(self, symbol: str | None = None) -> list[MarkPrice]:
        return self._execute(self.request_impl.get_mark_price(symbol))

    def get_funding_rate(
        self,
        symbol: str | None = None,
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> list[FundingRate]:
        return self._execute(
            self.request_impl.get_funding_rate(symbol, start_time, end_time, limit)
        )

    def get_24hr_ticker_price_change(self, symbol: str | None = None) -> list[PriceChangeTicker]:
        return self._execute(self.request_impl.get_24hr_ticker_price_change(symbol))

    def get_symbol_price_ticker(self, symbol: str | None = None) -> list[SymbolPrice]:
        return self._execute(self.request_impl.get_symbol_price_ticker(symbol))

    def get_symbol_order_book_ticker(self, symbol: str | None = None) -> list[SymbolOrderBook]:
        return self._execute(self.request_impl.get_symbol_order_book_ticker(symbol))

    def get_liquidation_orders(
        self,
        symbol: str | None = None,
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> list[LiquidationOrder]:
        return self._execute(
            self.request_impl.get_liquidation_orders(symbol, start_time, end_time, limit)
        )

    def get_open_interest_stat(
        self,
        symbol: str,
        period: PeriodType,
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> list[OpenInterestStat]:
        return self._execute(
            self.request_impl.get_open_interest_stat(symbol, period, start_time, end_time, limit)
        )

    def get_top_trader_account_ratio(
        self,
        symbol: str,
        period: PeriodType,
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> list[CommonLongShortRatio]:
        return self._execute(
            self.request_impl.get_top_trader_account_ratio(
                symbol, period, start_time, end_time, limit
            )
        )

    def get_top_trader_position_ratio(
        self,
        symbol: str,
        period: PeriodType,
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> list[CommonLongShortRatio]:
        return self._execute(
            self.request_impl.get_top_trader_position_ratio(
                symbol, period, start_time, end_time, limit
            )
        )

    def get_global_account_ratio(
        self,
        symbol: str,
        period: PeriodType,
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> list[CommonLongShortRatio]:
        return self._execute(
            self.request_impl.get_global_account_ratio(symbol, period, start_time, end_time, limit)
        )

    # -------------------------------------------------------------------------
    # 주문
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
    ) -> Order:
        """주문 생성

        Raises:
            OrderError: 거래소가 주문을 거부한 경우
        """
        order = self._execute(
            self.request_impl.post_order(
                symbol,
                side,
                position_side,
                order_type,
                time_in_force,
                quantity,
                price,
                reduce_only,
                new_client_order_id,
                stop_price,
                working_type,
            )
        )
        _log_order_placed(order)
        return order

    def place_order(self, request: OrderRequest) -> Order:
        """OrderRequest로 주문 생성"""
        order = self._execute(self.request_impl.post_order_request(request))
        _log_order_placed(order)
        return order

    def post_batch_orders(
        self,
        batch_orders: Sequence[OrderRequest] | str,
    ) -> list[Order | ResponseResult]:
        """일괄 주문 (최대 5건)

        개별 주문 실패는 해당 위치의 ResponseResult로 반환.
        """
        return self._execute(self.request_impl.post_batch_orders(batch_orders))

    def cancel_order(
        self,
        symbol: str,
        order_id: int | None = None,
        orig_client_order_id: str | None = None,
    ) -> Order:
        """주문 취소

        Raises:
            OrderError: 거래소가 취소를 거부한 경우
        """
        order = self._execute(
            self.request_impl.cancel_order(symbol, order_id, orig_client_order_id)
        )
        logger.info(
            "주문 취소 완료",
            extra={"order_id": order.order_id, "symbol": order.symbol},
        )
        return order

    def change_position_side(self, dual: bool) -> ResponseResult:
        """포지션 모드 변경 (True: Hedge Mode, False: One-way)"""
        return self._execute(self.request_impl.change_position_side(dual))

    def get_order(
        self,
        symbol: str,
        order_id: int | None = None,
        orig_client_order_id: str | None = None,
    ) -> Order:
        return self._execute(self.request_impl.get_order(symbol, order_id, orig_client_order_id))

    def get_open_orders(self, symbol: str | None = None) -> list[Order]:
        return self._execute(self.request_impl.get_open_orders(symbol))

    def get_all_orders(
        self,
        symbol: str,
        order_id: int | None = None,
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> list[Order]:
        return self._execute(
            self.request_impl.get_all_orders(symbol, order_id, start_time, end_time, limit)
        )

    # -------------------------------------------------------------------------
    # 계좌
    # -------------------------------------------------------------------------

    def get_balance(self) -> list[AccountBalance]:
        return self._execute(self.request_impl.get_balance())

    def get_account_information(self) -> AccountInformation:
        return self._execute(self.request_impl.get_account_information())

    def change_initial_leverage(self, symbol: str, leverage: int) -> Leverage:
        """레버리지 설정 (1~125)"""
        result = self._execute(self.request_impl.change_initial_leverage(symbol, leverage))
        logger.info(
            "Leverage set",
            extra={"symbol": result.symbol, "leverage": result.leverage},
        )
        return result

    def get_position_risk(self, symbol: str | None = None) -> list[PositionRisk]:
        return self._execute(self.request_impl.get_position_risk(symbol))

    def get_account_trades(
        self,
        symbol: str,
        start_time: int | None = None,
        end_time: int | None = None,
        from_id: int | None = None,
        limit: int | None = None,
    ) -> list[MyTrade]:
        return self._execute(
            self.request_impl.get_account_trades(symbol, start_time, end_time, from_id, limit)
        )

    def get_income_history(
        self,
        symbol: str | None = None,
        income_type: IncomeType | None = None,
        start_time: int | None = None,
        end_time: int | None = None,
        limit: int | None = None,
    ) -> list[Income]:
        return self._execute(
            self.request_impl.get_income_history(symbol, income_type, start_time, end_time, limit)
        )

    # -------------------------------------------------------------------------
    # listenKey 관리
    # -------------------------------------------------------------------------

    def start_user_data_stream(self) -> str:
        """listenKey 생성"""
        listen_key = self._execute(self.request_impl.start_user_data_stream())
        logger.info("listenKey created")
        return listen_key

    def keep_user_data_stream(self, listen_key: str) -> None:
        """listenKey 연장 (60분)"""
        self._execute(self.request_impl.keep_user_data_stream(listen_key))
        logger.debug("listenKey extended")

    def close_user_data_stream(self, listen_key: str) -> None:
        """listenKey 삭제"""
        self._execute(self.request_impl.close_user_data_stream(listen_key))
        logger.info("listenKey deleted")


def _log_order_placed(order: Order) -> None:
    logger.info(
        "주문 생성 완료",
        extra={
            "order_id": order.order_id,
            "client_order_id": order.client_order_id,
            "symbol": order.symbol,
            "side": order.side,
            "type": order.type,
            "qty": str(order.orig_qty),
        },
    )
