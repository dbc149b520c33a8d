"""Tests for the per-protocol routing strategies.

Strategies are exercised end to end against MockCallExecutor: contexts are
built first, then the executor answers only the calldata a test picks.
"""

import pytest

from dexrouter.amm.uniswap_v3 import encode_path
from dexrouter.amm.uniswap_v4 import compute_pool_id, make_pool_key
from dexrouter.errors import ConfigurationError, InvalidInputError, RoutingError
from dexrouter.models.route import DexProtocol, Route
from dexrouter.models.types import UINT128_MAX
from dexrouter.multicall import CallRequest, CallResult, MockCallExecutor
from dexrouter.routing.selection import is_better, select_best_route
from dexrouter.routing.strategies import (
    AerodromeRoutingStrategy,
    BaseRoutingStrategy,
    UniswapV2RoutingStrategy,
    UniswapV3RoutingStrategy,
    UniswapV4RoutingStrategy,
)
from dexrouter.routing.types import QuoteContext
from tests.helpers import (
    BASE_USDC,
    BASE_USDT,
    BASE_WETH,
    NATIVE,
    ONE_ETH,
    responder_for,
    v2_amounts_result,
    v3_multi_result,
    v3_single_result,
    v4_result,
)

STRATEGIES = [
    UniswapV2RoutingStrategy,
    UniswapV3RoutingStrategy,
    UniswapV4RoutingStrategy,
    AerodromeRoutingStrategy,
]

# WETH -> USDC on Base: 1 direct, 6 one-intermediary and 1 two-intermediary paths
EXPECTED_REQUESTS = {
    UniswapV2RoutingStrategy: 8,
    UniswapV3RoutingStrategy: 4 + 6 * 9 + 9,
    UniswapV4RoutingStrategy: 4 + 6 * 9 + 9,
    AerodromeRoutingStrategy: 2 + 6 * 4 + 8,
}


def result_for(strategy, context: QuoteContext, amount_out: int) -> bytes:
    """Well-formed quoter return data for a context."""
    if isinstance(strategy, UniswapV3RoutingStrategy):
        if context.is_multihop:
            return v3_multi_result(amount_out, context.hop_count)
        return v3_single_result(amount_out)
    if isinstance(strategy, UniswapV4RoutingStrategy):
        return v4_result(amount_out)
    amounts = [ONE_ETH] + [1] * (context.hop_count - 1) + [amount_out]
    return v2_amounts_result(amounts)


def make_context(index: int, path: list[str]) -> QuoteContext:
    return QuoteContext(
        request_index=index,
        request=CallRequest(target=BASE_WETH, call_data=index.to_bytes(4, "big")),
        path=path,
        description=f"candidate {index}",
    )


def amount_decoder(context: QuoteContext, data: bytes) -> int:
    return int.from_bytes(data, "big")


def simple_route(context: QuoteContext, amount_out: int) -> Route:
    return Route(amount_out=amount_out, path=list(context.path))


class TestRequestEnumeration:
    """Tests for context construction before any network call."""

    @pytest.mark.parametrize("strategy_class", STRATEGIES)
    def test_request_counts(self, base_chain, strategy_class):
        contexts = strategy_class(base_chain).build_contexts(BASE_WETH, ONE_ETH, BASE_USDC)
        assert len(contexts) == EXPECTED_REQUESTS[strategy_class]

    @pytest.mark.parametrize("strategy_class", STRATEGIES)
    def test_deterministic(self, base_chain, strategy_class):
        strategy = strategy_class(base_chain)
        first = strategy.build_contexts(BASE_WETH, ONE_ETH, BASE_USDC)
        second = strategy.build_contexts(BASE_WETH, ONE_ETH, BASE_USDC)
        assert [c.request.call_data for c in first] == [c.request.call_data for c in second]

    @pytest.mark.parametrize("strategy_class", STRATEGIES)
    def test_indices_follow_submission_order(self, base_chain, strategy_class):
        contexts = strategy_class(base_chain).build_contexts(BASE_WETH, ONE_ETH, BASE_USDC)
        assert [context.request_index for context in contexts] == list(range(len(contexts)))

    @pytest.mark.parametrize("strategy_class", STRATEGIES)
    def test_direct_candidates_first(self, base_chain, strategy_class):
        contexts = strategy_class(base_chain).build_contexts(BASE_WETH, ONE_ETH, BASE_USDC)
        assert contexts[0].path == [BASE_WETH, BASE_USDC]

    @pytest.mark.parametrize("strategy_class", STRATEGIES)
    def test_paths_are_lowercase(self, base_chain, strategy_class):
        contexts = strategy_class(base_chain).build_contexts(BASE_WETH, ONE_ETH, BASE_USDC)
        assert all(token == token.lower() for c in contexts for token in c.path)

    def test_native_sentinel_becomes_wrapped_native(self, base_chain):
        contexts = UniswapV2RoutingStrategy(base_chain).build_contexts(NATIVE, ONE_ETH, BASE_USDC)
        assert contexts[0].path == [BASE_WETH, BASE_USDC]

    def test_v3_fee_descriptions(self, base_chain):
        contexts = UniswapV3RoutingStrategy(base_chain).build_contexts(
            BASE_WETH, ONE_ETH, BASE_USDC
        )
        assert [context.fees for context in contexts[:4]] == [[100], [500], [3000], [10000]]
        assert contexts[1].description.endswith("| 500")

    def test_aerodrome_direct_tries_stable_first(self, base_chain):
        contexts = AerodromeRoutingStrategy(base_chain).build_contexts(
            BASE_WETH, ONE_ETH, BASE_USDC
        )
        assert contexts[0].stable_flags == [True]
        assert contexts[1].stable_flags == [False]


class TestInputValidation:
    """Malformed requests fail before any network call."""

    @pytest.mark.parametrize("strategy_class", STRATEGIES)
    def test_same_token(self, base_chain, strategy_class):
        with pytest.raises(InvalidInputError):
            strategy_class(base_chain).build_contexts(BASE_WETH, ONE_ETH, BASE_WETH)

    def test_native_sentinel_against_wrapped_native(self, base_chain):
        with pytest.raises(InvalidInputError):
            UniswapV2RoutingStrategy(base_chain).build_contexts(NATIVE, ONE_ETH, BASE_WETH)

    @pytest.mark.parametrize(
        "token",
        [
            "0x123",
            "not-an-address",
            "",
            "0x" + "a" * 39 + " ",
            "0x" + "1_" * 19 + "11",
            "0x" + "a" * 40 + "\n",
        ],
    )
    def test_invalid_address(self, base_chain, token):
        with pytest.raises(InvalidInputError):
            UniswapV2RoutingStrategy(base_chain).build_contexts(token, ONE_ETH, BASE_USDC)

    @pytest.mark.parametrize("amount", [0, -1, 2**256, "abc", True])
    def test_invalid_amount(self, base_chain, amount):
        with pytest.raises(InvalidInputError):
            UniswapV3RoutingStrategy(base_chain).build_contexts(BASE_WETH, amount, BASE_USDC)

    def test_v4_rejects_amount_above_uint128(self, base_chain):
        strategy = UniswapV4RoutingStrategy(base_chain)
        with pytest.raises(InvalidInputError):
            strategy.build_contexts(BASE_WETH, UINT128_MAX + 1, BASE_USDC)
        assert strategy.build_contexts(BASE_WETH, UINT128_MAX, BASE_USDC)

    @pytest.mark.asyncio
    async def test_no_round_trip_on_invalid_input(self, base_chain, failing_executor):
        with pytest.raises(InvalidInputError):
            await UniswapV2RoutingStrategy(base_chain).get_best_route(
                failing_executor, BASE_WETH, 0, BASE_USDC
            )
        assert failing_executor.round_trips == 0

    def test_missing_deployment(self, ethereum_chain):
        with pytest.raises(ConfigurationError):
            AerodromeRoutingStrategy(ethereum_chain)


class TestSharedQuoteFlow:
    """Tests for the decode and quote flow every strategy inherits."""

    @pytest.mark.parametrize("strategy_class", STRATEGIES)
    def test_inherits_quote_flow(self, strategy_class):
        assert issubclass(strategy_class, BaseRoutingStrategy)
        assert "decode" not in vars(strategy_class)
        assert "get_best_route" not in vars(strategy_class)

    @pytest.mark.parametrize("strategy_class", STRATEGIES)
    def test_decode_dispatches_on_hop_count(self, base_chain, strategy_class):
        strategy = strategy_class(base_chain)
        contexts = strategy.build_contexts(BASE_WETH, ONE_ETH, BASE_USDC)
        direct = contexts[0]
        multihop = next(context for context in contexts if context.is_multihop)

        assert strategy.decode(direct, result_for(strategy, direct, 5)) == 5
        assert strategy.decode(multihop, result_for(strategy, multihop, 7)) == 7

    def test_base_requires_contexts(self):
        with pytest.raises(NotImplementedError):
            BaseRoutingStrategy().build_contexts(BASE_WETH, ONE_ETH, BASE_USDC)


class TestGetBestRoute:
    """Tests for quoting and best-route selection."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("strategy_class", STRATEGIES)
    async def test_all_calls_fail(self, base_chain, strategy_class, failing_executor):
        route = await strategy_class(base_chain).get_best_route(
            failing_executor, BASE_WETH, ONE_ETH, BASE_USDC
        )

        assert route.amount_out == 0
        assert route.path == []
        assert route.is_empty
        assert route.protocol == strategy_class.protocol

    @pytest.mark.asyncio
    @pytest.mark.parametrize("strategy_class", STRATEGIES)
    @pytest.mark.parametrize("position", [0, 5, -1])
    async def test_single_success_wins(self, base_chain, strategy_class, position):
        """Exactly one successful call yields its amount and path."""
        strategy = strategy_class(base_chain)
        contexts = strategy.build_contexts(BASE_WETH, ONE_ETH, BASE_USDC)
        winner = contexts[position]
        executor = MockCallExecutor(
            responder_for({winner.request.call_data: result_for(strategy, winner, 12345)})
        )

        route = await strategy.get_best_route(executor, BASE_WETH, ONE_ETH, BASE_USDC)

        assert route.amount_out == 12345
        assert route.path == winner.path
        assert route.protocol == strategy_class.protocol

    @pytest.mark.asyncio
    @pytest.mark.parametrize("strategy_class", STRATEGIES)
    async def test_highest_output_wins(self, base_chain, strategy_class):
        strategy = strategy_class(base_chain)
        contexts = strategy.build_contexts(BASE_WETH, ONE_ETH, BASE_USDC)
        results = {
            context.request.call_data: result_for(strategy, context, 1000 + i)
            for i, context in enumerate(contexts)
        }
        executor = MockCallExecutor(responder_for(results))

        route = await strategy.get_best_route(executor, BASE_WETH, ONE_ETH, BASE_USDC)

        assert route.amount_out == 1000 + len(contexts) - 1
        assert route.path == contexts[-1].path

    @pytest.mark.asyncio
    async def test_undecodable_result_is_skipped(self, base_chain):
        strategy = UniswapV3RoutingStrategy(base_chain)
        contexts = strategy.build_contexts(BASE_WETH, ONE_ETH, BASE_USDC)
        executor = MockCallExecutor(
            responder_for(
                {
                    contexts[0].request.call_data: b"\x01",
                    contexts[1].request.call_data: v3_single_result(5),
                }
            )
        )

        route = await strategy.get_best_route(executor, BASE_WETH, ONE_ETH, BASE_USDC)

        assert route.amount_out == 5
        assert route.fees == [500]

    @pytest.mark.asyncio
    async def test_zero_output_is_no_route(self, base_chain):
        strategy = UniswapV2RoutingStrategy(base_chain)
        contexts = strategy.build_contexts(BASE_WETH, ONE_ETH, BASE_USDC)
        executor = MockCallExecutor(
            responder_for({contexts[0].request.call_data: v2_amounts_result([ONE_ETH, 0])})
        )

        route = await strategy.get_best_route(executor, BASE_WETH, ONE_ETH, BASE_USDC)

        assert route.is_empty

    @pytest.mark.asyncio
    async def test_batched_round_trips(self, base_chain, failing_executor):
        """67 V3 requests at the default batch size take 5 round trips."""
        await UniswapV3RoutingStrategy(base_chain).get_best_route(
            failing_executor, BASE_WETH, ONE_ETH, BASE_USDC
        )
        assert failing_executor.round_trips == 5
        assert len(failing_executor.requests) == 67

    @pytest.mark.asyncio
    async def test_native_output_routes_to_wrapped_native(self, base_chain):
        strategy = UniswapV2RoutingStrategy(base_chain)
        contexts = strategy.build_contexts(BASE_USDC, 10**6, NATIVE)
        executor = MockCallExecutor(
            responder_for({contexts[0].request.call_data: v2_amounts_result([10**6, 42])})
        )

        route = await strategy.get_best_route(executor, BASE_USDC, 10**6, NATIVE)

        assert route.path == [BASE_USDC, BASE_WETH]


class TestProtocolArtifacts:
    """The winning route carries what the protocol needs for execution."""

    @pytest.mark.asyncio
    async def test_v3_direct_winner_has_encoded_path(self, base_chain):
        strategy = UniswapV3RoutingStrategy(base_chain)
        contexts = strategy.build_contexts(BASE_WETH, ONE_ETH, BASE_USDC)
        executor = MockCallExecutor(
            responder_for({contexts[1].request.call_data: v3_single_result(7)})
        )

        route = await strategy.get_best_route(executor, BASE_WETH, ONE_ETH, BASE_USDC)

        assert route.fees == [500]
        assert route.encoded_path == "0x" + encode_path([BASE_WETH, BASE_USDC], [500]).hex()
        assert len(route.encoded_path) == 2 + 2 * 43

    @pytest.mark.asyncio
    async def test_v3_multihop_winner_has_encoded_path(self, base_chain):
        strategy = UniswapV3RoutingStrategy(base_chain)
        contexts = strategy.build_contexts(BASE_WETH, ONE_ETH, BASE_USDC)
        winner = next(c for c in contexts if c.hop_count == 2)
        executor = MockCallExecutor(
            responder_for({winner.request.call_data: v3_multi_result(9, 2)})
        )

        route = await strategy.get_best_route(executor, BASE_WETH, ONE_ETH, BASE_USDC)

        assert route.path == winner.path
        assert route.fees == winner.fees
        assert route.encoded_path == "0x" + encode_path(winner.path, winner.fees).hex()

    @pytest.mark.asyncio
    async def test_v4_direct_winner_has_pool_key(self, base_chain):
        strategy = UniswapV4RoutingStrategy(base_chain)
        contexts = strategy.build_contexts(BASE_WETH, ONE_ETH, BASE_USDC)
        executor = MockCallExecutor(responder_for({contexts[2].request.call_data: v4_result(11)}))

        route = await strategy.get_best_route(executor, BASE_WETH, ONE_ETH, BASE_USDC)

        expected_key = make_pool_key(BASE_WETH, BASE_USDC, 3000)
        assert route.pool_key == expected_key
        assert route.pool_id == compute_pool_id(expected_key)
        assert route.path_keys is None

    @pytest.mark.asyncio
    async def test_v4_multihop_winner_has_path_keys(self, base_chain):
        strategy = UniswapV4RoutingStrategy(base_chain)
        contexts = strategy.build_contexts(BASE_WETH, ONE_ETH, BASE_USDC)
        winner = next(c for c in contexts if c.hop_count == 3)
        executor = MockCallExecutor(responder_for({winner.request.call_data: v4_result(13)}))

        route = await strategy.get_best_route(executor, BASE_WETH, ONE_ETH, BASE_USDC)

        assert route.pool_key is None
        assert [key.intermediate_currency for key in route.path_keys] == winner.path[1:]
        assert [key.fee for key in route.path_keys] == winner.fees

    @pytest.mark.asyncio
    async def test_aerodrome_winner_has_routes(self, base_chain):
        strategy = AerodromeRoutingStrategy(base_chain)
        contexts = strategy.build_contexts(BASE_WETH, ONE_ETH, BASE_USDC)
        winner = next(c for c in contexts if c.hop_count == 2 and c.stable_flags == [True, False])
        executor = MockCallExecutor(
            responder_for({winner.request.call_data: v2_amounts_result([ONE_ETH, 3, 17])})
        )

        route = await strategy.get_best_route(executor, BASE_WETH, ONE_ETH, BASE_USDC)

        assert route.amount_out == 17
        assert [hop.stable for hop in route.aero_routes] == [True, False]
        assert [(hop.from_token, hop.to_token) for hop in route.aero_routes] == [
            (winner.path[0], winner.path[1]),
            (winner.path[1], winner.path[2]),
        ]
        assert route.fees == []


class TestSelection:
    """Tests for the shared tie-break and lockstep selection."""

    def test_is_better(self):
        assert is_better(10, 3, 0, 0)
        assert is_better(11, 3, 10, 1)
        assert not is_better(10, 3, 10, 1)
        assert is_better(10, 1, 10, 3)
        assert not is_better(0, 1, 0, 0)

    def test_equal_output_prefers_fewer_hops(self):
        contexts = [
            make_context(0, [BASE_WETH, BASE_USDT, BASE_USDC]),
            make_context(1, [BASE_WETH, BASE_USDC]),
        ]
        results = [CallResult(True, (100).to_bytes(32, "big"))] * 2

        route = select_best_route(
            DexProtocol.CONSTANT_PRODUCT, contexts, results, amount_decoder, simple_route
        )

        assert route.path == [BASE_WETH, BASE_USDC]

    def test_equal_output_equal_hops_keeps_first(self):
        contexts = [
            make_context(0, [BASE_WETH, BASE_USDT, BASE_USDC]),
            make_context(1, [BASE_WETH, "0x" + "44" * 20, BASE_USDC]),
        ]
        results = [CallResult(True, (100).to_bytes(32, "big"))] * 2

        route = select_best_route(
            DexProtocol.CONSTANT_PRODUCT, contexts, results, amount_decoder, simple_route
        )

        assert route.path == contexts[0].path

    def test_failed_results_skipped(self):
        contexts = [make_context(0, [BASE_WETH, BASE_USDC]), make_context(1, [BASE_USDT, BASE_USDC])]
        results = [CallResult(False, (500).to_bytes(32, "big")), CallResult(True, b"\x05")]

        route = select_best_route(
            DexProtocol.CONSTANT_PRODUCT, contexts, results, amount_decoder, simple_route
        )

        assert route.amount_out == 5

    def test_length_mismatch(self):
        with pytest.raises(RoutingError):
            select_best_route(
                DexProtocol.CONSTANT_PRODUCT,
                [make_context(0, [BASE_WETH, BASE_USDC])],
                [],
                amount_decoder,
                simple_route,
            )
