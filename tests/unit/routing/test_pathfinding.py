"""Tests for candidate path generation."""

import pytest

from dexrouter.models.types import ZERO_ADDRESS, normalize_address
from dexrouter.routing.pathfinding import (
    direct_path,
    double_intermediary_paths,
    generate_candidate_paths,
    generate_multihop_paths,
    single_intermediary_paths,
)
from tests.helpers import DAI, OTHER_TOKEN, USDC, USDT, WBTC, WETH

INTERMEDIARIES = [USDT, USDC, DAI, WBTC, WETH]
PAIRS = [
    (USDC, WETH),
    (USDT, WETH),
    (WETH, USDC),
    (USDC, USDT),
    (USDT, DAI),
    (WETH, WBTC),
    (WBTC, WETH),
]


def assert_well_formed(paths, token_in, token_out):
    for candidate in paths:
        normalized = [normalize_address(token) for token in candidate.path]
        assert len(set(normalized)) == len(normalized), f"repeated token in {candidate.path}"
        assert normalized[0] == normalize_address(token_in)
        assert normalized[-1] == normalize_address(token_out)
        assert 2 <= len(candidate.path) <= 4


class TestDirectPath:
    def test_direct(self):
        candidate = direct_path(WETH, USDC)
        assert candidate.path == (WETH, USDC)
        assert candidate.hop_count == 1
        assert not candidate.is_multihop

    def test_custom_label(self):
        candidate = direct_path(WETH, USDC, label=lambda token: {WETH: "WETH", USDC: "USDC"}[token])
        assert candidate.description == "WETH -> USDC"


class TestSingleIntermediaryPaths:
    """Tests for one-intermediary paths."""

    def test_skips_endpoints(self):
        paths = single_intermediary_paths(WETH, USDC, INTERMEDIARIES)
        assert [candidate.path[1] for candidate in paths] == [USDT, DAI, WBTC]

    def test_endpoint_match_is_case_insensitive(self):
        paths = single_intermediary_paths(WETH.upper().replace("0X", "0x"), USDC, INTERMEDIARIES)
        assert WETH not in [candidate.path[1] for candidate in paths]

    def test_skips_zero_address(self):
        paths = single_intermediary_paths(WETH, USDC, [ZERO_ADDRESS, DAI])
        assert [candidate.path[1] for candidate in paths] == [DAI]

    def test_skips_duplicate_registry_entries(self):
        paths = single_intermediary_paths(WETH, USDC, [DAI, DAI.upper().replace("0X", "0x")])
        assert len(paths) == 1


class TestDoubleIntermediaryPaths:
    """Tests for two-intermediary paths."""

    def test_filters_pairs_touching_endpoints(self):
        paths = double_intermediary_paths(WETH, USDC, PAIRS)
        assert [candidate.path[1:3] for candidate in paths] == [(USDT, DAI)]

    def test_other_endpoints(self):
        paths = double_intermediary_paths(DAI, OTHER_TOKEN, PAIRS)
        assert [candidate.path[1:3] for candidate in paths] == [
            (USDC, WETH),
            (USDT, WETH),
            (WETH, USDC),
            (USDC, USDT),
            (WETH, WBTC),
            (WBTC, WETH),
        ]

    def test_skips_zero_and_self_pairs(self):
        paths = double_intermediary_paths(
            DAI, OTHER_TOKEN, [(ZERO_ADDRESS, WETH), (WETH, ZERO_ADDRESS), (USDC, USDC)]
        )
        assert paths == []


class TestGenerateMultihopPaths:
    """Tests for the combined generator."""

    def test_single_before_double(self):
        paths = generate_multihop_paths(WETH, USDC, INTERMEDIARIES, PAIRS)
        assert [len(candidate.path) for candidate in paths] == [3, 3, 3, 4]

    def test_same_token_yields_nothing(self):
        assert generate_multihop_paths(WETH, WETH, INTERMEDIARIES, PAIRS) == []

    def test_same_token_is_case_insensitive(self):
        upper = WETH.upper().replace("0X", "0x")
        assert generate_multihop_paths(WETH, upper, INTERMEDIARIES, PAIRS) == []
        assert generate_candidate_paths(WETH, upper, INTERMEDIARIES, PAIRS) == []

    def test_deterministic(self):
        first = generate_candidate_paths(WETH, USDC, INTERMEDIARIES, PAIRS)
        second = generate_candidate_paths(WETH, USDC, INTERMEDIARIES, PAIRS)
        assert first == second

    def test_direct_first(self):
        paths = generate_candidate_paths(WETH, USDC, INTERMEDIARIES, PAIRS)
        assert paths[0].path == (WETH, USDC)

    @pytest.mark.parametrize(
        "token_in,token_out",
        [(WETH, USDC), (USDC, WETH), (DAI, OTHER_TOKEN), (WBTC, USDT), (OTHER_TOKEN, WETH)],
    )
    def test_no_repeats_and_endpoints_fixed(self, token_in, token_out):
        paths = generate_candidate_paths(token_in, token_out, INTERMEDIARIES, PAIRS)
        assert paths
        assert_well_formed(paths, token_in, token_out)

    def test_chain_registries(self, base_chain):
        paths = generate_candidate_paths(
            base_chain.tokens.weth,
            base_chain.tokens.usdc,
            base_chain.intermediary_tokens,
            base_chain.intermediary_pairs,
        )
        assert_well_formed(paths, base_chain.tokens.weth, base_chain.tokens.usdc)
        assert all(
            ZERO_ADDRESS not in [normalize_address(token) for token in candidate.path]
            for candidate in paths
        )
