"""Candidate path generation for route quoting.

Pure functions: the same tokens and registries always give the same paths
in the same order. Strategies rely on that order, since quote results are
matched back to their paths by position.

Paths come in three shapes:
- direct: [in, out]
- one intermediary: [in, m, out] for each registry token m
- two intermediaries: [in, m1, m2, out] for each curated pair (m1, m2)

No path ever repeats a token, and the zero address is never used as an
intermediary.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

from dexrouter.models.types import is_zero_address, normalize_address

from .types import CandidatePath

TokenLabel = Callable[[str], str]


def short_address(address: str) -> str:
    """Default diagnostic label: first 10 chars of the normalized address."""
    return normalize_address(address)[:10]


def _describe(path: Sequence[str], label: TokenLabel) -> str:
    return " -> ".join(label(token) for token in path)


def direct_path(
    token_in: str,
    token_out: str,
    label: TokenLabel = short_address,
) -> CandidatePath:
    """The single-hop path [token_in, token_out]."""
    path = (token_in, token_out)
    return CandidatePath(path=path, description=_describe(path, label))


def single_intermediary_paths(
    token_in: str,
    token_out: str,
    intermediaries: Iterable[str],
    label: TokenLabel = short_address,
) -> list[CandidatePath]:
    """Paths through exactly one registry token.

    Intermediaries equal to either endpoint (case-insensitive), zero
    addresses, and repeats within the registry are skipped.
    """
    excluded = {normalize_address(token_in), normalize_address(token_out)}
    paths = []
    for intermediary in intermediaries:
        if is_zero_address(intermediary):
            continue
        key = normalize_address(intermediary)
        if key in excluded:
            continue
        excluded.add(key)
        path = (token_in, intermediary, token_out)
        paths.append(CandidatePath(path=path, description=_describe(path, label)))
    return paths


def double_intermediary_paths(
    token_in: str,
    token_out: str,
    pairs: Iterable[tuple[str, str]],
    label: TokenLabel = short_address,
) -> list[CandidatePath]:
    """Paths through a curated ordered pair of intermediaries.

    A pair is skipped when either token is the zero address or equals an
    endpoint, when both tokens are the same, or when it repeats an earlier
    pair.
    """
    endpoints = {normalize_address(token_in), normalize_address(token_out)}
    seen: set[tuple[str, str]] = set()
    paths = []
    for first, second in pairs:
        if is_zero_address(first) or is_zero_address(second):
            continue
        first_key = normalize_address(first)
        second_key = normalize_address(second)
        if first_key in endpoints or second_key in endpoints:
            continue
        if first_key == second_key:
            continue
        if (first_key, second_key) in seen:
            continue
        seen.add((first_key, second_key))
        path = (token_in, first, second, token_out)
        paths.append(CandidatePath(path=path, description=_describe(path, label)))
    return paths


def generate_multihop_paths(
    token_in: str,
    token_out: str,
    intermediaries: Iterable[str],
    pairs: Iterable[tuple[str, str]],
    label: TokenLabel = short_address,
) -> list[CandidatePath]:
    """All one- then two-intermediary paths; empty for a same-token pair."""
    if normalize_address(token_in) == normalize_address(token_out):
        return []
    return single_intermediary_paths(
        token_in, token_out, intermediaries, label
    ) + double_intermediary_paths(token_in, token_out, pairs, label)


def generate_candidate_paths(
    token_in: str,
    token_out: str,
    intermediaries: Iterable[str],
    pairs: Iterable[tuple[str, str]],
    label: TokenLabel = short_address,
) -> list[CandidatePath]:
    """The direct path followed by every multi-hop path.

    Returns an empty list for a same-token pair.
    """
    if normalize_address(token_in) == normalize_address(token_out):
        return []
    return [direct_path(token_in, token_out, label)] + generate_multihop_paths(
        token_in, token_out, intermediaries, pairs, label
    )


__all__ = [
    "direct_path",
    "double_intermediary_paths",
    "generate_candidate_paths",
    "generate_multihop_paths",
    "short_address",
    "single_intermediary_paths",
]
