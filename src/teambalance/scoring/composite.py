"""Weighted composite scores built from normalized attributes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Sequence, Union

from teambalance.config import DEFAULT_EXTENDED_WEIGHTS, DEFAULT_WEIGHTS, ExtendedWeights, ScoringWeights, Weights
from teambalance.config.weights import get_weights_by_key
from teambalance.errors import EmptyPopulationError
from teambalance.models import BASE_ATTRIBUTES, PlayerRecord, ScoredPlayer

from .normalize import attribute_value, normalize_attributes


@dataclass(frozen=True)
class ScoreBreakdown:
    player_id: int
    raw_metrics: Dict[str, float]
    weighted_contributions: Dict[str, float]
    total_score: float


def composite_score(normalized: Mapping[str, float], weights: Mapping[str, float]) -> float:
    """Return ``sum(weight * normalized)`` over the weighted attributes.

    Weights are used as given; no re-normalization happens when they do not
    sum to one.
    """

    return sum(weight * normalized[attribute] for attribute, weight in weights.items())


def weighted_contributions(normalized: Mapping[str, float], weights: Mapping[str, float]) -> Dict[str, float]:
    return {attribute: weight * normalized[attribute] for attribute, weight in weights.items()}


def resolve_weights(players: Sequence[PlayerRecord], weights: Union[Weights, str, None]) -> Weights:
    """Pick the weights a batch is scored with; extended only when every player carries features."""

    if weights is None:
        if all(player.has_features for player in players):
            return DEFAULT_EXTENDED_WEIGHTS
        return DEFAULT_WEIGHTS
    return get_weights_by_key(weights)


def _secondary_score(normalized: Mapping[str, float], weights: ExtendedWeights) -> float:
    return sum(group.weight * composite_score(normalized, group.sub_weights) for group in weights.groups)


def score_players(
    players: Sequence[PlayerRecord],
    weights: Union[Weights, str, None] = None,
    *,
    robust: bool = False,
) -> List[ScoredPlayer]:
    """Score a batch of players.

    Normalization is relative to ``players``, so scores are only comparable
    within one batch. Extended weights keep the primary and secondary
    sub-scores next to their sum.
    """

    if not players:
        raise EmptyPopulationError("No players provided for scoring")

    resolved = resolve_weights(players, weights)

    if isinstance(resolved, ExtendedWeights):
        attributes = BASE_ATTRIBUTES + resolved.features
        normalized_rows = normalize_attributes(players, attributes, robust=robust)
        primary_weights = resolved.primary.as_mapping()
        scored: List[ScoredPlayer] = []
        for player, normalized in zip(players, normalized_rows):
            primary = composite_score(normalized, primary_weights)
            secondary = _secondary_score(normalized, resolved)
            scored.append(
                ScoredPlayer(
                    player=player,
                    composite_score=primary + secondary,
                    primary_score=primary,
                    secondary_score=secondary,
                )
            )
        return scored

    base_weights = resolved.as_mapping()
    normalized_rows = normalize_attributes(players, BASE_ATTRIBUTES, robust=robust)
    return [
        ScoredPlayer(player=player, composite_score=composite_score(normalized, base_weights))
        for player, normalized in zip(players, normalized_rows)
    ]


def rank_players(scored: Sequence[ScoredPlayer]) -> List[ScoredPlayer]:
    """Highest score first; exact ties fall back to ascending player id."""

    return sorted(scored, key=lambda item: (-item.composite_score, item.player_id))


def score_breakdown(
    players: Sequence[PlayerRecord],
    player_id: int,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
    *,
    robust: bool = False,
) -> ScoreBreakdown:
    """Explain one player's base score within the batch it was scored in."""

    index = next((i for i, player in enumerate(players) if player.player_id == player_id), None)
    if index is None:
        raise KeyError(f"player_id {player_id} not in batch")

    normalized = normalize_attributes(players, BASE_ATTRIBUTES, robust=robust)[index]
    mapping = weights.as_mapping()
    player = players[index]
    return ScoreBreakdown(
        player_id=player_id,
        raw_metrics={attribute: attribute_value(player, attribute) for attribute in BASE_ATTRIBUTES},
        weighted_contributions=weighted_contributions(normalized, mapping),
        total_score=composite_score(normalized, mapping),
    )
