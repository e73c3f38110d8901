"""
Weigh-in aggregation

- total weight: sum of recorded catches, missing entries count as zero
- confirmation gating: a weigh-in can only be confirmed once it has entries
"""
from dataclasses import replace
from typing import Iterable, List, Optional, Sequence

from loguru import logger

from .models import Participant


def total_weight(weights: Optional[Iterable[Optional[int]]]) -> int:
    """Sum of present weights in grams"""
    total = 0
    for weight in weights or []:
        if weight is None:
            continue
        if weight < 0:
            raise ValueError(f"Weight cannot be negative: {weight}")
        total += weight
    return total


def has_weights(participant: Participant) -> bool:
    return len(participant.weights or []) > 0


def can_confirm(participant: Participant) -> bool:
    return has_weights(participant)


def confirm_weighing(participant: Participant) -> Participant:
    """Mark the weigh-in as confirmed (returns a new Participant)"""
    if not can_confirm(participant):
        raise ValueError(f"No weights recorded for {participant.name!r}, cannot confirm")
    logger.debug(f"Weighing confirmed: {participant.name} ({total_weight(participant.weights)} g)")
    return replace(participant, weighing_confirmed=True)


def unconfirm_weighing(participant: Participant) -> Participant:
    return replace(participant, weighing_confirmed=False)


def unconfirmed_participants(participants: Sequence[Participant]) -> List[Participant]:
    """Participants with weights that still block a save, in input order"""
    return [p for p in participants if has_weights(p) and not p.weighing_confirmed]


def is_ready_to_save(participants: Sequence[Participant]) -> bool:
    return not unconfirmed_participants(participants)
