from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field

from teambalance.assignment.deterministic import MAX_SEED


class AssignmentRequest(BaseModel):
    teams: int = Field(..., ge=2)
    seed: int | None = Field(default=None, ge=0, le=MAX_SEED)
    optimize: bool = True
    robust: bool = False
    weights: str | None = None
    max_iterations: int | None = Field(default=None, ge=0, le=10_000)


class AssignedPlayerResponse(BaseModel):
    player_id: int
    composite_score: float
    primary_score: float | None = None
    secondary_score: float | None = None
    old_team_id: int
    old_team_name: str


class TeamResponse(BaseModel):
    team_id: int
    size: int
    total_score: float
    average_score: float
    players: List[AssignedPlayerResponse]


class FairnessResponse(BaseModel):
    score_standard_deviation: float
    score_variance: float
    score_min: float
    score_max: float
    min_size: int
    max_size: int
    size_difference: int
    balance_coefficient: float
    grade: Literal["excellent", "good", "fair", "poor"]
    justification: str
    team_sizes: List[int]
    team_averages: List[float]


class OptimizationResponse(BaseModel):
    iterations: int
    improvement: float
    initial_balance: float
    final_balance: float


class AssignmentResponse(BaseModel):
    total_players: int
    target_teams: int
    seed: int
    caller_seed: int | None = None
    teams: List[TeamResponse]
    fairness: FairnessResponse
    optimization: OptimizationResponse | None = None
