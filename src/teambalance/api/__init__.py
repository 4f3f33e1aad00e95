"""REST API for the teambalance service."""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import Response
from pydantic import ValidationError

from teambalance.api.schemas import (
    AssignedPlayerResponse,
    AssignmentRequest,
    AssignmentResponse,
    FairnessResponse,
    MetricRangeResponse,
    OptimizationResponse,
    PlayersPreviewResponse,
    TeamResponse,
)
from teambalance.assignment import assign_teams
from teambalance.errors import InvalidPlayerDataError, TeamBalanceError
from teambalance.ingest import (
    MetricRange,
    clean_players,
    find_duplicate_ids,
    load_players_csv,
    summarize_players,
    validate_players,
    validate_team_constraints,
)
from teambalance.models import AssignmentResult, PlayerRecord, Team
from teambalance.report import format_csv
from teambalance.scoring import score_players


logger = logging.getLogger(__name__)


async def _write_temp(upload: UploadFile | None) -> Path | None:
    if upload is None:
        return None
    contents = await upload.read()
    if not contents:
        return None
    tmp = tempfile.NamedTemporaryFile(delete=False, suffix=".csv")
    try:
        tmp.write(contents)
        tmp.flush()
    finally:
        tmp.close()
    return Path(tmp.name)


def _error_detail(exc: Exception) -> str:
    if isinstance(exc, InvalidPlayerDataError):
        return "; ".join([str(exc), *(str(row) for row in exc.rows)])
    return str(exc)


async def _load_upload(players: UploadFile | None) -> list[PlayerRecord]:
    path = await _write_temp(players)
    if path is None:
        raise HTTPException(status_code=400, detail="players file is empty")
    try:
        return clean_players(load_players_csv(path))
    except InvalidPlayerDataError as exc:
        raise HTTPException(status_code=400, detail=_error_detail(exc)) from exc
    finally:
        path.unlink(missing_ok=True)


def _parse_request(raw: str) -> AssignmentRequest:
    try:
        return AssignmentRequest.model_validate(json.loads(raw or "{}"))
    except json.JSONDecodeError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid assignment_request JSON: {exc}") from exc
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid assignment_request: {exc}") from exc


def _run(players: list[PlayerRecord], request: AssignmentRequest) -> AssignmentResult:
    try:
        validate_players(players)
        validate_team_constraints(len(players), request.teams)
        scored = score_players(players, request.weights, robust=request.robust)
        return assign_teams(
            scored,
            request.teams,
            seed=request.seed,
            optimize=request.optimize,
            max_iterations=request.max_iterations,
        )
    except (TeamBalanceError, KeyError) as exc:
        raise HTTPException(status_code=400, detail=_error_detail(exc)) from exc


def _metric_range(metric: MetricRange) -> MetricRangeResponse:
    return MetricRangeResponse(min=metric.min, max=metric.max, avg=metric.avg)


def _team_to_response(team: Team) -> TeamResponse:
    return TeamResponse(
        team_id=team.team_id,
        size=team.size,
        total_score=team.total_score,
        average_score=team.average_score,
        players=[
            AssignedPlayerResponse(
                player_id=scored.player_id,
                composite_score=scored.composite_score,
                primary_score=scored.primary_score,
                secondary_score=scored.secondary_score,
                old_team_id=scored.player.current_team_id,
                old_team_name=scored.player.current_team_name,
            )
            for scored in team.players
        ],
    )


def _result_to_response(result: AssignmentResult) -> AssignmentResponse:
    fairness = result.fairness
    optimization = None
    if result.optimization is not None:
        optimization = OptimizationResponse(
            iterations=result.optimization.iterations,
            improvement=result.optimization.improvement,
            initial_balance=result.optimization.initial_balance,
            final_balance=result.optimization.final_balance,
        )
    return AssignmentResponse(
        total_players=result.total_players,
        target_teams=result.target_teams,
        seed=result.seed,
        caller_seed=result.caller_seed,
        teams=[_team_to_response(team) for team in result.teams],
        fairness=FairnessResponse(
            score_standard_deviation=fairness.score_standard_deviation,
            score_variance=fairness.score_variance,
            score_min=fairness.score_range.min,
            score_max=fairness.score_range.max,
            min_size=fairness.size_balance.min_size,
            max_size=fairness.size_balance.max_size,
            size_difference=fairness.size_balance.size_difference,
            balance_coefficient=fairness.balance_coefficient,
            grade=fairness.grade,
            justification=fairness.justification,
            team_sizes=list(fairness.team_sizes),
            team_averages=list(fairness.team_averages),
        ),
        optimization=optimization,
    )


def create_app() -> FastAPI:
    app = FastAPI(title="teambalance")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/preview", response_model=PlayersPreviewResponse)
    async def preview(players: UploadFile = File(...)) -> PlayersPreviewResponse:
        records = await _load_upload(players)
        try:
            summary = summarize_players(records)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        return PlayersPreviewResponse(
            total_players=summary.total_players,
            engagement_range=_metric_range(summary.engagement_range),
            activity_range=_metric_range(summary.activity_range),
            points_range=_metric_range(summary.points_range),
            current_teams=list(summary.current_teams),
            players_with_features=summary.players_with_features,
            duplicate_player_ids=find_duplicate_ids(records),
        )

    @app.post("/assignments", response_model=AssignmentResponse)
    async def create_assignment(
        players: UploadFile = File(...),
        assignment_request: str = Form("{}"),
    ) -> AssignmentResponse:
        request = _parse_request(assignment_request)
        records = await _load_upload(players)
        result = _run(records, request)
        logger.info(
            "Assigned %d players to %d teams (grade=%s)",
            result.total_players,
            result.target_teams,
            result.fairness.grade,
        )
        return _result_to_response(result)

    @app.post("/assignments/export.csv")
    async def export_assignment_csv(
        players: UploadFile = File(...),
        assignment_request: str = Form("{}"),
    ):
        request = _parse_request(assignment_request)
        records = await _load_upload(players)
        result = _run(records, request)
        return Response(
            content=format_csv(result),
            media_type="text/csv",
            headers={"Content-Disposition": f"attachment; filename=assignments-{result.seed}.csv"},
        )

    return app


__all__ = ["create_app"]
