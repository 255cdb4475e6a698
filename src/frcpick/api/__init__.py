"""REST API for the pick-list engine."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from typing import Any

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import Response
from pydantic import ValidationError

from frcpick.api.schemas import (
    ComponentRatingsResponse,
    MarkPickedRequest,
    PickListMetadataResponse,
    PickListRequest,
    PickListResponse,
    PickListTeamResponse,
    RatingsRequest,
    RatingsResponse,
    StrategyResponse,
    TeamRatingResponse,
    WeightsPayload,
)
from frcpick.config import PickListStrategy, WeightConfiguration, iter_strategies
from frcpick.export import export_filename, export_pick_list_to_csv
from frcpick.ingest import parse_team_metrics_text
from frcpick.ranking import (
    PickListMetadata,
    PickListResult,
    PickListTeam,
    aggregate_scouting_notes,
    attach_notes,
    generate_pick_list,
    mark_team_picked,
)
from frcpick.ratings import (
    RatingCalculationError,
    calculate_all_component_oprs,
    calculate_ccwm,
    calculate_event_ratings,
)


logger = logging.getLogger(__name__)


def _strategy_to_response(strategy: PickListStrategy) -> StrategyResponse:
    return StrategyResponse(
        id=strategy.id,
        name=strategy.name,
        description=strategy.description,
        weights=WeightsPayload(**strategy.weights.to_dict()),
    )


def _result_to_response(result: PickListResult) -> PickListResponse:
    return PickListResponse(
        event_key=result.event_key,
        event_name=result.event_name,
        strategy=_strategy_to_response(result.strategy),
        generated_at=result.generated_at,
        total_teams=result.total_teams,
        min_matches_filter=result.min_matches_filter,
        metadata=PickListMetadataResponse(**asdict(result.metadata)),
        teams=[
            PickListTeamResponse(
                **{
                    **asdict(team),
                    "strengths": list(team.strengths),
                    "weaknesses": list(team.weaknesses),
                }
            )
            for team in result.teams
        ],
    )


def _response_to_result(payload: PickListResponse) -> PickListResult:
    strategy = PickListStrategy(
        id=payload.strategy.id,
        name=payload.strategy.name,
        description=payload.strategy.description,
        weights=WeightConfiguration(**payload.strategy.weights.model_dump()),
    )
    teams = [
        PickListTeam(
            **{
                **team.model_dump(),
                "strengths": tuple(team.strengths),
                "weaknesses": tuple(team.weaknesses),
            }
        )
        for team in payload.teams
    ]
    return PickListResult(
        event_key=payload.event_key,
        event_name=payload.event_name,
        teams=teams,
        strategy=strategy,
        generated_at=payload.generated_at,
        total_teams=payload.total_teams,
        min_matches_filter=payload.min_matches_filter,
        metadata=PickListMetadata(**payload.metadata.model_dump()),
    )


def _generate(request: PickListRequest) -> PickListResult:
    teams = list(request.teams)
    if request.scouting_notes:
        notes = aggregate_scouting_notes(entry.model_dump() for entry in request.scouting_notes)
        teams = attach_notes(teams, notes)
    weights = (
        WeightConfiguration(**request.weights.model_dump()) if request.weights is not None else None
    )
    try:
        return generate_pick_list(
            request.event_key,
            teams,
            strategy_id=None if weights is not None else (request.strategy or "BALANCED"),
            weights=weights,
            min_matches=request.min_matches,
            event_name=request.event_name,
        )
    except KeyError as exc:
        raise HTTPException(status_code=400, detail=str(exc.args[0])) from exc


def _parse_json_form(raw: str | None, name: str) -> dict[str, Any]:
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid {name} JSON: {exc}") from exc


def create_app() -> FastAPI:
    app = FastAPI(title="frcpick pick-list engine")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/strategies", response_model=list[StrategyResponse])
    async def strategies() -> list[StrategyResponse]:
        return [_strategy_to_response(strategy) for strategy in iter_strategies()]

    @app.post("/picklist", response_model=PickListResponse)
    async def picklist(request: PickListRequest) -> PickListResponse:
        return _result_to_response(_generate(request))

    @app.post("/picklist/export")
    async def picklist_export(request: PickListRequest) -> Response:
        result = _generate(request)
        return Response(
            content=export_pick_list_to_csv(result),
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{export_filename(result)}"'},
        )

    @app.post("/picklist/upload", response_model=PickListResponse)
    async def picklist_upload(
        teams: UploadFile = File(...),
        event_key: str = Form(...),
        strategy: str = Form("BALANCED"),
        weights: str | None = Form(None),
        min_matches: int | None = Form(None),
        mapping: str | None = Form(None),
    ) -> PickListResponse:
        contents = await teams.read()
        if not contents:
            raise HTTPException(status_code=400, detail="teams file is empty")
        try:
            text = contents.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise HTTPException(status_code=400, detail="teams file must be UTF-8 CSV") from exc
        records, report = parse_team_metrics_text(
            text,
            mapping=_parse_json_form(mapping, "mapping") or None,
        )
        if report.skipped_rows:
            logger.info("Upload for %s skipped %d rows", event_key, len(report.skipped_rows))
        parsed_weights = _parse_json_form(weights, "weights")
        try:
            request = PickListRequest(
                event_key=event_key,
                teams=records,
                strategy=strategy,
                weights=WeightsPayload(**parsed_weights) if parsed_weights else None,
                min_matches=min_matches,
            )
        except ValidationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        response = _result_to_response(_generate(request))
        response.metadata.warnings.extend(report.skipped_rows)
        return response

    @app.post("/picklist/mark-picked", response_model=PickListResponse)
    async def picklist_mark_picked(request: MarkPickedRequest) -> PickListResponse:
        result = _response_to_result(request.pick_list)
        if not any(team.team_number == request.team_number for team in result.teams):
            raise HTTPException(
                status_code=404,
                detail=f"Team {request.team_number} is not on this pick list",
            )
        return _result_to_response(mark_team_picked(result, request.team_number, request.picked))

    @app.post("/ratings", response_model=RatingsResponse)
    async def ratings(request: RatingsRequest) -> RatingsResponse:
        try:
            event = calculate_event_ratings(request.event_key, request.matches)
            combined = calculate_ccwm(event.opr, event.dpr)
        except RatingCalculationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return RatingsResponse(
            event_key=request.event_key,
            total_matches=event.opr.total_matches,
            teams=[TeamRatingResponse(**asdict(entry)) for entry in combined],
            warnings=event.warnings,
        )

    @app.post("/ratings/components", response_model=ComponentRatingsResponse)
    async def ratings_components(request: RatingsRequest) -> ComponentRatingsResponse:
        completed = [match for match in request.matches if match.is_complete]
        components = calculate_all_component_oprs(request.event_key, completed)
        return ComponentRatingsResponse(
            event_key=request.event_key,
            components=components.values,
            failures=components.failures,
        )

    return app


__all__ = ["create_app"]
