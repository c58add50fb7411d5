"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from typing import Any, Dict, Optional

from flask import Blueprint, Response, current_app, jsonify, request
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from backend.core.calc import build_chart_data, calculate
from backend.core.comparison import compare_scenarios
from backend.core.export import monthly_breakdown_csv, yearly_breakdown_csv
from backend.core.insights import summarize_result
from backend.core.ping import get_ping_message
from backend.core.presets import STARTER_PRESETS, PresetNotFoundError, apply_preset
from backend.core.scenarios import ScenarioNotFoundError, ScenarioStore
from backend.core.validation import DEFAULT_FORM, FormValidationError, parse_and_validate
from backend.schemas.calc import MAX_AMOUNT, CalcInputs
from backend.schemas.form import FormState
from backend.schemas.ping import PingResponse
from backend.schemas.scenario import ScenarioCreate, ScenarioUpdate

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


class SummaryRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    inputs: CalcInputs
    targetToday: Optional[float] = Field(default=None, ge=0, le=MAX_AMOUNT)


class CompareRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    a: str
    b: str


def _store() -> ScenarioStore:
    return current_app.extensions["scenario_store"]


def _payload() -> Dict[str, Any]:
    return request.get_json(force=True, silent=False)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return (
        jsonify({"detail": exc.errors(include_url=False, include_context=False)}),
        HTTPStatus.UNPROCESSABLE_ENTITY,
    )


@api_bp.errorhandler(FormValidationError)
def _handle_form_error(exc: FormValidationError):
    return jsonify({"errors": exc.errors}), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(ScenarioNotFoundError)
@api_bp.errorhandler(PresetNotFoundError)
def _handle_not_found(exc: LookupError):
    return jsonify({"detail": str(exc)}), HTTPStatus.NOT_FOUND


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse(message=get_ping_message())
    return jsonify(response.model_dump())


@api_bp.post("/calc")
def calc() -> Any:
    """Run the projection for a fully validated set of inputs."""
    inputs = CalcInputs.model_validate(_payload())
    result = calculate(inputs)
    return jsonify(result.model_dump())


@api_bp.post("/calc/chart")
def calc_chart() -> Any:
    inputs = CalcInputs.model_validate(_payload())
    points = build_chart_data(inputs, calculate(inputs))
    return jsonify([point.model_dump() for point in points])


@api_bp.post("/calc/summary")
def calc_summary() -> Any:
    body = SummaryRequest.model_validate(_payload())
    insights = summarize_result(body.inputs, calculate(body.inputs), body.targetToday)
    return jsonify(insights.model_dump())


@api_bp.post("/calc/export")
def calc_export() -> Any:
    """Download the yearly (default) or monthly breakdown as CSV."""
    granularity = request.args.get("granularity", "yearly")
    if granularity not in ("yearly", "monthly"):
        return (
            jsonify({"detail": "granularity must be 'yearly' or 'monthly'"}),
            HTTPStatus.BAD_REQUEST,
        )

    inputs = CalcInputs.model_validate(_payload())
    result = calculate(inputs)
    csv_text = monthly_breakdown_csv(result) if granularity == "monthly" else yearly_breakdown_csv(result)
    return Response(
        csv_text,
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename=projection-{granularity}.csv"},
    )


@api_bp.post("/form/parse")
def form_parse() -> Any:
    """Validate raw form strings; 400 with per-field messages when invalid."""
    form = FormState.model_validate(_payload())
    parsed = parse_and_validate(form)
    if not parsed.is_valid:
        raise FormValidationError(parsed.errors)
    return jsonify(
        {
            "inputs": parsed.inputs.model_dump(mode="json"),
            "targetToday": parsed.target_today,
        }
    )


@api_bp.get("/form/defaults")
def form_defaults() -> Any:
    return jsonify(DEFAULT_FORM.model_dump(mode="json"))


@api_bp.get("/presets")
def presets() -> Any:
    return jsonify([preset.model_dump(mode="json") for preset in STARTER_PRESETS])


@api_bp.post("/presets/<preset_id>/apply")
def preset_apply(preset_id: str) -> Any:
    form = FormState.model_validate(_payload())
    return jsonify(apply_preset(form, preset_id).model_dump(mode="json"))


@api_bp.get("/scenarios")
def scenarios_list() -> Any:
    return jsonify([s.model_dump(mode="json") for s in _store().list_scenarios()])


@api_bp.post("/scenarios")
def scenarios_create() -> Any:
    body = ScenarioCreate.model_validate(_payload())
    scenario = _store().save_scenario(
        body.name,
        body.inputs,
        target_today=body.targetToday,
        preset_name=body.presetName,
    )
    return jsonify(scenario.model_dump(mode="json")), HTTPStatus.CREATED


@api_bp.get("/scenarios/<scenario_id>")
def scenarios_get(scenario_id: str) -> Any:
    return jsonify(_store().get_scenario(scenario_id).model_dump(mode="json"))


@api_bp.put("/scenarios/<scenario_id>")
def scenarios_update(scenario_id: str) -> Any:
    body = ScenarioUpdate.model_validate(_payload())
    # an explicit null clears the optional fields, an omitted key keeps them
    optional: Dict[str, Any] = {}
    if "targetToday" in body.model_fields_set:
        optional["target_today"] = body.targetToday
    if "presetName" in body.model_fields_set:
        optional["preset_name"] = body.presetName
    scenario = _store().update_scenario(
        scenario_id,
        name=body.name,
        inputs=body.inputs,
        **optional,
    )
    return jsonify(scenario.model_dump(mode="json"))


@api_bp.delete("/scenarios/<scenario_id>")
def scenarios_delete(scenario_id: str) -> Any:
    _store().delete_scenario(scenario_id)
    return "", HTTPStatus.NO_CONTENT


@api_bp.post("/scenarios/<scenario_id>/duplicate")
def scenarios_duplicate(scenario_id: str) -> Any:
    copy = _store().duplicate_scenario(scenario_id)
    return jsonify(copy.model_dump(mode="json")), HTTPStatus.CREATED


@api_bp.post("/compare")
def compare() -> Any:
    """Compare two saved scenarios by id."""
    body = CompareRequest.model_validate(_payload())
    store = _store()
    comparison = compare_scenarios(store.get_scenario(body.a), store.get_scenario(body.b))
    logger.info("compared scenarios a=%s b=%s", body.a, body.b)
    return jsonify(comparison.model_dump(mode="json"))
