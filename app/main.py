import logging
from typing import Dict, List, Optional

from fastapi import FastAPI
from pydantic import BaseModel

from fairshift.models import (
    Member, Shift, AssignmentConfig, AssignmentResult, AssignmentSummary,
    MemberTrackingState, CurrentTracking, CompletedTask, StoreModel,
)
from fairshift.assignment import auto_assign_shifts, validate_manual_assignment
from fairshift.summary import summarize
from fairshift.fairness import build_distribution, member_points_history, assignment_suggestions
from fairshift.ledger import (
    calculate_historical_points, with_historical_points, apply_results, fold_session_points,
)
from app import storage

logger = logging.getLogger(__name__)

app = FastAPI(title="Stable Shift Auto-Assignment")


class AssignRequest(StoreModel):
    shifts: List[Shift]
    members: List[Member]
    config: AssignmentConfig = AssignmentConfig()


class AssignResponse(StoreModel):
    success: bool
    message: str
    results: List[AssignmentResult] = []
    summary: Optional[AssignmentSummary] = None
    tracking: Dict[str, MemberTrackingState] = {}


class ValidateRequest(StoreModel):
    member: Member
    shift: Shift
    current_tracking: Optional[CurrentTracking] = None


class DistributionRequest(StoreModel):
    records: List[CompletedTask]
    period: str = "month"
    stable_id: Optional[str] = None
    stable_name: Optional[str] = None


class HistoryRequest(StoreModel):
    records: List[CompletedTask]
    days: int = 90


class SuggestionsRequest(StoreModel):
    historical_points: Dict[str, float]
    names: Dict[str, str] = {}
    limit: int = 5


class StoreAssignRequest(BaseModel):
    config: AssignmentConfig = AssignmentConfig()
    use_memory_horizon: bool = True  # else score on the stored ledger
    write_back: bool = True


def run_assignment(shifts: List[Shift], members: List[Member], config: AssignmentConfig) -> AssignResponse:
    tracking: Dict[str, MemberTrackingState] = {}
    results = auto_assign_shifts(shifts, members, config, tracking=tracking)
    open_shifts = sum(1 for s in shifts if not s.is_assigned)
    return AssignResponse(
        success=True,
        message=f"Assigned {len(results)} of {open_shifts} open shifts",
        results=results,
        summary=summarize(results),
        tracking=tracking,
    )


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/assign", response_model=AssignResponse)
def assign(req: AssignRequest):
    return run_assignment(req.shifts, req.members, req.config)


@app.post("/validate")
def validate(req: ValidateRequest):
    message = validate_manual_assignment(req.member, req.shift, req.current_tracking)
    return {"valid": message is None, "message": message}


@app.post("/fairness/distribution")
def fairness_distribution(req: DistributionRequest):
    distribution = build_distribution(req.records, req.period, stable_id=req.stable_id,
                                      stable_name=req.stable_name)
    return {"distribution": distribution.model_dump(mode="json", by_alias=True)}


@app.post("/fairness/history/{user_id}")
def fairness_history(user_id: str, req: HistoryRequest):
    history = member_points_history(req.records, user_id, days=req.days)
    return {"memberHistory": history.model_dump(mode="json", by_alias=True)}


@app.post("/fairness/suggestions")
def fairness_suggestions(req: SuggestionsRequest):
    suggestions = assignment_suggestions(req.historical_points, req.names, limit=req.limit)
    return {
        "suggestions": [s.model_dump(by_alias=True) for s in suggestions],
        "totalMembers": len(req.historical_points),
    }


@app.post("/assign_from_store", response_model=AssignResponse)
def assign_from_store(req: StoreAssignRequest = StoreAssignRequest()):
    """Assign open shifts in storage, using points from the memory horizon as history."""
    try:
        members = storage.load_members()
        shifts = storage.load_shifts()
        scored = members
        if req.use_memory_horizon:
            history = calculate_historical_points(shifts, [m.user_id for m in members],
                                                  req.config.memory_horizon_days)
            scored = with_historical_points(members, history)
        response = run_assignment(shifts, scored, req.config)
        if req.write_back:
            storage.save_shifts(apply_results(shifts, response.results))
            storage.save_members(fold_session_points(members, response.tracking))
        return response
    except Exception as e:
        logger.exception("Assignment from store failed")
        return AssignResponse(success=False, message=f"Error during assignment: {e}")
