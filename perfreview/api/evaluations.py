"""Self and leader evaluation endpoints."""

from fastapi import APIRouter

from perfreview.api.deps import DraftsDep, StoreDep
from perfreview.engine.potential import potential_progress, potential_scores
from perfreview.engine.scoring import category_averages, format_score, scoring_progress
from perfreview.errors import NotFoundError
from perfreview.schemas.evaluation import SaveEvaluationRequest
from perfreview.services import evaluations

router = APIRouter()


def _summary(evaluation) -> dict:
    """Evaluation plus the derived figures a rater sees while scoring."""
    scores = evaluation.scores_by_criterion()
    body = evaluation.model_dump()
    body["category_averages"] = category_averages(evaluation.ratings)
    body["progress"] = scoring_progress(scores)
    if evaluation.final_score is not None:
        body["final_score_display"] = format_score(evaluation.final_score)
    if evaluation.evaluation_type == "leader" and evaluation.potential_items:
        pot = potential_scores(evaluation.potential_items)
        body["potential"] = {
            "results": pot.results,
            "agility": pot.agility,
            "relationships": pot.relationships,
            "final": pot.final,
            "progress": potential_progress(evaluation.potential_items),
        }
    return body


@router.get("/cycles/{cycle_id}/evaluations/{employee_id}/{evaluation_type}")
async def get_evaluation(cycle_id: str, employee_id: str, evaluation_type: str, store: StoreDep):
    evaluation = await store.get_evaluation(employee_id, cycle_id, evaluation_type)
    if not evaluation:
        raise NotFoundError(f"No {evaluation_type} evaluation for employee {employee_id}")
    return _summary(evaluation)


@router.put("/cycles/{cycle_id}/evaluations/{employee_id}/{evaluation_type}")
async def save_evaluation(
    cycle_id: str,
    employee_id: str,
    evaluation_type: str,
    body: SaveEvaluationRequest,
    store: StoreDep,
):
    """Save draft ratings (and potential items for leader evaluations)."""
    evaluation = await evaluations.save_evaluation(
        store,
        cycle_id,
        employee_id,
        evaluation_type,
        body.evaluator_id,
        body.scores,
        body.potential_items,
    )
    return _summary(evaluation)


@router.post("/cycles/{cycle_id}/evaluations/{employee_id}/{evaluation_type}/submit")
async def submit_evaluation(
    cycle_id: str,
    employee_id: str,
    evaluation_type: str,
    store: StoreDep,
    drafts: DraftsDep,
):
    """Complete the evaluation. It cannot be edited afterwards."""
    evaluation = await evaluations.submit_evaluation(
        store, cycle_id, employee_id, evaluation_type, drafts=drafts
    )
    return _summary(evaluation)
