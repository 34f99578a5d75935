# classgroups/api/routers/groups.py
"""
Group endpoints: run a grouping engine over the stored roster, fetch the
last saved partition with its statistics, look up one student's group.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException

from classgroups.domain.errors import ValidationError
from classgroups.domain.models import GenerateGroupsReq, Mode
from classgroups.api.deps import get_grouping_service
from classgroups.services.grouping_service import GroupingService
from classgroups.services.student_service import StudentNotFound, to_payload

logger = logging.getLogger(__name__)

router = APIRouter()


def _generate(mode: Mode, req: GenerateGroupsReq, service: GroupingService):
    try:
        result = service.generate(mode, req.num_groups)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail={"message": str(e), "condition": e.condition})
    except Exception:
        logger.exception("generate %s groups failed", mode.value)
        raise
    return result.model_dump(mode="json", by_alias=True)


@router.post("/interests", summary="Generate interest-balanced groups")
def generate_interest_groups(req: GenerateGroupsReq, service: GroupingService = Depends(get_grouping_service)):
    return _generate(Mode.INTERESTS, req, service)


@router.post("/mbti", summary="Generate MBTI-balanced groups")
def generate_mbti_groups(req: GenerateGroupsReq, service: GroupingService = Depends(get_grouping_service)):
    return _generate(Mode.MBTI, req, service)


@router.get("/{mode}", summary="Last generated groups with statistics")
def get_groups(mode: Mode, service: GroupingService = Depends(get_grouping_service)):
    result = service.latest(mode)
    if result is None:
        raise HTTPException(status_code=404, detail="No groups generated yet")
    return result.model_dump(mode="json", by_alias=True)


@router.get("/{mode}/students/{student_id}", summary="The saved group a student belongs to")
def get_student_group(mode: Mode, student_id: str, service: GroupingService = Depends(get_grouping_service)):
    try:
        number, members = service.group_of(mode, student_id)
    except StudentNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {
        "mode": mode.value,
        "student_id": student_id,
        "group_number": number,
        "members": [dict(to_payload(s), is_you=s.id == student_id) for s in members],
    }
