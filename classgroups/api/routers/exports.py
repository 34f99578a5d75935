# classgroups/api/routers/exports.py
"""
Export endpoints: CSV downloads of groups and MBTI statistics, JSON dumps.
"""
import io

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse

from classgroups.domain.models import Mode
from classgroups.services import export_service
from classgroups.api.deps import get_grouping_service
from classgroups.services.grouping_service import GroupingService

router = APIRouter()


def _csv_response(content: str, filename: str) -> StreamingResponse:
    return StreamingResponse(
        io.BytesIO(content.encode("utf-8")),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/{mode}/groups.csv", summary="Download the last groups as CSV")
def export_groups(mode: Mode, service: GroupingService = Depends(get_grouping_service)):
    result = service.latest(mode)
    if result is None or not result.groups:
        raise HTTPException(status_code=404, detail="No groups available to export. Please generate groups first.")
    if mode == Mode.INTERESTS:
        content = export_service.interest_groups_csv(result.groups)
        prefix = "group_results"
    else:
        content = export_service.mbti_groups_csv(result.groups)
        prefix = "mbti_group_results"
    return _csv_response(content, export_service.export_filename(prefix, "csv"))


@router.get("/mbti/stats.csv", summary="Download MBTI roster statistics as CSV")
def export_mbti_stats(service: GroupingService = Depends(get_grouping_service)):
    roster = service.student_service.roster(Mode.MBTI)
    if not roster:
        raise HTTPException(status_code=404, detail="No MBTI data available to export.")
    content = export_service.mbti_stats_csv(roster)
    return _csv_response(content, export_service.export_filename("mbti_statistics", "csv"))


@router.get("/{mode}/data.json", summary="Download roster and groups as JSON")
def export_data(mode: Mode, service: GroupingService = Depends(get_grouping_service)):
    roster = service.student_service.roster(mode)
    result = service.latest(mode)
    return export_service.data_export(mode, roster, result.groups if result else None)
