# External package imports
from fastapi import APIRouter

# Local application imports
from ...application.dto.device_dto import MetricsSummaryResponse
from ...application.use_cases.device import GetMetricsSummaryUseCase
from ...core.exceptions import EdgeMetricsError
from ...di.container import get_container
from .errors import to_http_exception


router = APIRouter(tags=["metrics"])


@router.get("/summary", response_model=MetricsSummaryResponse)
async def get_metrics_summary() -> MetricsSummaryResponse:
    """Fleet totals, health counts and device count per type"""
    container = get_container()
    summary_use_case = container.get(GetMetricsSummaryUseCase)

    try:
        return await summary_use_case.execute()
    except EdgeMetricsError as exception:
        raise to_http_exception(exception)
