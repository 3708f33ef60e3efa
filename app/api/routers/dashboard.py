from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.deps import get_optimize_prompt_use_case, require_active_session
from app.api.errors import to_http_exception
from app.api.schemas.dashboard import DashboardResponse, PromptOptimizerRequest, PromptOptimizerResponse
from app.application.dto.access import AccessContext
from app.application.dto.prompt import ChatMessage, OptimizePromptInput
from app.application.use_cases.optimize_prompt import OptimizePromptUseCase
from app.domain.exceptions import DomainError


router = APIRouter()


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(context: AccessContext = Depends(require_active_session)):
    return DashboardResponse(email=context.email)


@router.post(
    "/api/prompt-optimizer",
    response_model=PromptOptimizerResponse,
    dependencies=[Depends(require_active_session)],
)
def optimize_prompt(
    req: PromptOptimizerRequest,
    use_case: OptimizePromptUseCase = Depends(get_optimize_prompt_use_case),
):
    try:
        output = use_case.execute(
            OptimizePromptInput(
                messages=[ChatMessage(role=message.role, content=message.content) for message in req.messages],
                preferred_mode=req.preferred_mode,
            )
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc

    return PromptOptimizerResponse(message=output.message, mode=output.mode)
