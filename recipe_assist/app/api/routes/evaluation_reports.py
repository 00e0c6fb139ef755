import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from recipe_assist.app.api.deps import get_chat_client, get_current_user, get_db_session, get_services
from recipe_assist.app.api.errors import llm_http_error
from recipe_assist.app.core.container import ServiceContainer
from recipe_assist.app.core.errors import LLMClientError
from recipe_assist.app.schemas.auth import CurrentUser
from recipe_assist.app.schemas.evaluation import EvaluationReportCreate, EvaluationReportRead
from recipe_assist.app.services import evaluation_service
from recipe_assist.app.services.llm_client import ChatCompletionClient
from recipe_assist.app.services.personas import PERSONAS

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/evaluation-reports", tags=["evaluation-reports"])


@router.post("", response_model=EvaluationReportRead, status_code=status.HTTP_201_CREATED)
async def create_report(
    payload: EvaluationReportCreate,
    db: Session = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
    chat_client: ChatCompletionClient = Depends(get_chat_client),
):
    if payload.persona not in PERSONAS:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Unknown persona: {payload.persona}")
    try:
        return await evaluation_service.generate_report(
            db,
            current_user.id,
            payload.recipe_id,
            payload.persona,
            chat_client,
            services.assistant_client,
            services.settings,
        )
    except LLMClientError as exc:
        logger.error("Evaluation of recipe %s failed: %s", payload.recipe_id, exc)
        raise llm_http_error(exc)


@router.get("", response_model=List[EvaluationReportRead])
def list_reports(
    db: Session = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    return evaluation_service.list_reports(db, current_user.id)


@router.get("/{report_id}", response_model=EvaluationReportRead)
def get_report(
    report_id: int,
    db: Session = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    return evaluation_service.get_report(db, current_user.id, report_id)


@router.delete("/{report_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_report(
    report_id: int,
    db: Session = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    evaluation_service.delete_report(db, current_user.id, report_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
