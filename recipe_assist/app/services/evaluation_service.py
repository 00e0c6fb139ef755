"""Nutrition evaluations of stored recipes, written by a chat persona."""

import logging
from typing import List

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from recipe_assist.app.core.config import Settings
from recipe_assist.app.db import models
from recipe_assist.app.schemas.chat import ChatMessage
from recipe_assist.app.services import chat_service, recipes_service
from recipe_assist.app.services.assistant_client import AssistantClient
from recipe_assist.app.services.llm_client import ChatCompletionClient

logger = logging.getLogger(__name__)

EVALUATION_REQUEST = (
    "Please evaluate the following recipe from a nutrition perspective. Cover the overall "
    "balance, estimated calories per serving, notable nutrients, and concrete suggestions to "
    "make it healthier without losing its character."
)


def _recipe_as_text(recipe: models.Recipe) -> str:
    lines = [f"Title: {recipe.title}"]
    if recipe.description:
        lines.append(f"Description: {recipe.description}")
    lines.append("Ingredients:")
    lines.extend(f"- {item}" for item in recipe.ingredients or [])
    lines.append(f"Instructions:\n{recipe.instructions}")
    if recipe.notes:
        lines.append(f"Notes: {recipe.notes}")
    return "\n".join(lines)


async def generate_report(
    db: Session,
    user_id: int,
    recipe_id: int,
    persona_key: str,
    chat_client: ChatCompletionClient,
    assistant_client: AssistantClient,
    settings: Settings,
) -> models.EvaluationReport:
    recipe = recipes_service.get_recipe(db, user_id, recipe_id)
    prompt = f"{EVALUATION_REQUEST}\n\n{_recipe_as_text(recipe)}"
    reply = await chat_service.send_message_with_persona(
        chat_client,
        assistant_client,
        settings,
        [ChatMessage(role="user", content=prompt)],
        persona_key,
        temperature=0.7,
        max_tokens=1000,
    )
    report = models.EvaluationReport(
        user_id=str(user_id),
        recipe_id=recipe.id,
        persona=persona_key,
        content=reply.message,
        thread_id=reply.thread_id,
    )
    db.add(report)
    db.commit()
    db.refresh(report)
    logger.info("Stored evaluation report %s for recipe %s", report.id, recipe.id)
    return report


def list_reports(db: Session, user_id: int) -> List[models.EvaluationReport]:
    stmt = (
        select(models.EvaluationReport)
        .where(models.EvaluationReport.user_id == str(user_id))
        .order_by(models.EvaluationReport.created_at.desc(), models.EvaluationReport.id.desc())
    )
    return list(db.scalars(stmt).all())


def get_report(db: Session, user_id: int, report_id: int) -> models.EvaluationReport:
    stmt = select(models.EvaluationReport).where(
        models.EvaluationReport.user_id == str(user_id), models.EvaluationReport.id == report_id
    )
    report = db.scalars(stmt).first()
    if not report:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Evaluation report not found")
    return report


def delete_report(db: Session, user_id: int, report_id: int) -> None:
    report = get_report(db, user_id, report_id)
    db.delete(report)
    db.commit()
