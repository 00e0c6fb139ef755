from typing import List

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from recipe_assist.app.db import models
from recipe_assist.app.schemas.recipe import RecipeCreate, RecipeUpdate


def create_recipe(db: Session, user_id: int, data: RecipeCreate) -> models.Recipe:
    recipe = models.Recipe(user_id=str(user_id), **data.model_dump())
    db.add(recipe)
    db.commit()
    db.refresh(recipe)
    return recipe


def list_recipes(db: Session, user_id: int) -> List[models.Recipe]:
    stmt = (
        select(models.Recipe)
        .where(models.Recipe.user_id == str(user_id))
        .order_by(models.Recipe.created_at.desc(), models.Recipe.id.desc())
    )
    return list(db.scalars(stmt).all())


def get_recipe(db: Session, user_id: int, recipe_id: int) -> models.Recipe:
    stmt = select(models.Recipe).where(models.Recipe.user_id == str(user_id), models.Recipe.id == recipe_id)
    recipe = db.scalars(stmt).first()
    if not recipe:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found")
    return recipe


def update_recipe(db: Session, user_id: int, recipe_id: int, data: RecipeUpdate) -> models.Recipe:
    recipe = get_recipe(db, user_id, recipe_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(recipe, field, value)
    db.commit()
    db.refresh(recipe)
    return recipe


def delete_recipe(db: Session, user_id: int, recipe_id: int) -> None:
    recipe = get_recipe(db, user_id, recipe_id)
    db.delete(recipe)
    db.commit()
