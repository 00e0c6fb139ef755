from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from recipe_assist.app.db.base import Base


class Recipe(Base):
    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    ingredients = Column(JSON, nullable=False, default=list)
    instructions = Column(Text, nullable=False)
    notes = Column(Text, nullable=False, default="")
    categories = Column(JSON, nullable=False, default=list)
    setup = Column(JSON, nullable=False, default=list)
    image_url = Column(String)
    parser_strategy = Column(String)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    evaluation_reports = relationship("EvaluationReport", back_populates="recipe", cascade="all, delete-orphan")


class EvaluationReport(Base):
    __tablename__ = "evaluation_reports"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True)
    persona = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    thread_id = Column(String)
    created_at = Column(DateTime, default=datetime.utcnow)

    recipe = relationship("Recipe", back_populates="evaluation_reports")
