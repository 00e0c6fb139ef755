"""Chat persona configuration and system prompt assembly."""

from typing import Dict, List, Optional

from pydantic import BaseModel

from recipe_assist.app.core.config import Settings
from recipe_assist.app.schemas.chat import LiveSelections, PersonaInfo


class Persona(BaseModel):
    key: str
    name: str
    system_prompt: str
    description: str = ""
    # Settings attribute holding the assistant id, for assistant-powered personas
    assistant_setting: Optional[str] = None


RECIPE_JSON_DIRECTIVE = """When providing a complete recipe, format it as JSON in a ```json code block:

```json
{
  "title": "Recipe Name",
  "description": "One or two sentences",
  "ingredients": [{"item": "ingredient name", "amount": "quantity", "prep": "preparation"}],
  "instructions": "Step-by-step cooking instructions",
  "setup": ["Prep time: X minutes", "Cook time: X minutes", "Equipment needed"],
  "categories": ["Course: Main", "Cuisine: Type", "Technique: Method"],
  "notes": "Tips, variations, and additional notes"
}
```

After a complete recipe, ask: "Ready to Create and Save the Recipe?\""""

PERSONAS: Dict[str, Persona] = {
    "chef": Persona(
        key="chef",
        name="Chef Marco",
        description="Experienced Italian chef focused on Mediterranean technique",
        system_prompt=(
            "You are Chef Marco, an experienced Italian chef. You are warm and encouraging, "
            "explain techniques and Italian cooking terms, and help users build recipes step by step."
        ),
    ),
    "nutritionist": Persona(
        key="nutritionist",
        name="Dr. Sarah",
        description="Registered dietitian focused on balanced, healthy meals",
        system_prompt=(
            "You are Dr. Sarah, a registered dietitian. You help users create nutritious, balanced "
            "recipes, respect dietary restrictions and explain the benefits of ingredients."
        ),
    ),
    "homeCook": Persona(
        key="homeCook",
        name="Aunt Jenny",
        description="Friendly home cook with practical, family-friendly recipes",
        system_prompt=(
            "You are Aunt Jenny, a home cook who has fed family and friends for decades. You favor "
            "simple techniques, budget-friendly ingredients and comforting meals."
        ),
    ),
    "assistantNutritionist": Persona(
        key="assistantNutritionist",
        name="Dr. Sage Vitalis",
        description="AI nutritionist with personalized meal planning and health insights",
        system_prompt=(
            "You are Dr. Sage Vitalis, a nutritionist specialized in personalized nutrition. You "
            "give evidence-based recommendations tailored to the user's health goals."
        ),
        assistant_setting="assistant_nutritionist_id",
    ),
}


def get_persona(key: str) -> Persona:
    try:
        return PERSONAS[key]
    except KeyError:
        raise ValueError(f"Unknown persona: {key}") from None


def assistant_id_for(persona: Persona, settings: Settings) -> Optional[str]:
    """Return the assistant id when the persona is assistant-powered and configured."""
    if not persona.assistant_setting:
        return None
    return getattr(settings, persona.assistant_setting, None)


def list_personas(settings: Settings) -> List[PersonaInfo]:
    return [
        PersonaInfo(
            key=p.key,
            name=p.name,
            description=p.description,
            assistant_powered=assistant_id_for(p, settings) is not None,
        )
        for p in PERSONAS.values()
    ]


def _joined(values: List[str], empty: str) -> str:
    return ", ".join(values) if values else empty


def build_system_prompt(persona: Persona, live_selections: Optional[LiveSelections] = None) -> str:
    prompt = f"{persona.system_prompt}\n\n{RECIPE_JSON_DIRECTIVE}"
    if live_selections:
        prompt += (
            "\n\nCurrent user selections:\n"
            f"- Categories: {_joined(live_selections.categories, 'None selected')}\n"
            f"- Cuisines: {_joined(live_selections.cuisines, 'None selected')}\n"
            f"- Moods: {_joined(live_selections.moods, 'None selected')}\n"
            f"- Available Ingredients: {_joined(live_selections.available_ingredients, 'All ingredients available')}\n"
            "\nUse these selections to tailor your recommendations."
        )
    return prompt
