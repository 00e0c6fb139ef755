from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from recipe_assist.app.services.recipe_parsing.models import ParsedRecipe


class ChatMessage(BaseModel):
    role: Literal["user", "assistant", "system"]
    content: str


class LiveSelections(BaseModel):
    categories: List[str] = Field(default_factory=list)
    cuisines: List[str] = Field(default_factory=list)
    moods: List[str] = Field(default_factory=list)
    available_ingredients: List[str] = Field(default_factory=list, alias="availableIngredients")

    model_config = ConfigDict(populate_by_name=True)


class ChatRequest(BaseModel):
    messages: List[ChatMessage] = Field(min_length=1)
    model: Optional[str] = None
    temperature: float = 0.8
    max_tokens: int = 800
    persona: str = "homeCook"
    user_id: Optional[str] = Field(None, alias="userId")
    live_selections: Optional[LiveSelections] = Field(None, alias="liveSelections")
    thread_id: Optional[str] = Field(None, alias="threadId")

    model_config = ConfigDict(populate_by_name=True)


class Usage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class ChatReply(BaseModel):
    message: str
    usage: Optional[Usage] = None
    recipe: Optional[ParsedRecipe] = None
    thread_id: Optional[str] = None


# Provider response, validated at the boundary before anything reads it.
class CompletionMessage(BaseModel):
    role: str = "assistant"
    content: Optional[str] = None


class CompletionChoice(BaseModel):
    index: int = 0
    message: CompletionMessage
    finish_reason: Optional[str] = None


class ChatCompletionResponse(BaseModel):
    id: Optional[str] = None
    model: Optional[str] = None
    choices: List[CompletionChoice] = Field(min_length=1)
    usage: Optional[Usage] = None

    @property
    def content(self) -> Optional[str]:
        return self.choices[0].message.content


class StructuredRecipeRequest(BaseModel):
    messages: List[ChatMessage] = Field(min_length=1)
    persona: str = "chef"


class PersonaInfo(BaseModel):
    key: str
    name: str
    description: Optional[str] = None
    assistant_powered: bool = False


# Assistants API objects, validated before anything reads them.
class AssistantObject(BaseModel):
    """A thread or message creation reply; only the id is used."""

    id: str = Field(min_length=1)


class RunError(BaseModel):
    code: Optional[str] = None
    message: Optional[str] = None


class AssistantRun(BaseModel):
    id: str = Field(min_length=1)
    status: str
    last_error: Optional[RunError] = None


class MessageText(BaseModel):
    value: str


class MessageContentPart(BaseModel):
    type: str
    text: Optional[MessageText] = None


class ThreadMessage(BaseModel):
    id: str
    role: str = "assistant"
    content: List[MessageContentPart] = Field(default_factory=list)

    @property
    def text(self) -> Optional[str]:
        for part in self.content:
            if part.type == "text" and part.text is not None:
                return part.text.value
        return None


class ThreadMessageList(BaseModel):
    data: List[ThreadMessage] = Field(default_factory=list)
