"""OpenAI provider implementation using the Chat Completions API."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, ValidationError as PydanticValidationError
from openai import AsyncOpenAI, OpenAIError
from errors import ClassificationError
from llm.providers.base import ExpenseExtractor
from llm.prompts.loader import PromptManager
from models.expense import Expense
from logger import get_logger

logger = get_logger()

PROMPT_NAME = "expense_extraction"


class ExpenseResponse(BaseModel):
    """JSON object the model is instructed to return."""

    model_config = ConfigDict(strict=True)

    category: str
    amount: float
    description: str


class OpenAIProvider(ExpenseExtractor):
    """OpenAI implementation that asks for a bare JSON expense object."""

    def __init__(
        self,
        api_key: str = "",
        model: Optional[str] = None,
        client=None,
        prompt_manager: Optional[PromptManager] = None,
    ):
        """Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key.
            model: Model to use (e.g., "gpt-4o-mini"). If None, uses prompt default.
            client: Pre-built async client; tests pass a stub here.
            prompt_manager: Prompt loader; defaults to the bundled prompts.
        """
        self.client = client if client is not None else AsyncOpenAI(api_key=api_key)
        self.model = model
        self.prompt_manager = prompt_manager or PromptManager()

    async def extract(self, text: str) -> Expense:
        rendered_prompt = self.prompt_manager.render_prompt(PROMPT_NAME, {"text": text})
        model = self.model or rendered_prompt["parameters"].get("model", "gpt-4o-mini")

        logger.debug(
            f"Calling OpenAI (model: {model}, prompt version: {rendered_prompt['version']})"
        )

        try:
            response = await self.client.chat.completions.create(
                model=model,
                messages=[
                    {"role": "system", "content": rendered_prompt["system_prompt"]},
                    {"role": "user", "content": rendered_prompt["user_prompt"]},
                ],
            )
        except OpenAIError as e:
            logger.error(f"OpenAI API error: {e}")
            raise ClassificationError(str(e)) from e

        if not response.choices:
            raise ClassificationError("no choices returned from OpenAI")

        content = response.choices[0].message.content or ""
        try:
            parsed = ExpenseResponse.model_validate_json(content)
        except PydanticValidationError as e:
            logger.warning(f"Unparseable OpenAI response: {content!r}")
            raise ClassificationError(
                f"failed to parse GPT response: {e}\nResponse: {content}"
            ) from e

        return Expense(
            category=parsed.category,
            amount=parsed.amount,
            description=parsed.description,
        )
