"""OpenAI Responses API client for free-text recipe generation."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from mealvista.services.generation import RecipeTextClient


@dataclass
class OpenAIRecipeTextClient(RecipeTextClient):
    """Recipe text client backed by the OpenAI Responses API."""

    client: AsyncOpenAI
    model: str
    max_output_tokens: int = 800

    @classmethod
    def create(cls, api_key: str, model: str) -> "OpenAIRecipeTextClient":
        """Create an OpenAI recipe text client."""
        return cls(client=AsyncOpenAI(api_key=api_key), model=model)

    async def complete(self, prompt: str) -> str:
        """Send the prompt and return the generated text."""
        response = await self.client.responses.create(
            model=self.model,
            input=prompt,
            max_output_tokens=self.max_output_tokens,
            store=False,
        )
        return response.output_text or ""

    async def close(self) -> None:
        """Close the underlying OpenAI HTTP session."""
        await self.client.close()
