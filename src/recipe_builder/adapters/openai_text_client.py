"""OpenAI Responses API client for recipe text generation."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from recipe_builder.services.recipes import RecipeGenerationError, TextGenerationClient


@dataclass
class OpenAITextClient(TextGenerationClient):
    """Text generation client backed by OpenAI Responses API."""

    client: AsyncOpenAI
    model: str
    store: bool = False

    @classmethod
    def create(cls, api_key: str, model: str, store: bool = False) -> "OpenAITextClient":
        """Create an OpenAI text generation client."""
        return cls(client=AsyncOpenAI(api_key=api_key), model=model, store=store)

    async def generate(self, prompt: str) -> str:
        """Send a single user prompt and return the output text."""
        response = await self.client.responses.create(
            model=self.model,
            input=[{"role": "user", "content": [{"type": "input_text", "text": prompt}]}],
            store=self.store,
        )
        output_text = response.output_text
        if not output_text:
            raise RecipeGenerationError("OpenAI returned an empty response")
        return output_text

    async def close(self) -> None:
        """Close the underlying OpenAI HTTP session."""
        await self.client.close()
