"""Recipe generator backed by the Gemini ``generateContent`` REST endpoint."""

import requests

from bakery.recipes.generator.port import GenerationError, RecipeGenerator

API_ROOT = "https://generativelanguage.googleapis.com/v1beta/models"


class GeminiRecipeGenerator(RecipeGenerator):
    def __init__(self, api_key: str | None, model: str = "gemini-2.0-flash", timeout: float = 30.0, session=None):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def url(self) -> str:
        return f"{API_ROOT}/{self.model}:generateContent"

    def generate(self, prompt: str) -> str:
        if not self.api_key:
            raise GenerationError("Recipe service is not configured")

        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        try:
            response = self.session.post(
                self.url,
                json=payload,
                headers={"x-goog-api-key": self.api_key},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise GenerationError(f"Recipe service unreachable: {exc}") from exc

        if response.status_code != 200:
            raise GenerationError(
                f"Recipe service returned {response.status_code}",
                status=response.status_code,
            )

        try:
            body = response.json()
            parts = body["candidates"][0]["content"]["parts"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise GenerationError("Recipe service returned an unexpected response") from exc

        text = "".join(part.get("text", "") for part in parts).strip()
        if not text:
            raise GenerationError("Recipe service returned an empty recipe")
        return text
