"""Scripted recipe generator for development and testing."""

from bakery.recipes.generator.port import GenerationError, RecipeGenerator


class FakeRecipeGenerator(RecipeGenerator):
    """Plays back a queue of outcomes: strings are returned, exceptions raised.

    Once the script runs out, every call returns ``default_text``.
    """

    def __init__(self, default_text: str = "Test Bread\n\nIngredients:\n- flour\n\nInstructions:\n1. Bake"):
        self.default_text = default_text
        self.script: list = []
        self.prompts: list[str] = []

    def configure(self, *outcomes) -> None:
        self.script = list(outcomes)

    def fail_with(self, status: int | None, times: int = 1) -> None:
        self.script = [GenerationError(f"Service error {status}", status=status) for _ in range(times)]

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.script:
            return self.default_text

        outcome = self.script.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    @property
    def calls(self) -> int:
        return len(self.prompts)

    def reset(self) -> None:
        self.script.clear()
        self.prompts.clear()
