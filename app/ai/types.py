from typing import Protocol


class AIClient(Protocol):
    provider: str
    model: str

    async def complete(self, prompt: str) -> str: ...
