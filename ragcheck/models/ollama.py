"""
Ollama API response models.
Only the fields the checks print are declared; the rest of each payload is ignored.
"""
from typing import List, Optional
from pydantic import BaseModel


class OllamaVersion(BaseModel):
    version: str


class OllamaModel(BaseModel):
    name: str
    size: Optional[int] = None


class OllamaTags(BaseModel):
    models: List[OllamaModel] = []


class GenerateResponse(BaseModel):
    model: Optional[str] = None
    response: str


class EmbedResponse(BaseModel):
    model: Optional[str] = None
    embeddings: List[List[float]]

    @property
    def dimensions(self) -> int:
        if not self.embeddings:
            return 0
        return len(self.embeddings[0])
