"""Submit payloads accepted by the game endpoints."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class WordGuessRequest(BaseModel):
    """A single five-letter guess."""
    model_config = ConfigDict(extra='forbid')

    guess: str = Field(..., description="Five letters, case-insensitive")


class GroupThemRequest(BaseModel):
    """Four words believed to share a group."""
    model_config = ConfigDict(extra='forbid')

    guess: List[str] = Field(..., description="Exactly four distinct words from the board")


# Path segment -> payload model, for the /<segment>/schema endpoint
REQUEST_MODELS = {
    'wordguess': WordGuessRequest,
    'groupthem': GroupThemRequest,
}
