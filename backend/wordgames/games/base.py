"""The contract every puzzle engine satisfies.

An engine is stateless: game state is an immutable value passed in and a
new value handed back. ``clean`` validates raw input against the state and
``apply`` computes the next state; ``guess`` chains the two.
"""

from typing import Any, Generic, Tuple, TypeVar

S = TypeVar('S')  # game state
V = TypeVar('V')  # validated guess

IN_PROGRESS = 'in_progress'
WON = 'won'
LOST = 'lost'


class GameEngine(Generic[S, V]):
    kind: str = ''

    def new_state(self, puzzle) -> S:
        """Zero state for a session that has not played yet."""
        raise NotImplementedError

    def clean(self, state: S, raw: Any) -> V:
        raise NotImplementedError

    def apply(self, state: S, guess: V) -> Tuple[S, Any]:
        raise NotImplementedError

    def guess(self, state: S, raw: Any) -> S:
        new_state, _outcome = self.apply(state, self.clean(state, raw))
        return new_state

    def dump_state(self, state: S) -> dict:
        return state.to_dict()

    def present(self, state: S) -> dict:
        """What a player is shown; defaults to the stored form."""
        return self.dump_state(state)

    def load_state(self, data: dict, puzzle) -> S:
        raise NotImplementedError
