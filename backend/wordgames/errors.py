"""Exception types shared by the engines, the session store and the routes."""


class WordGamesError(Exception):
    """Base class for every error the service raises on purpose."""


# Game rule errors. Raising one of these never changes stored state.

class GameError(WordGamesError):
    pass


class InvalidGuess(GameError):
    """A guessed token is not part of the game's vocabulary."""


class ValidationError(InvalidGuess):
    """The raw input has the wrong shape, length or characters."""


class AlreadyUsedWord(GameError):
    def __init__(self, word):
        super().__init__(f"Word has already been correctly used: {word}")
        self.word = word


class DuplicateGuess(GameError):
    def __init__(self):
        super().__init__("Guess already made.")


class GameOver(GameError):
    def __init__(self):
        super().__init__("You won today's challenge! Try again tomorrow!")


class MaximumGuesses(GameError):
    def __init__(self):
        super().__init__("You have reached the maximum number of guesses")


# Session and storage errors

class PersistenceError(WordGamesError):
    """The storage backend failed; the request can be retried."""


class CorruptedStateError(WordGamesError):
    """A stored game blob no longer decodes against the current schema."""


class StaleSessionError(WordGamesError):
    """The session changed since its credentials were resolved."""

    def __init__(self, stable_id):
        super().__init__("Your game was updated from another window. Reload and try again.")
        self.stable_id = stable_id


class CredentialMismatch(WordGamesError):
    """Presented credentials do not match the stored ones (strict mode only)."""

    def __init__(self):
        super().__init__("Session credentials are invalid or expired")


class ProviderError(WordGamesError):
    """Today's puzzle could not be fetched."""
