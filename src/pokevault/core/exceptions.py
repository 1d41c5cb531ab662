"""Exceptions raised by the catalog, favorites and profile layers."""


class PokeVaultError(Exception):
    """Base class for all PokeVault errors."""


class UpstreamError(PokeVaultError):
    """PokeAPI answered with a non-success status or an unreadable body."""

    def __init__(self, resource: str, identifier: int | str, status: int | None, detail: str = ""):
        self.resource = resource
        self.identifier = identifier
        self.status = status
        message = f"PokeAPI {resource} request failed (id {identifier})"
        if status is not None:
            message += f": HTTP {status}"
        if detail:
            message += f" {detail}"
        super().__init__(message)


class CatalogRefreshError(PokeVaultError):
    """One or more ids could not be cached during a refresh."""

    def __init__(self, failures: list[Exception]):
        self.failures = failures
        details = "; ".join(str(failure) for failure in failures) or "unknown error"
        super().__init__(f"Failed to fetch Pokemon data: {details}")


class AuthenticationRequiredError(PokeVaultError):
    """The operation needs a resolved user and none was given."""


class FavoriteExistsError(PokeVaultError):
    """The Pokemon is already in the user's favorites."""

    def __init__(self, pokemon_id: int):
        self.pokemon_id = pokemon_id
        super().__init__("Pokemon already in favorites")


class FavoriteNotFoundError(PokeVaultError):
    """The Pokemon is not in the user's favorites."""

    def __init__(self, pokemon_id: int):
        self.pokemon_id = pokemon_id
        super().__init__("Pokemon not in favorites")
