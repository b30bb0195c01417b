class TransportError(Exception):
    """Errore di rete/HTTP durante una chiamata al provider. Base di tutti gli errori del client."""


class RateLimitError(TransportError):
    """Sollevata quando viene superato il rate limit (HTTP 429) dopo tutti i tentativi di retry."""


class TransientAPIError(TransportError):
    """Sollevata quando errori transitori (5xx / timeout / connessione) persistono oltre i tentativi massimi."""


class HttpStatusError(TransportError):
    """Status HTTP non recuperabile (4xx diversi da 429, codici inattesi)."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code


class InvalidResponseError(TransportError):
    """Risposta 2xx con corpo non JSON o non oggetto."""


class ProviderError(TransportError):
    """Risposta 2xx con campo 'errors' valorizzato (chiave non valida, piano scaduto, ...)."""
