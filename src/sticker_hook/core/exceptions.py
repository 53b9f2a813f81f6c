"""Custom exceptions for Sticker Hook."""


class StickerHookError(Exception):
    """Base exception for sticker hook operations."""

    pass


class UpstreamError(StickerHookError):
    """Raised when a remote service call fails."""

    def __init__(
        self,
        upstream: str,
        message: str = "",
        status_code: int | None = None,
        body: str = "",
    ):
        self.upstream = upstream
        self.status_code = status_code
        self.body = body
        super().__init__(message or f"Upstream error: {upstream}")


class CatalogFetchError(UpstreamError):
    """Raised when the sticker catalog cannot be fetched."""

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        super().__init__(
            "catalog",
            f"Error fetching stickers: {message}",
            status_code=status_code,
            body=body,
        )


class CatalogSchemaError(StickerHookError):
    """Raised when the catalog response has an unexpected shape."""

    pass


class DeliveryError(UpstreamError):
    """Raised when a chat message cannot be delivered.

    The message text is shown verbatim to the user who issued the command.
    """

    def __init__(self, reason: str, status_code: int | None = None, body: str = ""):
        super().__init__(
            "slack",
            f"Error posting to Slack: {reason}\n\n{body}",
            status_code=status_code,
            body=body,
        )
        self.reason = reason


class PersistenceError(StickerHookError):
    """Raised when the alias document store cannot be read or written."""

    def __init__(self, document_id: str, message: str = ""):
        self.document_id = document_id
        super().__init__(message or f"Persistence error for document {document_id}")
