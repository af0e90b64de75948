from __future__ import annotations

from typing import Optional


class RemoteStoreError(Exception):
    """Base class for failures talking to the remote task store."""


class FetchFailed(RemoteStoreError):
    """The request never produced a response (connection, DNS, protocol error)."""


class ServerRejected(RemoteStoreError):
    """
    The store answered with a non-2xx status, or with a body that is not a
    valid task payload.
    """

    def __init__(self, status_code: int, detail: Optional[str] = None) -> None:
        message = f"remote task store responded with HTTP {status_code}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail
