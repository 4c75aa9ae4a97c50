"""CORS configuration for the browser front end.

The share links are opened from arbitrary origins, so reads are open; the
request id header is exposed so the UI can quote it in error reports.
"""

from __future__ import annotations

from typing import Iterable
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from feedback_forms.http.request_id import REQUEST_ID_HEADER


EXPOSE_HEADERS: list[str] = [REQUEST_ID_HEADER, "Location"]


def apply_cors(app: FastAPI, *, origins: Iterable[str] | None = None) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(origins or ["*"]),
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=EXPOSE_HEADERS,
    )


__all__ = ["apply_cors", "EXPOSE_HEADERS"]
